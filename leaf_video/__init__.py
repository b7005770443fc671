"""
Leaf Video Service

HTTP handlers for the video resource of a video-sharing platform: upload
registration, editing, status polling, public retrieval and review submission.
"""

__version__ = "1.0.0"

from .main import LeafVideoSystem

__all__ = ["LeafVideoSystem"]
