"""
Video Presentation Layer.

Contains HTTP controllers, request/response models, and API route definitions.
"""

from .context import RequestContext, create_context_dependency
from .controllers import VideoController
from .schemas import Envelope, ok, error_envelope
from .routes import create_video_routes

__all__ = [
    "RequestContext",
    "create_context_dependency",
    "VideoController",
    "Envelope",
    "ok",
    "error_envelope",
    "create_video_routes",
]
