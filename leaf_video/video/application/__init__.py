"""
Video Application Layer.

Contains use cases and application services that orchestrate domain logic
and coordinate between domain and infrastructure layers.
"""

from .video_service import VideoService, VideoDetail

__all__ = [
    "VideoService",
    "VideoDetail",
]
