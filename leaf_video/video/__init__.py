"""
Video Module for the Leaf video service.

Upload registration, editing, status polling, public retrieval and review
submission for the video resource, following clean architecture principles.
"""

from .domain.models import Video, Resource, VideoStatus
from .application.video_service import VideoService
from .integration import VideoModule

__all__ = ["Video", "Resource", "VideoStatus", "VideoService", "VideoModule"]
