"""
Video Domain Layer.

Contains pure business logic and domain models for the video resource.
No external dependencies - only Python standard library and domain concepts.
"""

from .models import Video, Resource, Partition, UserInfo, VideoStatus, VideoDraft, VideoChanges, PageRequest, VideoPage
from .interfaces import VideoRepository, ResourceRepository, PartitionRepository, UserRepository, UploadTracker, ClickLimiter
from .errors import (
    ErrorCode,
    VideoAPIError,
    RequestParamError,
    UnauthorizedError,
    InvalidLinkError,
    PartitionError,
    VideoNotExistError,
    ResourceNotExistError,
)

__all__ = [
    "Video",
    "Resource",
    "Partition",
    "UserInfo",
    "VideoStatus",
    "VideoDraft",
    "VideoChanges",
    "PageRequest",
    "VideoPage",
    "VideoRepository",
    "ResourceRepository",
    "PartitionRepository",
    "UserRepository",
    "UploadTracker",
    "ClickLimiter",
    "ErrorCode",
    "VideoAPIError",
    "RequestParamError",
    "UnauthorizedError",
    "InvalidLinkError",
    "PartitionError",
    "VideoNotExistError",
    "ResourceNotExistError",
]
