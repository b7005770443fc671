"""
Video Domain Models.

Pure business entities and value objects for the video resource.
These models contain no external dependencies and represent core business concepts.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import List, Optional


class VideoStatus(IntEnum):
    """Review/processing status of a video or resource"""
    AUDIT_APPROVED = 0
    CREATED_VIDEO = 100
    VIDEO_PROCESSING = 200
    SUBMIT_REVIEW = 300
    WAITING_REVIEW = 500
    REVIEW_FAILED = 2000
    PROCESSING_FAIL = 2100


@dataclass
class Video:
    """Video entity"""
    uid: int
    title: str
    cover: str
    partition_id: int
    desc: str = ""
    copyright: bool = False
    tags: str = ""
    duration: float = 0.0
    clicks: int = 0
    status: VideoStatus = VideoStatus.CREATED_VIDEO
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_public(self) -> bool:
        """Only approved videos are visible to everyone"""
        return self.status == VideoStatus.AUDIT_APPROVED

    def is_owned_by(self, user_id: Optional[int]) -> bool:
        return user_id is not None and self.uid == user_id


@dataclass
class Resource:
    """Media asset attached to a video"""
    id: int
    vid: int
    url: str
    title: str = ""
    duration: float = 0.0
    quality: int = 0
    status: VideoStatus = VideoStatus.VIDEO_PROCESSING


@dataclass(frozen=True)
class Partition:
    """Category a video is filed under"""
    id: int
    content: str
    parent_id: int = 0

    @property
    def is_subpartition(self) -> bool:
        return self.parent_id != 0


@dataclass(frozen=True)
class UserInfo:
    """Author details shown next to a video"""
    id: int
    name: str
    avatar: str = ""
    sign: str = ""


@dataclass(frozen=True)
class VideoDraft:
    """Fields submitted when registering an uploaded video"""
    title: str
    cover: str
    partition_id: int
    desc: str = ""
    copyright: bool = False
    tags: str = ""

    def to_video(self, uid: int) -> Video:
        return Video(
            uid=uid,
            title=self.title,
            cover=self.cover,
            partition_id=self.partition_id,
            desc=self.desc,
            copyright=self.copyright,
            tags=self.tags,
        )


@dataclass(frozen=True)
class VideoChanges:
    """Editable video fields"""
    vid: int
    title: str
    cover: str
    desc: str = ""
    copyright: bool = False
    tags: str = ""


@dataclass(frozen=True)
class PageRequest:
    """Pagination value object"""
    page: int = 1
    page_size: int = 10

    def __post_init__(self):
        if self.page < 1:
            raise ValueError("Page must be at least 1")
        if self.page_size < 1:
            raise ValueError("Page size must be at least 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass
class VideoPage:
    """One page of videos plus the total number of matches"""
    total: int
    videos: List[Video] = field(default_factory=list)
