"""
Video Domain Interfaces.

Abstract interfaces that define contracts for the video use cases.
These interfaces allow dependency inversion - domain logic doesn't depend on infrastructure.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Video, Resource, Partition, UserInfo, VideoChanges, VideoStatus, PageRequest, VideoPage


class VideoRepository(ABC):
    """Abstract repository for video records"""

    @abstractmethod
    async def get_by_id(self, vid: int) -> Optional[Video]:
        """Get video by ID"""
        pass

    @abstractmethod
    async def create_with_like(self, video: Video) -> int:
        """Insert a video and its like record atomically, returning the new ID"""
        pass

    @abstractmethod
    async def update_info(self, changes: VideoChanges) -> None:
        """Persist edited video fields"""
        pass

    @abstractmethod
    async def update_status(self, vid: int, status: VideoStatus) -> None:
        """Set the review status of a video"""
        pass

    @abstractmethod
    async def delete(self, vid: int) -> None:
        """Delete a video together with its resources and like record"""
        pass

    @abstractmethod
    async def increment_clicks(self, vid: int) -> None:
        """Add one click to the aggregate counter"""
        pass

    @abstractmethod
    async def get_clicks(self, vid: int) -> int:
        """Get the aggregate click count"""
        pass

    @abstractmethod
    async def list_public(
        self,
        page: PageRequest,
        partition_ids: Optional[List[int]] = None
    ) -> VideoPage:
        """List approved videos, optionally limited to some partitions"""
        pass

    @abstractmethod
    async def list_by_user(
        self,
        uid: int,
        page: PageRequest,
        public_only: bool = True
    ) -> VideoPage:
        """List videos uploaded by a user"""
        pass

    @abstractmethod
    async def search_public(self, keywords: str, page: PageRequest) -> VideoPage:
        """List approved videos whose title contains the keywords"""
        pass

    @abstractmethod
    async def list_popular(self, limit: int) -> List[Video]:
        """Most clicked approved videos"""
        pass


class ResourceRepository(ABC):
    """Abstract repository for media assets attached to videos"""

    @abstractmethod
    async def get_by_video(self, vid: int, public_only: bool) -> List[Resource]:
        """Get resources of a video, optionally only the approved ones"""
        pass

    @abstractmethod
    async def count_by_video(self, vid: int) -> int:
        """Count every resource attached to a video"""
        pass


class PartitionRepository(ABC):
    """Abstract repository for partitions"""

    @abstractmethod
    async def get_by_id(self, partition_id: int) -> Optional[Partition]:
        """Get partition by ID"""
        pass

    @abstractmethod
    async def get_children(self, parent_id: int) -> List[Partition]:
        """Get sub-partitions of a partition"""
        pass


class UserRepository(ABC):
    """Abstract read-only access to user profiles"""

    @abstractmethod
    async def get_user_info(self, uid: int) -> Optional[UserInfo]:
        """Get display information for a user"""
        pass


class UploadTracker(ABC):
    """Abstract cache attributing uploaded files to their uploader"""

    @abstractmethod
    async def track_upload(self, url: str, uid: int) -> None:
        """Remember who uploaded a file"""
        pass

    @abstractmethod
    async def get_uploader(self, url: str) -> Optional[int]:
        """Get the uploader of a file, None when unknown or expired"""
        pass

    @abstractmethod
    async def cleanup_cache(self) -> int:
        """Remove expired attributions"""
        pass


class ClickLimiter(ABC):
    """Abstract per-client rate limit for view counting"""

    @abstractmethod
    async def try_register(self, vid: int, client_ip: str) -> bool:
        """Record a view and return True unless the client viewed the video within the window"""
        pass

    @abstractmethod
    async def cleanup_cache(self) -> int:
        """Remove expired view records"""
        pass
