"""
Video Application Service.

Orchestrates the video use cases: ownership and link checks, persistence,
review submission and view counting.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from ..domain.errors import (
    VideoAPIError,
    InvalidLinkError,
    PartitionError,
    VideoNotExistError,
    ResourceNotExistError,
)
from ..domain.interfaces import (
    VideoRepository,
    ResourceRepository,
    PartitionRepository,
    UserRepository,
    UploadTracker,
    ClickLimiter,
)
from ..domain.models import Video, Resource, UserInfo, VideoDraft, VideoChanges, VideoStatus, PageRequest, VideoPage
from ...core.logging_config import get_error_tracker


CREATE_VIDEO_FAILED = "failed to create video"


@dataclass
class VideoDetail:
    """Public video together with what the detail page shows next to it"""
    video: Video
    author: Optional[UserInfo]
    clicks: int
    resources: List[Resource] = field(default_factory=list)


class VideoService:
    """Application service for the video resource"""

    def __init__(
        self,
        video_repository: VideoRepository,
        resource_repository: ResourceRepository,
        partition_repository: PartitionRepository,
        user_repository: UserRepository,
        upload_tracker: UploadTracker,
        click_limiter: ClickLimiter
    ):
        self.video_repository = video_repository
        self.resource_repository = resource_repository
        self.partition_repository = partition_repository
        self.user_repository = user_repository
        self.upload_tracker = upload_tracker
        self.click_limiter = click_limiter
        self.logger = logging.getLogger(__name__)
        self.error_tracker = get_error_tracker("video_service")

    async def upload_video_info(self, user_id: int, draft: VideoDraft) -> int:
        """Register an uploaded video and its like record, returning the video ID"""
        if not await self._is_uploaded_by(draft.cover, user_id):
            self.logger.error(f"Invalid cover link {draft.cover!r} for user {user_id}")
            raise InvalidLinkError()

        if not await self.is_subpartition(draft.partition_id):
            self.logger.error(f"Partition {draft.partition_id} does not exist")
            raise PartitionError()

        try:
            vid = await self.video_repository.create_with_like(draft.to_video(user_id))
        except SQLAlchemyError as e:
            self.error_tracker.log_error(e, "create_video", {"uid": user_id, "title": draft.title})
            raise VideoAPIError(CREATE_VIDEO_FAILED)

        self.logger.info(f"User {user_id} created video {vid}")
        return vid

    async def modify_video_info(self, user_id: int, changes: VideoChanges) -> None:
        """Update editable fields of one of the caller's videos"""
        video = await self._get_owned_video(user_id, changes.vid)

        if changes.cover != video.cover and not await self._is_uploaded_by(changes.cover, user_id):
            self.logger.error(f"Invalid cover link {changes.cover!r} for user {user_id}")
            raise InvalidLinkError()

        await self.video_repository.update_info(changes)
        self.logger.info(f"User {user_id} modified video {changes.vid}")

    async def get_video_status(self, user_id: int, vid: int) -> Tuple[Video, List[Resource]]:
        """Video with every attached resource, visible to its author only"""
        video = await self._get_owned_video(user_id, vid)
        resources = await self.resource_repository.get_by_video(vid, public_only=False)
        return video, resources

    async def get_video_by_id(self, vid: int, client_ip: str) -> VideoDetail:
        """Public video details; counts one view per client ip per window"""
        video = await self.video_repository.get_by_id(vid)
        if not video or not video.is_public:
            self.logger.error(f"Video {vid} does not exist or is not public")
            raise VideoNotExistError()

        author = await self.user_repository.get_user_info(video.uid)
        resources = await self.resource_repository.get_by_video(vid, public_only=True)

        if await self.click_limiter.try_register(vid, client_ip):
            await self.video_repository.increment_clicks(vid)
        clicks = await self.video_repository.get_clicks(vid)

        return VideoDetail(video=video, author=author, clicks=clicks, resources=resources)

    async def submit_review(self, user_id: int, vid: int) -> None:
        """Move a video with at least one resource to the review queue"""
        await self._get_owned_video(user_id, vid)

        if await self.resource_repository.count_by_video(vid) == 0:
            self.logger.error(f"Video {vid} has no resources to review")
            raise ResourceNotExistError()

        await self.video_repository.update_status(vid, VideoStatus.WAITING_REVIEW)
        self.logger.info(f"Video {vid} submitted for review")

    async def delete_video(self, user_id: int, vid: int) -> None:
        await self._get_owned_video(user_id, vid)
        await self.video_repository.delete(vid)
        self.logger.info(f"User {user_id} deleted video {vid}")

    async def list_videos(self, page: PageRequest, partition_id: int = 0) -> VideoPage:
        """Approved videos; a top-level partition includes its sub-partitions"""
        if partition_id == 0:
            return await self.video_repository.list_public(page)

        partition = await self.partition_repository.get_by_id(partition_id)
        if not partition:
            self.logger.error(f"Partition {partition_id} does not exist")
            raise PartitionError()

        if partition.is_subpartition:
            partition_ids = [partition.id]
        else:
            children = await self.partition_repository.get_children(partition.id)
            partition_ids = [partition.id] + [child.id for child in children]

        return await self.video_repository.list_public(page, partition_ids)

    async def list_recommended_videos(self, limit: int) -> List[Video]:
        """Most clicked approved videos"""
        return await self.video_repository.list_popular(limit)

    async def list_upload_videos(self, user_id: int, page: PageRequest) -> VideoPage:
        return await self.video_repository.list_by_user(user_id, page, public_only=False)

    async def list_user_videos(self, uid: int, page: PageRequest) -> VideoPage:
        return await self.video_repository.list_by_user(uid, page, public_only=True)

    async def search_videos(self, keywords: str, page: PageRequest) -> VideoPage:
        return await self.video_repository.search_public(keywords, page)

    async def is_subpartition(self, partition_id: int) -> bool:
        partition = await self.partition_repository.get_by_id(partition_id)
        return partition is not None and partition.is_subpartition

    async def _get_owned_video(self, user_id: int, vid: int) -> Video:
        """Non-owners get the same error as for a missing video"""
        video = await self.video_repository.get_by_id(vid)
        if not video or not video.is_owned_by(user_id):
            self.logger.error(f"Video {vid} does not exist for user {user_id}")
            raise VideoNotExistError()
        return video

    async def _is_uploaded_by(self, url: str, user_id: int) -> bool:
        return await self.upload_tracker.get_uploader(url) == user_id
