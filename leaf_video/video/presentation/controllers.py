"""
Video HTTP Controllers.

Validate bound requests, call the video service and map results to envelopes.
"""

import logging
from typing import List

from ..application.video_service import VideoService, VideoDetail
from ..domain.errors import RequestParamError
from ..domain.models import Video, Resource, UserInfo, VideoDraft, VideoChanges, PageRequest, VideoPage
from ..domain.validation import is_valid_title, title_error, is_valid_page, page_error
from ...core.config import VideoConfig
from .context import RequestContext
from .schemas import (
    Envelope, ok,
    UploadVideoRequest, ModifyVideoRequest, IdRequest,
    ResourceView, ResourceStatusView, AuthorView,
    VideoStatusView, VideoDetailView, VideoListItem, UploadVideoItem,
    VideoListData, UploadVideoListData, RecommendedVideoData,
)


class VideoController:
    """Controller for the video resource"""

    def __init__(self, video_service: VideoService, video_config: VideoConfig):
        self.video_service = video_service
        self.video_config = video_config
        self.logger = logging.getLogger(__name__)

    async def upload_video_info(self, request: UploadVideoRequest, context: RequestContext) -> Envelope:
        user_id = context.require_user()
        self._validate_title(request.title)

        draft = VideoDraft(
            title=request.title,
            cover=request.cover,
            partition_id=request.partition,
            desc=request.desc,
            copyright=request.copyright,
            tags=request.tags,
        )
        vid = await self.video_service.upload_video_info(user_id, draft)
        return ok({"vid": vid})

    async def modify_video_info(self, request: ModifyVideoRequest, context: RequestContext) -> Envelope:
        user_id = context.require_user()
        self._validate_title(request.title)

        changes = VideoChanges(
            vid=request.vid,
            title=request.title,
            cover=request.cover,
            desc=request.desc,
            copyright=request.copyright,
            tags=request.tags,
        )
        await self.video_service.modify_video_info(user_id, changes)
        return ok()

    async def get_video_status(self, vid: int, context: RequestContext) -> Envelope:
        user_id = context.require_user()
        video, resources = await self.video_service.get_video_status(user_id, vid)
        return ok({"video": self._to_status_view(video, resources)})

    async def get_video_by_id(self, vid: int, context: RequestContext) -> Envelope:
        detail = await self.video_service.get_video_by_id(vid, context.client_ip)
        return ok({"video": self._to_detail_view(detail)})

    async def submit_review(self, request: IdRequest, context: RequestContext) -> Envelope:
        user_id = context.require_user()
        await self.video_service.submit_review(user_id, request.id)
        return ok()

    async def delete_video(self, request: IdRequest, context: RequestContext) -> Envelope:
        user_id = context.require_user()
        await self.video_service.delete_video(user_id, request.id)
        return ok()

    async def list_videos(self, page: int, page_size: int, partition: int) -> Envelope:
        result = await self.video_service.list_videos(self._page(page, page_size), partition)
        return ok(self._to_list_data(result))

    async def list_recommended_videos(self, page_size: int) -> Envelope:
        limit = self._page(1, page_size).page_size
        videos = await self.video_service.list_recommended_videos(limit)
        return ok(RecommendedVideoData(videos=[VideoListItem(**self._list_fields(video)) for video in videos]))

    async def list_upload_videos(self, page: int, page_size: int, context: RequestContext) -> Envelope:
        user_id = context.require_user()
        result = await self.video_service.list_upload_videos(user_id, self._page(page, page_size))
        return ok(UploadVideoListData(
            total=result.total,
            videos=[UploadVideoItem(**self._list_fields(video), status=int(video.status)) for video in result.videos],
        ))

    async def list_user_videos(self, uid: int, page: int, page_size: int) -> Envelope:
        result = await self.video_service.list_user_videos(uid, self._page(page, page_size))
        return ok(self._to_list_data(result))

    async def search_videos(self, keywords: str, page: int, page_size: int) -> Envelope:
        keywords = keywords.strip()
        if not keywords:
            self.logger.error("Search keywords are empty")
            raise RequestParamError("keywords must not be empty")

        result = await self.video_service.search_videos(keywords, self._page(page, page_size))
        return ok(self._to_list_data(result))

    def _validate_title(self, title: str) -> None:
        if not is_valid_title(title, self.video_config.title_max_length):
            message = title_error(self.video_config.title_max_length)
            self.logger.error(message)
            raise RequestParamError(message)

    def _page(self, page: int, page_size: int) -> PageRequest:
        if not is_valid_page(page, page_size, self.video_config.max_page_size):
            message = page_error(self.video_config.max_page_size)
            self.logger.error(message)
            raise RequestParamError(message)
        return PageRequest(page=page, page_size=page_size)

    def _to_status_view(self, video: Video, resources: List[Resource]) -> VideoStatusView:
        return VideoStatusView(
            vid=video.id,
            title=video.title,
            cover=video.cover,
            desc=video.desc,
            tags=video.tags,
            copyright=video.copyright,
            partition=video.partition_id,
            status=int(video.status),
            resources=[
                ResourceStatusView(
                    id=resource.id,
                    title=resource.title,
                    url=resource.url,
                    duration=resource.duration,
                    quality=resource.quality,
                    status=int(resource.status),
                )
                for resource in resources
            ],
        )

    def _to_detail_view(self, detail: VideoDetail) -> VideoDetailView:
        video = detail.video
        return VideoDetailView(
            vid=video.id,
            uid=video.uid,
            title=video.title,
            cover=video.cover,
            desc=video.desc,
            tags=video.tags,
            copyright=video.copyright,
            duration=video.duration,
            clicks=detail.clicks,
            created_at=video.created_at,
            author=self._to_author_view(detail.author) if detail.author else None,
            resources=[
                ResourceView(
                    id=resource.id,
                    title=resource.title,
                    url=resource.url,
                    duration=resource.duration,
                    quality=resource.quality,
                )
                for resource in detail.resources
            ],
        )

    def _to_author_view(self, author: UserInfo) -> AuthorView:
        return AuthorView(uid=author.id, name=author.name, avatar=author.avatar, sign=author.sign)

    def _to_list_data(self, result: VideoPage) -> VideoListData:
        return VideoListData(
            total=result.total,
            videos=[VideoListItem(**self._list_fields(video)) for video in result.videos],
        )

    def _list_fields(self, video: Video) -> dict:
        return {
            "vid": video.id,
            "uid": video.uid,
            "title": video.title,
            "cover": video.cover,
            "duration": video.duration,
            "clicks": video.clicks,
            "created_at": video.created_at,
        }
