"""
Video API Routes.

FastAPI route definitions for the video resource.
"""

from typing import Callable

from fastapi import APIRouter, Depends, Query

from ..domain.validation import MAX_ID
from .context import RequestContext
from .controllers import VideoController
from .schemas import Envelope, UploadVideoRequest, ModifyVideoRequest, IdRequest


def create_video_routes(
    video_controller: VideoController,
    get_context: Callable[..., RequestContext]
) -> APIRouter:
    """Create video API routes with dependency injection"""

    router = APIRouter(prefix="/api/v1/video", tags=["video"])

    @router.post("/info/upload", response_model=Envelope)
    async def upload_video_info(request: UploadVideoRequest, context: RequestContext = Depends(get_context)):
        """
        Register metadata for an uploaded video.

        - **cover**: must be an image the caller uploaded
        - **partition**: must be a sub-partition

        Returns the new video ID as `data.vid`.
        """
        return await video_controller.upload_video_info(request, context)

    @router.post("/info/modify", response_model=Envelope)
    async def modify_video_info(request: ModifyVideoRequest, context: RequestContext = Depends(get_context)):
        """Edit title, cover, description, copyright and tags of one of the caller's videos."""
        return await video_controller.modify_video_info(request, context)

    @router.get("/status", response_model=Envelope)
    async def get_video_status(
        vid: int = Query(0, ge=0, le=MAX_ID, description="Video ID"),
        context: RequestContext = Depends(get_context)
    ):
        """
        Get processing and review status of one of the caller's videos.

        Includes resources that are not public yet.
        """
        return await video_controller.get_video_status(vid, context)

    @router.get("/get", response_model=Envelope)
    async def get_video_by_id(
        vid: int = Query(0, ge=0, le=MAX_ID, description="Video ID"),
        context: RequestContext = Depends(get_context)
    ):
        """
        Get a public video with its author, click count and approved resources.

        Each client address adds at most one click per video every 30 minutes.
        """
        return await video_controller.get_video_by_id(vid, context)

    @router.post("/review/submit", response_model=Envelope)
    async def submit_review(request: IdRequest, context: RequestContext = Depends(get_context)):
        """Submit a video with at least one resource for review."""
        return await video_controller.submit_review(request, context)

    @router.post("/delete", response_model=Envelope)
    async def delete_video(request: IdRequest, context: RequestContext = Depends(get_context)):
        return await video_controller.delete_video(request, context)

    @router.get("/list", response_model=Envelope)
    async def list_videos(
        page: int = Query(1, le=MAX_ID, description="Page number, starting at 1"),
        page_size: int = Query(10, le=MAX_ID, description="Videos per page"),
        partition: int = Query(0, ge=0, le=MAX_ID, description="Partition ID, 0 for all")
    ):
        """
        List public videos, newest first.

        A top-level partition includes videos of its sub-partitions.
        """
        return await video_controller.list_videos(page, page_size, partition)

    @router.get("/recommended", response_model=Envelope)
    async def list_recommended_videos(
        page_size: int = Query(10, le=MAX_ID, description="Number of videos")
    ):
        """Most clicked public videos."""
        return await video_controller.list_recommended_videos(page_size)

    @router.get("/upload/get", response_model=Envelope)
    async def list_upload_videos(
        page: int = Query(1, le=MAX_ID, description="Page number, starting at 1"),
        page_size: int = Query(10, le=MAX_ID, description="Videos per page"),
        context: RequestContext = Depends(get_context)
    ):
        """List the caller's own videos in any status."""
        return await video_controller.list_upload_videos(page, page_size, context)

    @router.get("/user/get", response_model=Envelope)
    async def list_user_videos(
        uid: int = Query(..., ge=0, le=MAX_ID, description="Author user ID"),
        page: int = Query(1, le=MAX_ID, description="Page number, starting at 1"),
        page_size: int = Query(10, le=MAX_ID, description="Videos per page")
    ):
        return await video_controller.list_user_videos(uid, page, page_size)

    @router.get("/search", response_model=Envelope)
    async def search_videos(
        keywords: str = Query(..., description="Text contained in the title"),
        page: int = Query(1, le=MAX_ID, description="Page number, starting at 1"),
        page_size: int = Query(10, le=MAX_ID, description="Videos per page")
    ):
        return await video_controller.search_videos(keywords, page, page_size)

    return router
