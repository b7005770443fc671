"""
Video API Request/Response Schemas.

Pydantic models for request binding and the response envelope.
"""

from typing import Any, List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from ..domain.errors import ErrorCode, VideoAPIError
from ..domain.validation import MAX_ID


class Envelope(BaseModel):
    """Uniform response wrapper"""
    code: int = Field(..., description="Outcome code, 200 on success")
    message: str = Field(..., description="Human readable outcome")
    data: Optional[Any] = Field(None, description="Payload on success")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": 200,
                "message": "ok",
                "data": {"vid": 1}
            }
        }
    )


def ok(data: Optional[Any] = None) -> Envelope:
    return Envelope(code=ErrorCode.OK.code, message=ErrorCode.OK.default_message, data=data)


def error_envelope(error: VideoAPIError) -> Envelope:
    return Envelope(code=error.code, message=error.message, data=None)


class UploadVideoRequest(BaseModel):
    """Metadata registered for an uploaded video"""
    title: str = Field(..., description="Video title")
    cover: str = Field(..., description="Link of an uploaded cover image")
    desc: str = Field("", description="Video description")
    copyright: bool = Field(False, description="Whether the uploader owns the copyright")
    tags: str = Field("", description="Comma separated tags")
    partition: int = Field(..., ge=0, le=MAX_ID, description="Sub-partition ID")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Speedrun highlights",
                "cover": "/api/image/cover_1733.png",
                "desc": "Best moments of the week",
                "copyright": True,
                "tags": "speedrun,highlights",
                "partition": 2
            }
        }
    )


class ModifyVideoRequest(BaseModel):
    """Editable video metadata"""
    vid: int = Field(..., ge=0, le=MAX_ID, description="Video ID")
    title: str = Field(..., description="Video title")
    cover: str = Field(..., description="Link of an uploaded cover image")
    desc: str = Field("", description="Video description")
    copyright: bool = Field(False, description="Whether the uploader owns the copyright")
    tags: str = Field("", description="Comma separated tags")


class IdRequest(BaseModel):
    id: int = Field(..., ge=0, le=MAX_ID, description="Video ID")


class ResourceView(BaseModel):
    id: int
    title: str
    url: str
    duration: float
    quality: int


class ResourceStatusView(ResourceView):
    status: int


class AuthorView(BaseModel):
    uid: int
    name: str
    avatar: str
    sign: str


class VideoStatusView(BaseModel):
    """What the uploader sees while a video is processed and reviewed"""
    vid: int
    title: str
    cover: str
    desc: str
    tags: str
    copyright: bool
    partition: int
    status: int
    resources: List[ResourceStatusView]


class VideoDetailView(BaseModel):
    """Public video page"""
    vid: int
    uid: int
    title: str
    cover: str
    desc: str
    tags: str
    copyright: bool
    duration: float
    clicks: int
    created_at: Optional[datetime] = None
    author: Optional[AuthorView] = None
    resources: List[ResourceView]


class VideoListItem(BaseModel):
    vid: int
    uid: int
    title: str
    cover: str
    duration: float
    clicks: int
    created_at: Optional[datetime] = None


class UploadVideoItem(VideoListItem):
    status: int


class VideoListData(BaseModel):
    total: int
    videos: List[VideoListItem]


class RecommendedVideoData(BaseModel):
    videos: List[VideoListItem]


class UploadVideoListData(BaseModel):
    total: int
    videos: List[UploadVideoItem]
