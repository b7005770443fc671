"""
SQLAlchemy table mappings for the video service.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base
from ..domain.models import Video, Resource, Partition, UserInfo, VideoStatus


class VideoRow(Base):
    __tablename__ = "videos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uid: Mapped[int] = mapped_column(Integer, index=True)
    title: Mapped[str] = mapped_column(String(50))
    cover: Mapped[str] = mapped_column(String(255))
    desc: Mapped[str] = mapped_column("desc", Text, default="")
    copyright: Mapped[bool] = mapped_column(Boolean, default=False)
    tags: Mapped[str] = mapped_column(String(255), default="")
    partition_id: Mapped[int] = mapped_column(Integer, index=True)
    duration: Mapped[float] = mapped_column(Float, default=0.0)
    clicks: Mapped[int] = mapped_column(Integer, default=0)
    status: Mapped[int] = mapped_column(Integer, default=int(VideoStatus.CREATED_VIDEO), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, onupdate=datetime.now)

    @classmethod
    def from_domain(cls, video: Video) -> "VideoRow":
        return cls(
            uid=video.uid,
            title=video.title,
            cover=video.cover,
            desc=video.desc,
            copyright=video.copyright,
            tags=video.tags,
            partition_id=video.partition_id,
            duration=video.duration,
            clicks=video.clicks,
            status=int(video.status),
        )

    def to_domain(self) -> Video:
        return Video(
            id=self.id,
            uid=self.uid,
            title=self.title,
            cover=self.cover,
            desc=self.desc,
            copyright=self.copyright,
            tags=self.tags,
            partition_id=self.partition_id,
            duration=self.duration,
            clicks=self.clicks,
            status=VideoStatus(self.status),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class LikeRow(Base):
    """Like summary, one row per video"""
    __tablename__ = "likes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vid: Mapped[int] = mapped_column(ForeignKey("videos.id"), unique=True)
    count: Mapped[int] = mapped_column(Integer, default=0)


class ResourceRow(Base):
    __tablename__ = "resources"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vid: Mapped[int] = mapped_column(ForeignKey("videos.id"), index=True)
    title: Mapped[str] = mapped_column(String(50), default="")
    url: Mapped[str] = mapped_column(String(255))
    duration: Mapped[float] = mapped_column(Float, default=0.0)
    quality: Mapped[int] = mapped_column(Integer, default=0)
    status: Mapped[int] = mapped_column(Integer, default=int(VideoStatus.VIDEO_PROCESSING))

    def to_domain(self) -> Resource:
        return Resource(
            id=self.id,
            vid=self.vid,
            url=self.url,
            title=self.title,
            duration=self.duration,
            quality=self.quality,
            status=VideoStatus(self.status),
        )


class PartitionRow(Base):
    __tablename__ = "partitions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(String(20))
    parent_id: Mapped[int] = mapped_column(Integer, default=0, index=True)

    def to_domain(self) -> Partition:
        return Partition(id=self.id, content=self.content, parent_id=self.parent_id)


class UserRow(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(20))
    avatar: Mapped[str] = mapped_column(String(255), default="")
    sign: Mapped[str] = mapped_column(String(50), default="")

    def to_domain(self) -> UserInfo:
        return UserInfo(id=self.id, name=self.name, avatar=self.avatar, sign=self.sign)


class UploadRow(Base):
    """Uploaded file link and its uploader, written by the upload handlers"""
    __tablename__ = "upload_images"

    url: Mapped[str] = mapped_column(String(255), primary_key=True)
    uid: Mapped[int] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, index=True)
