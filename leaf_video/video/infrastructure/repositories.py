"""
Video Repository Implementations.

SQLAlchemy-based implementations of the repository interfaces.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .database import Database
from .orm import VideoRow, LikeRow, ResourceRow, PartitionRow, UserRow
from ..domain.interfaces import VideoRepository, ResourceRepository, PartitionRepository, UserRepository
from ..domain.models import (
    Video, Resource, Partition, UserInfo, VideoChanges, VideoStatus, PageRequest, VideoPage
)
from ...core.config import PartitionSeed


class SqlAlchemyVideoRepository(VideoRepository):
    """Relational implementation of video repository"""

    def __init__(self, database: Database):
        self.database = database
        self.logger = logging.getLogger(__name__)

    async def get_by_id(self, vid: int) -> Optional[Video]:
        async with self.database.session() as session:
            row = await session.get(VideoRow, vid)
            return row.to_domain() if row else None

    async def create_with_like(self, video: Video) -> int:
        """Insert video and like record in one transaction"""
        async with self.database.transaction() as session:
            row = VideoRow.from_domain(video)
            session.add(row)
            # Assigns the primary key without committing
            await session.flush()
            await self._insert_like(session, row.id)
            vid = row.id

        self.logger.debug(f"Created video {vid} for user {video.uid}")
        return vid

    async def _insert_like(self, session: AsyncSession, vid: int) -> None:
        session.add(LikeRow(vid=vid, count=0))
        await session.flush()

    async def update_info(self, changes: VideoChanges) -> None:
        async with self.database.transaction() as session:
            await session.execute(
                update(VideoRow)
                .where(VideoRow.id == changes.vid)
                .values(
                    title=changes.title,
                    cover=changes.cover,
                    desc=changes.desc,
                    copyright=changes.copyright,
                    tags=changes.tags,
                )
            )

    async def update_status(self, vid: int, status: VideoStatus) -> None:
        async with self.database.transaction() as session:
            await session.execute(update(VideoRow).where(VideoRow.id == vid).values(status=int(status)))

    async def delete(self, vid: int) -> None:
        async with self.database.transaction() as session:
            await session.execute(delete(ResourceRow).where(ResourceRow.vid == vid))
            await session.execute(delete(LikeRow).where(LikeRow.vid == vid))
            await session.execute(delete(VideoRow).where(VideoRow.id == vid))

        self.logger.debug(f"Deleted video {vid}")

    async def increment_clicks(self, vid: int) -> None:
        async with self.database.transaction() as session:
            await session.execute(update(VideoRow).where(VideoRow.id == vid).values(clicks=VideoRow.clicks + 1))

    async def get_clicks(self, vid: int) -> int:
        async with self.database.session() as session:
            clicks = await session.scalar(select(VideoRow.clicks).where(VideoRow.id == vid))
            return clicks or 0

    async def list_public(
        self,
        page: PageRequest,
        partition_ids: Optional[List[int]] = None
    ) -> VideoPage:
        conditions = [VideoRow.status == int(VideoStatus.AUDIT_APPROVED)]
        if partition_ids is not None:
            conditions.append(VideoRow.partition_id.in_(partition_ids))
        return await self._paginate(conditions, page)

    async def list_by_user(
        self,
        uid: int,
        page: PageRequest,
        public_only: bool = True
    ) -> VideoPage:
        conditions = [VideoRow.uid == uid]
        if public_only:
            conditions.append(VideoRow.status == int(VideoStatus.AUDIT_APPROVED))
        return await self._paginate(conditions, page)

    async def search_public(self, keywords: str, page: PageRequest) -> VideoPage:
        conditions = [
            VideoRow.status == int(VideoStatus.AUDIT_APPROVED),
            VideoRow.title.icontains(keywords, autoescape=True),
        ]
        return await self._paginate(conditions, page)

    async def list_popular(self, limit: int) -> List[Video]:
        """Most clicked first, newest first among equals"""
        async with self.database.session() as session:
            rows = (await session.scalars(
                select(VideoRow)
                .where(VideoRow.status == int(VideoStatus.AUDIT_APPROVED))
                .order_by(VideoRow.clicks.desc(), VideoRow.created_at.desc(), VideoRow.id.desc())
                .limit(limit)
            )).all()

        return [row.to_domain() for row in rows]

    async def _paginate(self, conditions: list, page: PageRequest) -> VideoPage:
        """Newest first"""
        async with self.database.session() as session:
            total = await session.scalar(select(func.count(VideoRow.id)).where(*conditions)) or 0
            rows = (await session.scalars(
                select(VideoRow)
                .where(*conditions)
                .order_by(VideoRow.created_at.desc(), VideoRow.id.desc())
                .offset(page.offset)
                .limit(page.page_size)
            )).all()

        return VideoPage(total=total, videos=[row.to_domain() for row in rows])


class SqlAlchemyResourceRepository(ResourceRepository):
    """Relational implementation of resource repository"""

    def __init__(self, database: Database):
        self.database = database

    async def get_by_video(self, vid: int, public_only: bool) -> List[Resource]:
        statement = select(ResourceRow).where(ResourceRow.vid == vid)
        if public_only:
            statement = statement.where(ResourceRow.status == int(VideoStatus.AUDIT_APPROVED))

        async with self.database.session() as session:
            rows = (await session.scalars(statement.order_by(ResourceRow.id))).all()
            return [row.to_domain() for row in rows]

    async def count_by_video(self, vid: int) -> int:
        async with self.database.session() as session:
            return await session.scalar(select(func.count(ResourceRow.id)).where(ResourceRow.vid == vid)) or 0


class SqlAlchemyPartitionRepository(PartitionRepository):
    """Relational implementation of partition repository"""

    def __init__(self, database: Database):
        self.database = database
        self.logger = logging.getLogger(__name__)

    async def get_by_id(self, partition_id: int) -> Optional[Partition]:
        async with self.database.session() as session:
            row = await session.get(PartitionRow, partition_id)
            return row.to_domain() if row else None

    async def get_children(self, parent_id: int) -> List[Partition]:
        async with self.database.session() as session:
            rows = (await session.scalars(
                select(PartitionRow).where(PartitionRow.parent_id == parent_id).order_by(PartitionRow.id)
            )).all()
            return [row.to_domain() for row in rows]

    async def seed(self, seeds: List[PartitionSeed]) -> int:
        """Create the configured partitions when the table is empty"""
        async with self.database.transaction() as session:
            if await session.scalar(select(func.count(PartitionRow.id))):
                return 0

            created = 0
            for seed in seeds:
                parent = PartitionRow(content=seed.content, parent_id=0)
                session.add(parent)
                await session.flush()
                created += 1
                for child in seed.children:
                    session.add(PartitionRow(content=child, parent_id=parent.id))
                    created += 1

        self.logger.info(f"Seeded {created} partitions")
        return created


class SqlAlchemyUserRepository(UserRepository):
    """Relational implementation of user lookups"""

    def __init__(self, database: Database):
        self.database = database

    async def get_user_info(self, uid: int) -> Optional[UserInfo]:
        async with self.database.session() as session:
            row = await session.get(UserRow, uid)
            return row.to_domain() if row else None
