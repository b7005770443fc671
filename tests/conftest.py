"""Shared pytest fixtures for the Leaf video service tests."""

import asyncio
from datetime import datetime, timedelta
from typing import Dict, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select, update
from sqlalchemy.orm import sessionmaker

from leaf_video.api.server import APIServer
from leaf_video.core.config import Config, DatabaseConfig
from leaf_video.video.domain.models import VideoStatus
from leaf_video.video.infrastructure.caching import InMemoryClickLimiter, SqlAlchemyUploadTracker
from leaf_video.video.infrastructure.database import Database
from leaf_video.video.infrastructure.orm import PartitionRow, ResourceRow, UploadRow, UserRow, VideoRow
from leaf_video.video.integration import VideoModule


class FakeClock:
    """Controllable replacement for datetime.now"""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class SyncDatabase:
    """Blocking access to the test database file"""

    def __init__(self, url: str):
        self.engine = create_engine(url)
        self.session = sessionmaker(bind=self.engine)
        self.transaction = self.session.begin


class Seeder:
    """Writes fixture data straight into the database, the way other services do"""

    def __init__(self, database: SyncDatabase, clock: FakeClock):
        self.database = database
        self.clock = clock

    def user(self, name: str = "alice", avatar: str = "", sign: str = "") -> int:
        with self.database.transaction() as session:
            row = UserRow(name=name, avatar=avatar, sign=sign)
            session.add(row)
            session.flush()
            return row.id

    def partition_id(self, content: str) -> int:
        with self.database.session() as session:
            return session.scalar(select(PartitionRow.id).where(PartitionRow.content == content))

    def upload(self, url: str, uid: int) -> str:
        """Register an uploaded file as the image upload handlers do"""
        with self.database.transaction() as session:
            session.merge(UploadRow(url=url, uid=uid, created_at=self.clock()))
        return url

    def resource(self, vid: int, url: str = "/api/video/1/720p.m3u8", status: VideoStatus = VideoStatus.AUDIT_APPROVED) -> int:
        with self.database.transaction() as session:
            row = ResourceRow(vid=vid, url=url, title="P1", duration=12.5, quality=720, status=int(status))
            session.add(row)
            session.flush()
            return row.id

    def set_status(self, vid: int, status: VideoStatus) -> None:
        with self.database.transaction() as session:
            session.execute(update(VideoRow).where(VideoRow.id == vid).values(status=int(status)))

    def set_clicks(self, vid: int, clicks: int) -> None:
        with self.database.transaction() as session:
            session.execute(update(VideoRow).where(VideoRow.id == vid).values(clicks=clicks))

    def video_row(self, vid: int):
        with self.database.session() as session:
            return session.get(VideoRow, vid)

    def count(self, model) -> int:
        with self.database.session() as session:
            return len(session.scalars(select(model)).all())


def auth(uid: int) -> Dict[str, str]:
    """Headers the authentication gateway would set"""
    return {"X-User-Id": str(uid)}


@pytest.fixture
def config(tmp_path) -> Config:
    """Configuration backed by a throwaway database file."""
    config = Config(config_file=str(tmp_path / "config.json"), save_defaults=False)
    config.database = DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'leaf_video.db'}")
    config.system.log_file = None
    config.system.trust_forwarded_for = True
    return config


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def video_module(config, clock) -> Generator[VideoModule, None, None]:
    """Video module with fresh tables, seeded partitions and controllable caches."""
    database = Database(config.database)
    module = VideoModule(
        config,
        database,
        upload_tracker=SqlAlchemyUploadTracker(database, max_age_minutes=config.cache.upload_link_ttl_minutes, clock=clock),
        click_limiter=InMemoryClickLimiter(window_minutes=config.cache.click_window_minutes, clock=clock),
    )

    async def prepare():
        await module.initialize_storage()
        # Connections are opened again on the loop that serves the app
        await database.dispose()

    asyncio.run(prepare())
    yield module
    asyncio.run(database.dispose())


@pytest.fixture
def seed(config, clock, video_module) -> Generator[Seeder, None, None]:
    database = SyncDatabase(config.database.url.replace("sqlite+aiosqlite:", "sqlite:", 1))
    yield Seeder(database, clock)
    database.engine.dispose()


@pytest.fixture
def client(config, video_module) -> Generator[TestClient, None, None]:
    server = APIServer(config, video_module)
    with TestClient(server.app) as test_client:
        yield test_client


@pytest.fixture
def author(seed) -> int:
    return seed.user("alice", avatar="/api/image/alice.png", sign="hello")


@pytest.fixture
def other_user(seed) -> int:
    return seed.user("bob")


@pytest.fixture
def gaming(seed) -> int:
    return seed.partition_id("Gaming")


@pytest.fixture
def upload_video(client, seed, author, gaming):
    """Register a video through the API and return its ID."""

    def _upload(title: str = "Test", uid: int = None, cover: str = None, partition: int = None) -> int:
        uid = uid or author
        cover = cover or seed.upload(f"/api/image/cover_{uid}_{title}.png", uid)
        response = client.post(
            "/api/v1/video/info/upload",
            json={"title": title, "cover": cover, "partition": partition or gaming, "desc": "desc", "tags": "a,b"},
            headers=auth(uid),
        )
        body = response.json()
        assert body["code"] == 200, body
        return body["data"]["vid"]

    return _upload
