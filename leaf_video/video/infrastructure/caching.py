"""
Cache implementations.

Upload attribution and per-client view limiting, both expiring entries by age.
Upload attribution is shared with the upload handlers through the database;
the in-memory tracker only suits handlers running in the same process.
"""

import asyncio
import logging
from typing import Callable, Dict, Optional, Tuple
from datetime import datetime, timedelta

from sqlalchemy import delete

from .database import Database
from .orm import UploadRow
from ..domain.interfaces import UploadTracker, ClickLimiter


class InMemoryUploadTracker(UploadTracker):
    """In-memory map from uploaded file link to uploader"""

    def __init__(self, max_age_minutes: int = 360, clock: Callable[[], datetime] = datetime.now):
        self.max_age = timedelta(minutes=max_age_minutes)
        self.clock = clock
        self.logger = logging.getLogger(__name__)

        # {url: (uid, timestamp)}
        self._cache: Dict[str, Tuple[int, datetime]] = {}
        self._lock = asyncio.Lock()

    async def track_upload(self, url: str, uid: int) -> None:
        async with self._lock:
            self._cache[url] = (uid, self.clock())
        self.logger.debug(f"Tracking upload {url} for user {uid}")

    async def get_uploader(self, url: str) -> Optional[int]:
        async with self._lock:
            if url not in self._cache:
                return None

            uid, timestamp = self._cache[url]
            if self.clock() - timestamp <= self.max_age:
                return uid

            del self._cache[url]
            self.logger.debug(f"Upload attribution expired for {url}")
            return None

    async def cleanup_cache(self) -> int:
        """Remove expired entries"""
        async with self._lock:
            now = self.clock()
            expired = [url for url, (_, timestamp) in self._cache.items() if now - timestamp > self.max_age]
            for url in expired:
                del self._cache[url]

        if expired:
            self.logger.info(f"Upload tracker cleanup removed {len(expired)} entries")
        return len(expired)


class InMemoryClickLimiter(ClickLimiter):
    """One counted view per (video, client ip) per window"""

    def __init__(self, window_minutes: int = 30, clock: Callable[[], datetime] = datetime.now):
        self.window = timedelta(minutes=window_minutes)
        self.clock = clock
        self.logger = logging.getLogger(__name__)

        # {(vid, ip): time of the last counted view}
        self._views: Dict[Tuple[int, str], datetime] = {}
        self._lock = asyncio.Lock()

    async def try_register(self, vid: int, client_ip: str) -> bool:
        key = (vid, client_ip)

        async with self._lock:
            now = self.clock()
            last_view = self._views.get(key)
            if last_view is not None and now - last_view < self.window:
                return False

            self._views[key] = now
            return True

    async def cleanup_cache(self) -> int:
        """Remove view records older than the window"""
        async with self._lock:
            now = self.clock()
            expired = [key for key, timestamp in self._views.items() if now - timestamp >= self.window]
            for key in expired:
                del self._views[key]

        if expired:
            self.logger.info(f"Click limiter cleanup removed {len(expired)} entries")
        return len(expired)


class SqlAlchemyUploadTracker(UploadTracker):
    """Upload attribution stored in the shared upload_images table"""

    def __init__(self, database: Database, max_age_minutes: int = 360, clock: Callable[[], datetime] = datetime.now):
        self.database = database
        self.max_age = timedelta(minutes=max_age_minutes)
        self.clock = clock
        self.logger = logging.getLogger(__name__)

    async def track_upload(self, url: str, uid: int) -> None:
        async with self.database.transaction() as session:
            await session.merge(UploadRow(url=url, uid=uid, created_at=self.clock()))
        self.logger.debug(f"Tracking upload {url} for user {uid}")

    async def get_uploader(self, url: str) -> Optional[int]:
        async with self.database.session() as session:
            row = await session.get(UploadRow, url)

        if row is None:
            return None
        if self.clock() - row.created_at > self.max_age:
            self.logger.debug(f"Upload attribution expired for {url}")
            return None
        return row.uid

    async def cleanup_cache(self) -> int:
        """Delete expired attributions"""
        cutoff = self.clock() - self.max_age
        async with self.database.transaction() as session:
            result = await session.execute(delete(UploadRow).where(UploadRow.created_at < cutoff))

        if result.rowcount:
            self.logger.info(f"Upload tracker cleanup removed {result.rowcount} entries")
        return result.rowcount or 0
