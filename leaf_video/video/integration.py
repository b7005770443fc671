"""
Video Module Integration.

Composition root for the video resource: creates the infrastructure,
services and controllers and wires them together.
"""

import logging
from typing import Optional

from ..core.config import Config

# Domain interfaces
from .domain.interfaces import UploadTracker, ClickLimiter

# Infrastructure implementations
from .infrastructure.database import Database
from .infrastructure.repositories import (
    SqlAlchemyVideoRepository,
    SqlAlchemyResourceRepository,
    SqlAlchemyPartitionRepository,
    SqlAlchemyUserRepository,
)
from .infrastructure.caching import InMemoryUploadTracker, InMemoryClickLimiter, SqlAlchemyUploadTracker

# Application services
from .application.video_service import VideoService

# Presentation layer
from .presentation.context import create_context_dependency
from .presentation.controllers import VideoController
from .presentation.routes import create_video_routes


class VideoModule:
    """
    Main video module that provides dependency injection and service composition.

    Caches may be passed in to share them with other modules. Upload
    attribution defaults to the database table the image upload handlers
    write to; the in-memory tracker only sees uploads registered in-process.
    """

    def __init__(
        self,
        config: Config,
        database: Database,
        upload_tracker: Optional[UploadTracker] = None,
        click_limiter: Optional[ClickLimiter] = None
    ):
        self.config = config
        self.database = database
        self.logger = logging.getLogger(__name__)

        self.upload_tracker = upload_tracker or self._create_upload_tracker()
        self.click_limiter = click_limiter or InMemoryClickLimiter(
            window_minutes=config.cache.click_window_minutes
        )

        self._initialize_services()

        self.logger.info("Video module initialized successfully")

    def _create_upload_tracker(self) -> UploadTracker:
        ttl = self.config.cache.upload_link_ttl_minutes
        if self.config.cache.upload_tracker == "memory":
            return InMemoryUploadTracker(max_age_minutes=ttl)
        return SqlAlchemyUploadTracker(self.database, max_age_minutes=ttl)

    def _initialize_services(self):
        """Initialize all video services with proper dependency injection"""

        # Infrastructure layer
        self.video_repository = SqlAlchemyVideoRepository(self.database)
        self.resource_repository = SqlAlchemyResourceRepository(self.database)
        self.partition_repository = SqlAlchemyPartitionRepository(self.database)
        self.user_repository = SqlAlchemyUserRepository(self.database)

        # Application layer
        self.video_service = VideoService(
            video_repository=self.video_repository,
            resource_repository=self.resource_repository,
            partition_repository=self.partition_repository,
            user_repository=self.user_repository,
            upload_tracker=self.upload_tracker,
            click_limiter=self.click_limiter
        )

        # Presentation layer
        self.video_controller = VideoController(self.video_service, self.config.video)
        self.get_context = create_context_dependency(self.config.system)

    async def initialize_storage(self) -> None:
        """Create tables and seed the configured partitions"""
        await self.database.create_tables()
        await self.partition_repository.seed(self.config.partitions)

    def get_api_routes(self):
        """Get FastAPI routes for video functionality"""
        return create_video_routes(
            video_controller=self.video_controller,
            get_context=self.get_context
        )

    async def cleanup(self):
        """Drop expired cache entries"""
        try:
            await self.upload_tracker.cleanup_cache()
            await self.click_limiter.cleanup_cache()
            self.logger.info("Video module cleanup completed")

        except Exception as e:
            self.logger.error(f"Error during video module cleanup: {e}")

    def get_module_status(self) -> dict:
        """Get status information about the video module"""
        return {
            "video_repository": type(self.video_repository).__name__,
            "upload_tracker": type(self.upload_tracker).__name__,
            "click_limiter": type(self.click_limiter).__name__,
            "database": self.database.engine.url.render_as_string(hide_password=True),
            "upload_link_ttl_minutes": self.config.cache.upload_link_ttl_minutes,
            "click_window_minutes": self.config.cache.click_window_minutes,
        }

