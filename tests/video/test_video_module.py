"""Tests for composing the video module from configuration."""

from leaf_video.core.config import DatabaseConfig
from leaf_video.video.infrastructure.caching import InMemoryUploadTracker, SqlAlchemyUploadTracker
from leaf_video.video.infrastructure.database import Database
from leaf_video.video.integration import VideoModule


class TestVideoModule:

    def test_upload_tracker_defaults_to_shared_table(self, config):
        module = VideoModule(config, Database(config.database))

        assert isinstance(module.upload_tracker, SqlAlchemyUploadTracker)
        assert module.get_module_status()["upload_tracker"] == "SqlAlchemyUploadTracker"

    def test_in_process_upload_tracker(self, config):
        config.cache.upload_tracker = "memory"

        module = VideoModule(config, Database(DatabaseConfig(url="sqlite://")))

        assert isinstance(module.upload_tracker, InMemoryUploadTracker)
