"""
Main Application Coordinator for the Leaf video service.

This module wires configuration, logging, storage and the HTTP server together
and provides graceful startup/shutdown.
"""

import signal
import time
import logging
import sys
from typing import Optional
from datetime import datetime

from .core.config import Config
from .core.logging_config import setup_logging, get_error_tracker
from .video.infrastructure.database import Database
from .video.integration import VideoModule
from .api.server import APIServer


class LeafVideoSystem:
    """Main application coordinator for the Leaf video service"""

    def __init__(self, config_file: Optional[str] = None):
        # Load configuration first (basic logging will be used initially)
        self.config = Config(config_file)

        self.logger_setup = setup_logging(log_level=self.config.system.log_level, log_file=self.config.system.log_file)
        self.logger = logging.getLogger(__name__)
        self.error_tracker = get_error_tracker("main_system")

        self.database = Database(self.config.database)
        self.video_module = VideoModule(self.config, self.database)
        self.api_server = APIServer(self.config, self.video_module)

        # System state
        self.running = False
        self.start_time: Optional[datetime] = None

        self._setup_signal_handlers()

        self.logger.info("Leaf video service initialized")

    def _setup_signal_handlers(self) -> None:
        """Setup signal handlers for graceful shutdown"""

        def signal_handler(signum, frame):
            self.logger.info(f"Received signal {signum}, initiating graceful shutdown...")
            self.stop()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def start(self) -> bool:
        """Start the service"""
        if self.running:
            self.logger.warning("System is already running")
            return True

        self.logger.info("Starting Leaf video service...")
        self.start_time = datetime.now()

        if not self.api_server.start():
            self.logger.error("API server failed to start")
            return False

        self.running = True
        self.logger.info("Leaf video service started")
        return True

    def stop(self) -> None:
        """Stop the service gracefully"""
        if not self.running:
            return

        self.logger.info("Stopping Leaf video service...")
        self.running = False

        try:
            # Storage is released by the server's lifespan shutdown
            self.api_server.stop()
            self.logger.info("Leaf video service stopped")
        except Exception as e:
            self.logger.error(f"Error during system shutdown: {e}")

    def run(self) -> None:
        """Run the service (blocking call)"""
        if not self.start():
            self.logger.error("Failed to start system")
            return

        try:
            self.logger.info("System running... Press Ctrl+C to stop")

            while self.running:
                time.sleep(1)

                if not self.api_server.running:
                    self.logger.error("API server exited unexpectedly")
                    break

        except KeyboardInterrupt:
            self.logger.info("Keyboard interrupt received")
        except Exception as e:
            self.error_tracker.log_error(e, "main_loop")
        finally:
            self.stop()


def main():
    """Main entry point for the application"""
    import argparse

    parser = argparse.ArgumentParser(description="Leaf video service")
    parser.add_argument("--config", type=str, help="Path to configuration file", default="config.json")
    parser.add_argument("--log-level", type=str, choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Override log level", default=None)

    args = parser.parse_args()

    system = LeafVideoSystem(args.config)

    if args.log_level:
        logging.getLogger().setLevel(getattr(logging, args.log_level))

    try:
        system.run()
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
