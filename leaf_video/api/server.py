"""
FastAPI Server for the Leaf video service.

This module builds the HTTP application, renders every rejected request as a
response envelope and runs uvicorn in a background thread. Storage setup and
periodic cache cleanup run on the server's event loop.
"""

import asyncio
import logging
import threading
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import uvicorn

from ..core.config import Config
from ..video.domain.errors import VideoAPIError, RequestParamError
from ..video.integration import VideoModule
from ..video.presentation.schemas import Envelope, ok, error_envelope


class APIServer:
    """FastAPI server for the Leaf video service"""

    def __init__(self, config: Config, video_module: VideoModule):
        self.config = config
        self.video_module = video_module
        self.logger = logging.getLogger(__name__)

        # Server state
        self.server_start_time = datetime.now()
        self.running = False
        self._server: Optional[uvicorn.Server] = None
        self._server_thread: Optional[threading.Thread] = None
        self._cleanup_task: Optional[asyncio.Task] = None

        self.app = FastAPI(title="Leaf Video API", description="Video upload, editing, review and playback metadata", version="1.0.0", lifespan=self._lifespan)

        self.app.add_middleware(CORSMiddleware, allow_origins=self.config.system.cors_origins, allow_credentials=True, allow_methods=["*"], allow_headers=["*"])

        self._setup_exception_handlers()
        self._setup_routes()

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Prepare storage and keep the caches trimmed while the app is served"""
        await self.video_module.initialize_storage()
        self._cleanup_task = asyncio.create_task(self._periodic_cleanup())

        yield

        self._cleanup_task.cancel()
        try:
            await self._cleanup_task
        except asyncio.CancelledError:
            pass
        self._cleanup_task = None

        await self.video_module.database.dispose()

    async def _periodic_cleanup(self) -> None:
        """Purge expired cache entries on the loop that serves requests"""
        while True:
            await asyncio.sleep(self.config.cache.cleanup_interval_seconds)
            await self.video_module.cleanup()

    def _setup_exception_handlers(self):
        """Render errors as envelopes; HTTP status stays 200 and the code carries the outcome"""

        @self.app.exception_handler(VideoAPIError)
        async def handle_video_error(request: Request, exc: VideoAPIError):
            return JSONResponse(status_code=200, content=error_envelope(exc).model_dump())

        @self.app.exception_handler(RequestValidationError)
        async def handle_validation_error(request: Request, exc: RequestValidationError):
            self.logger.error(f"Invalid request parameters for {request.method} {request.url.path}: {exc.errors()}")
            return JSONResponse(status_code=200, content=error_envelope(RequestParamError()).model_dump())

        @self.app.exception_handler(SQLAlchemyError)
        async def handle_database_error(request: Request, exc: SQLAlchemyError):
            self.logger.error(f"Database error for {request.method} {request.url.path}: {exc}")
            return JSONResponse(status_code=200, content=error_envelope(VideoAPIError("database error")).model_dump())

        @self.app.exception_handler(Exception)
        async def handle_unexpected_error(request: Request, exc: Exception):
            self.logger.error(f"Unhandled error for {request.method} {request.url.path}: {exc}", exc_info=exc)
            return JSONResponse(status_code=200, content=error_envelope(VideoAPIError()).model_dump())

    def _setup_routes(self):
        """Setup API routes"""

        @self.app.get("/", response_model=Envelope)
        async def root():
            return ok({"service": "Leaf Video API"})

        @self.app.get("/health")
        async def health_check():
            return {"status": "healthy", "timestamp": datetime.now().isoformat()}

        @self.app.get("/system/status")
        async def get_system_status():
            """Get server and video module status"""
            return {"server": self.get_server_info(), "video_module": self.video_module.get_module_status()}

        self.app.include_router(self.video_module.get_api_routes())

    def start(self) -> bool:
        """Start the API server"""
        if self.running:
            self.logger.warning("API server is already running")
            return True

        if not self.config.system.enable_api:
            self.logger.info("API server disabled in configuration")
            return False

        try:
            self.logger.info(f"Starting API server on {self.config.system.api_host}:{self.config.system.api_port}")
            self.running = True

            self._server = uvicorn.Server(uvicorn.Config(self.app, host=self.config.system.api_host, port=self.config.system.api_port, log_level="info"))
            self._server_thread = threading.Thread(target=self._run_server, daemon=True)
            self._server_thread.start()

            return True

        except Exception as e:
            self.logger.error(f"Error starting API server: {e}")
            self.running = False
            return False

    def stop(self) -> None:
        """Stop the API server"""
        if not self.running:
            return

        self.logger.info("Stopping API server...")
        self.running = False

        # Lets uvicorn run the lifespan shutdown before the thread ends
        if self._server:
            self._server.should_exit = True
        if self._server_thread:
            self._server_thread.join(timeout=10)

        self.logger.info("API server stopped")

    def _run_server(self) -> None:
        """Run the uvicorn server"""
        try:
            self._server.run()
        except Exception as e:
            self.logger.error(f"Error running API server: {e}")
        finally:
            self.running = False

    def get_server_info(self) -> Dict[str, Any]:
        """Get server information"""
        return {"running": self.running, "host": self.config.system.api_host, "port": self.config.system.api_port, "start_time": self.server_start_time.isoformat(), "uptime_seconds": (datetime.now() - self.server_start_time).total_seconds()}
