"""
API module for the Leaf video service.

This module provides the FastAPI application and its uvicorn runner.
"""

from .server import APIServer

__all__ = ["APIServer"]
