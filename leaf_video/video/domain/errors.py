"""
Video Domain Errors.

Every failure surfaced to a caller is one of these kinds. Each kind maps to a
fixed envelope code and default message; handlers may override the message.
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """Envelope code and default message per outcome"""
    OK = (200, "ok")
    ERROR = (500, "internal error")
    REQUEST_PARAM_ERROR = (1001, "invalid request parameters")
    UNAUTHORIZED = (1002, "login required")
    INVALID_LINK_ERROR = (3001, "invalid file link")
    PARTITION_ERROR = (4001, "partition does not exist")
    VIDEO_NOT_EXIST_ERROR = (5001, "video does not exist")
    RESOURCE_NOT_EXIST_ERROR = (5002, "resource does not exist")

    def __init__(self, code: int, default_message: str):
        self.code = code
        self.default_message = default_message


class VideoAPIError(Exception):
    """Base error for a rejected video request"""
    error_code = ErrorCode.ERROR

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.error_code.default_message
        super().__init__(self.message)

    @property
    def code(self) -> int:
        return self.error_code.code


class RequestParamError(VideoAPIError):
    error_code = ErrorCode.REQUEST_PARAM_ERROR


class UnauthorizedError(VideoAPIError):
    error_code = ErrorCode.UNAUTHORIZED


class InvalidLinkError(VideoAPIError):
    error_code = ErrorCode.INVALID_LINK_ERROR


class PartitionError(VideoAPIError):
    error_code = ErrorCode.PARTITION_ERROR


class VideoNotExistError(VideoAPIError):
    error_code = ErrorCode.VIDEO_NOT_EXIST_ERROR


class ResourceNotExistError(VideoAPIError):
    error_code = ErrorCode.RESOURCE_NOT_EXIST_ERROR
