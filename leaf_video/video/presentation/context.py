"""
Request-scoped caller context.

The authentication gateway in front of the service injects the caller's user
ID as a header; the client address is taken from the forwarding chain when
the deployment trusts it.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Request

from ..domain.errors import UnauthorizedError
from ..domain.validation import MAX_ID
from ...core.config import SystemConfig


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    user_id: Optional[int]
    client_ip: str

    def require_user(self) -> int:
        if self.user_id is None:
            logger.error("Request has no authenticated user")
            raise UnauthorizedError()
        return self.user_id


def parse_user_id(raw: Optional[str]) -> Optional[int]:
    if not raw:
        return None
    try:
        user_id = int(raw)
    except ValueError:
        logger.warning(f"Ignoring malformed user id header {raw!r}")
        return None
    return user_id if 0 < user_id <= MAX_ID else None


def client_ip(request: Request, trust_forwarded_for: bool) -> str:
    if trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
        real_ip = request.headers.get("x-real-ip", "").strip()
        if real_ip:
            return real_ip

    return request.client.host if request.client else ""


def create_context_dependency(system_config: SystemConfig) -> Callable[[Request], RequestContext]:
    """Build the FastAPI dependency resolving the caller of a request"""

    def get_request_context(request: Request) -> RequestContext:
        return RequestContext(
            user_id=parse_user_id(request.headers.get(system_config.user_id_header)),
            client_ip=client_ip(request, system_config.trust_forwarded_for),
        )

    return get_request_context
