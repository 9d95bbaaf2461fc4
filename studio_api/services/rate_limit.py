"""Per-IP request budgets."""

import logging
import math
import time

from limits import RateLimitItem, parse
from limits.storage import Storage, storage_from_string
from limits.strategies import MovingWindowRateLimiter

from studio_api.config import Settings
from studio_api.errors import RateLimited

logger = logging.getLogger(__name__)

AUTH_LIMIT_MESSAGE = "Too many authentication attempts, please try again later."


class RateLimiter:
    """Sliding-window budgets keyed by client IP.

    Two namespaces are tracked: ``api`` for all API traffic and ``auth`` for
    register/login, which also count against ``api``.
    """

    def __init__(self, settings: Settings, storage: Storage | None = None):
        self.storage = storage or storage_from_string(settings.rate_limit_storage_uri)
        self.strategy = MovingWindowRateLimiter(self.storage)
        self.api_limit = parse(settings.api_rate_limit)
        self.auth_limit = parse(settings.auth_rate_limit)

    def _hit(self, limit: RateLimitItem, namespace: str, client_ip: str, message: str | None):
        if self.strategy.hit(limit, namespace, client_ip):
            return

        reset_at, _remaining = self.strategy.get_window_stats(limit, namespace, client_ip)
        retry_after = max(1, math.ceil(reset_at - time.time()))
        logger.warning(
            f"Rate limit '{namespace}' exceeded for {client_ip}, retry in {retry_after}s"
        )
        raise RateLimited(retry_after, message)

    def check_api(self, client_ip: str) -> None:
        """Count one API request, raising RateLimited when over budget."""
        self._hit(self.api_limit, "api", client_ip, None)

    def check_auth(self, client_ip: str) -> None:
        """Count one register/login attempt, raising RateLimited when over budget."""
        self._hit(self.auth_limit, "auth", client_ip, AUTH_LIMIT_MESSAGE)

    def reset(self) -> None:
        """Forget all counters."""
        self.storage.reset()
