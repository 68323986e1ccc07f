"""
Access token validators.
"""
import aiohttp
import logging
import time
from typing import Any, Dict, Optional, Tuple

from ..config import settings
from ..errors import TokenValidationError
from .base import AccessTokenValidator

logger = logging.getLogger(__name__)


class StaticTokenValidator(AccessTokenValidator):
    """Validates tokens against a fixed token -> agent user ID map. Meant for local testing."""

    def __init__(self, tokens: Dict[str, str] = None):
        self.tokens = dict(tokens or {})

    async def validate(self, token: str) -> Optional[str]:
        return self.tokens.get(token)


class UserInfoTokenValidator(AccessTokenValidator):
    """
    Validates tokens against an OAuth provider's /userinfo endpoint (e.g. Auth0).

    The ``sub`` claim becomes the agent user ID. Successful lookups are cached
    for ``cache_ttl`` seconds; once ``cache_size`` tokens are cached the oldest
    entry is evicted.
    """

    def __init__(self, config: Dict[str, Any] = None):
        config = config or {}
        self.domain = config.get("domain", settings.auth_domain)
        self.timeout = config.get("timeout", settings.http_timeout)
        self.cache_ttl = float(config.get("cache_ttl", settings.token_cache_ttl))
        self.cache_size = int(config.get("cache_size", settings.token_cache_size))
        # token -> (subject, time cached)
        self.tokens: Dict[str, Tuple[str, float]] = {}
        self.session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self.session

    async def close(self):
        """Close aiohttp session."""
        if self.session and not self.session.closed:
            await self.session.close()

    def _cache_get(self, token: str) -> Optional[str]:
        entry = self.tokens.get(token)
        if entry is None:
            return None
        subject, cached_at = entry
        if time.monotonic() - cached_at > self.cache_ttl:
            del self.tokens[token]
            return None
        return subject

    def _cache_set(self, token: str, subject: str) -> None:
        if self.cache_ttl <= 0 or self.cache_size <= 0:
            return
        self.tokens.pop(token, None)
        while len(self.tokens) >= self.cache_size:
            # Dicts keep insertion order, so the first key is the oldest entry
            del self.tokens[next(iter(self.tokens))]
        self.tokens[token] = (subject, time.monotonic())

    async def validate(self, token: str) -> Optional[str]:
        """
        Look up the user owning the token.

        Returns:
            The user's ``sub``, or None if the provider rejected the token

        Raises:
            TokenValidationError: if the provider answered with something other than JSON
        """
        cached = self._cache_get(token)
        if cached is not None:
            return cached

        session = await self._get_session()
        url = f"https://{self.domain}/userinfo"

        async with session.get(url, headers={"Authorization": f"Bearer {token}"}) as response:
            if response.status != 200:
                logger.debug(f"Userinfo lookup rejected token: {response.status}")
                return None

            content_type = response.headers.get("content-type", "")
            if "application/json" not in content_type:
                raise TokenValidationError(f"Userinfo response not JSON: {content_type}")

            data = await response.json()

        subject = data.get("sub")
        if not subject:
            return None

        logger.info(f"Token validated for user {subject} ({data.get('email')})")
        self._cache_set(token, subject)
        return subject
