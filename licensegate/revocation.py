"""
Revocation checks against a static or remotely hosted denylist.

Remote lists are fetched fresh on every check, once, without retries. When a
fetch fails (bad status, transport error, unparsable body) the default policy
is fail-open: the token is treated as not revoked. Setting ``fail_open=False``
rejects the token instead.
"""

from typing import Any, Dict, Optional

import httpx

from .config import RemoteRevocation, RevocationSource, StaticRevocation
from .remote import fetch
from .shared.logging import get_logger
from .shared.metrics import ValidationMetrics
from .types import ErrorCode, LicenseError, RevocationList


class RevocationListUnavailable(Exception):
    """A remote revocation list could not be loaded."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Revocation list unavailable from {url}: {reason}")


class RevocationChecker:
    """Checks a payload's ``jti`` and ``sub`` against the configured denylist."""

    def __init__(
        self,
        source: Optional[RevocationSource],
        *,
        fail_open: bool = True,
        client: Optional[httpx.AsyncClient] = None,
        metrics: Optional[ValidationMetrics] = None,
    ):
        self.source = source
        self.fail_open = fail_open
        self._client = client
        self._metrics = metrics
        self.logger = get_logger("licensegate.revocation")

    async def load(self) -> Optional[RevocationList]:
        """Return the current list, or None when no source is configured.

        Raises :class:`RevocationListUnavailable` when a remote fetch fails.
        """
        if self.source is None:
            return None
        if isinstance(self.source, StaticRevocation):
            return self.source.revocation_list
        if isinstance(self.source, RemoteRevocation):
            return await self._fetch(self.source.url)
        return None

    async def _fetch(self, url: str) -> RevocationList:
        try:
            response = await fetch(url, self._client)
        except Exception as e:
            raise RevocationListUnavailable(url, f"transport error: {e}") from e

        if not response.is_success:
            raise RevocationListUnavailable(url, f"status {response.status_code}")

        try:
            return RevocationList.model_validate(response.json())
        except Exception as e:
            raise RevocationListUnavailable(url, f"invalid body: {e}") from e

    async def check(self, payload: Dict[str, Any]) -> Optional[LicenseError]:
        """Return a ``TOKEN_REVOKED`` error, or None if the token may proceed.

        ``jti`` is checked before ``sub``; only the first hit is reported.
        """
        try:
            revocation_list = await self.load()
        except RevocationListUnavailable as e:
            self.logger.warning(
                "Revocation list fetch failed",
                url=e.url,
                reason=e.reason,
                fail_open=self.fail_open,
            )
            if self._metrics is not None:
                self._metrics.record_revocation_fetch_failure("fail_open" if self.fail_open else "fail_closed")
            if self.fail_open:
                return None
            return LicenseError(
                code=ErrorCode.TOKEN_REVOKED,
                message="Revocation status could not be determined",
                details={"reason": "revocation_unavailable"},
            )

        if revocation_list is None:
            return None

        jti = payload.get("jti")
        if jti and revocation_list.jti and jti in revocation_list.jti:
            return LicenseError(
                code=ErrorCode.TOKEN_REVOKED,
                message=f"Token has been revoked (jti: {jti})",
                details={"jti": jti, "reason": "jti_revoked"},
            )

        sub = payload.get("sub")
        if sub and revocation_list.sub and sub in revocation_list.sub:
            return LicenseError(
                code=ErrorCode.TOKEN_REVOKED,
                message=f"Subject has been revoked (sub: {sub})",
                details={"sub": sub, "reason": "sub_revoked"},
            )

        return None
