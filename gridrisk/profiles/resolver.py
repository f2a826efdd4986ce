"""
Profile Resolver — fetches the analysis profile for one mode.

The profile service is external (a small JSON REST service). The worker
fetches exactly one profile per job and never retries: redelivery is the
workflow engine's decision.

    GET {base_url}/analysisProfiles/{mode}  →  AnalysisProfile JSON

Failure mapping:
    timeout / transport error / non-2xx / non-JSON body → ProfileUnavailableError
    body not matching AnalysisProfile / wrong id          → InvalidProfileError
"""

from typing import Mapping, Optional, Protocol

import httpx
import structlog
from pydantic import ValidationError

from gridrisk.engine.schemas import AnalysisMode, AnalysisProfile
from gridrisk.exceptions import InvalidProfileError, ProfileUnavailableError

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS: float = 30.0


class ProfileResolver(Protocol):
    """Protocol for analysis profile sources."""

    async def resolve(self, mode: AnalysisMode) -> AnalysisProfile:
        """
        Return the profile for ``mode``.

        Raises:
            ProfileUnavailableError: the source could not deliver a profile
            InvalidProfileError: the delivered profile is unusable
        """
        ...


def parse_profile(body: object, mode: AnalysisMode) -> AnalysisProfile:
    """Validate a raw profile body against the requested mode."""
    try:
        profile = AnalysisProfile.model_validate(body)
    except ValidationError as exc:
        raise InvalidProfileError(
            f"Analysis profile '{mode.value}' is malformed",
            mode=mode.value,
            details={"errors": exc.errors(include_url=False, include_input=False)},
        ) from exc

    if profile.id != mode:
        raise InvalidProfileError(
            f"Analysis profile id '{profile.id.value}' does not match mode '{mode.value}'",
            mode=mode.value,
            details={"profile_id": profile.id.value},
        )
    return profile


class HttpProfileResolver:
    """
    HTTP client for the profile service.

    A fresh client per call: the worker holds no connection state between jobs.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    def profile_url(self, mode: AnalysisMode) -> str:
        return f"{self.base_url}/analysisProfiles/{mode.value}"

    async def resolve(self, mode: AnalysisMode) -> AnalysisProfile:
        url = self.profile_url(mode)
        logger.info("profile_fetch_started", mode=mode.value, url=url)

        try:
            async with self._client() as client:
                resp = await client.get(url)
                resp.raise_for_status()
                body = resp.json()
        except httpx.TimeoutException as exc:
            logger.error("profile_fetch_timeout", mode=mode.value, timeout=self.timeout)
            raise ProfileUnavailableError(mode.value, reason="timeout") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "profile_fetch_failed",
                mode=mode.value,
                status=exc.response.status_code,
            )
            raise ProfileUnavailableError(
                mode.value, reason=f"http {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("profile_fetch_failed", mode=mode.value, error=str(exc))
            raise ProfileUnavailableError(mode.value, reason=str(exc)) from exc
        except ValueError as exc:
            logger.error("profile_body_not_json", mode=mode.value, error=str(exc))
            raise ProfileUnavailableError(mode.value, reason="invalid json") from exc

        profile = parse_profile(body, mode)
        logger.info("profile_fetched", mode=mode.value)
        return profile


class StaticProfileResolver:
    """In-memory resolver for tests and offline runs."""

    def __init__(self, profiles: Mapping[AnalysisMode, AnalysisProfile]):
        self._profiles = dict(profiles)

    async def resolve(self, mode: AnalysisMode) -> AnalysisProfile:
        profile = self._profiles.get(mode)
        if profile is None:
            raise ProfileUnavailableError(mode.value, reason="no profile configured")
        return profile
