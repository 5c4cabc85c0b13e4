"""
Trademark registry client.

Searches the EUIPO trademark register for a name. A non-empty result list
means the name is taken, an empty one means no conflict was found. Without
a credential, or when the search fails, the answer is UNKNOWN and the user
is pointed at the TMview web search instead.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote
import time

import httpx

from .audit_logger import AuditLogger
from .config import TrademarkConfig
from .enums import AvailabilityStatus, LogLevel, TrademarkErrorCode


@dataclass
class TrademarkError:
    """Error information from a trademark search."""

    code: TrademarkErrorCode
    message: str
    http_status_code: Optional[int] = None


@dataclass
class TrademarkResponse:
    """Complete trademark search result."""

    name: str
    status: AvailabilityStatus  # AVAILABLE, TAKEN or UNKNOWN
    match_count: int
    http_status_code: int
    error: Optional[TrademarkError]
    response_time_ms: float = 0.0


class TrademarkClient:
    """Async client for the trademark search API."""

    def __init__(
        self,
        config: Optional[TrademarkConfig] = None,
        simulation_mode: bool = False,
        logger: Optional[AuditLogger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config or TrademarkConfig()
        self._simulation_mode = simulation_mode
        self._logger = logger
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "TrademarkClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def is_configured(self) -> bool:
        """True when a credential for the registry is available."""
        return bool(self._config.api_key)

    def manual_search_url(self, name: str) -> str:
        """URL of the public web search for the name."""
        return self._config.manual_search_url.format(name=quote(name, safe=""))

    async def search(self, name: str) -> TrademarkResponse:
        """
        Search the register for a name.

        Never raises. Failures produce an UNKNOWN response with an error.
        """
        start_time = time.perf_counter()

        if not self.is_configured:
            return self._unknown(
                name,
                TrademarkErrorCode.NOT_CONFIGURED,
                "No trademark API key configured",
                start_time,
            )

        if self._simulation_mode:
            return TrademarkResponse(
                name=name,
                status=AvailabilityStatus.UNKNOWN,
                match_count=0,
                http_status_code=200,
                error=None,
                response_time_ms=self._elapsed_ms(start_time),
            )

        if self._client is None:
            self._client = httpx.AsyncClient(
                verify=True,
                timeout=httpx.Timeout(self._config.timeout_seconds),
                transport=self._transport,
            )

        try:
            response = await self._client.get(
                self._config.endpoint,
                params={"criteria": name},
                headers={
                    "Authorization": f"Bearer {self._config.api_key}",
                    "Accept": "application/json",
                },
            )
        except httpx.TimeoutException:
            return self._unknown(
                name,
                TrademarkErrorCode.NETWORK_ERROR,
                f"Trademark search timed out after {self._config.timeout_seconds}s",
                start_time,
            )
        except Exception as e:
            return self._unknown(
                name, TrademarkErrorCode.NETWORK_ERROR, f"Connection error: {e}", start_time
            )

        if not response.is_success:
            return self._unknown(
                name,
                TrademarkErrorCode.HTTP_ERROR,
                f"Trademark search failed: HTTP {response.status_code}",
                start_time,
                http_status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            return self._unknown(
                name,
                TrademarkErrorCode.PARSE_ERROR,
                f"Trademark answer is not JSON: {e}",
                start_time,
                http_status_code=response.status_code,
            )

        results = payload.get("results") if isinstance(payload, dict) else None
        match_count = len(results) if isinstance(results, list) else 0

        return TrademarkResponse(
            name=name,
            status=AvailabilityStatus.TAKEN if match_count else AvailabilityStatus.AVAILABLE,
            match_count=match_count,
            http_status_code=response.status_code,
            error=None,
            response_time_ms=self._elapsed_ms(start_time),
        )

    async def check_trademark(self, name: str) -> AvailabilityStatus:
        """Trademark oracle: AVAILABLE, TAKEN or UNKNOWN (not checkable)."""
        response = await self.search(name)
        return response.status

    def _unknown(
        self,
        name: str,
        code: TrademarkErrorCode,
        message: str,
        start_time: float,
        http_status_code: int = 0,
    ) -> TrademarkResponse:
        if self._logger:
            level = LogLevel.INFO if code == TrademarkErrorCode.NOT_CONFIGURED else LogLevel.WARN
            self._logger.log(
                level,
                "TrademarkClient",
                f"Trademark status of {name} unknown: {message}",
                {"name": name, "code": code.value},
            )
        return TrademarkResponse(
            name=name,
            status=AvailabilityStatus.UNKNOWN,
            match_count=0,
            http_status_code=http_status_code,
            error=TrademarkError(
                code=code,
                message=message,
                http_status_code=http_status_code or None,
            ),
            response_time_ms=self._elapsed_ms(start_time),
        )

    def _elapsed_ms(self, start_time: float) -> float:
        return (time.perf_counter() - start_time) * 1000

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
