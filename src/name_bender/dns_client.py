"""
DNS-over-HTTPS client used as the domain availability oracle.

A name is considered available when the resolver answers NXDOMAIN (RCODE 3)
for it. Any other answer means the name is registered, and every failure
(non-2xx response, unreadable body, network error) is reported as taken.

Internationalized names are IDNA-encoded before the lookup.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse
import time

import httpx
import idna

from .audit_logger import AuditLogger
from .enums import AvailabilityStatus, DNSErrorCode, LogLevel
from .exceptions import NetworkError, ProtocolError


@dataclass
class DNSError:
    """Error information from a DNS-over-HTTPS lookup."""

    code: DNSErrorCode
    message: str
    http_status_code: Optional[int] = None


@dataclass
class DNSResponse:
    """Complete DNS-over-HTTPS lookup result."""

    domain: str  # ASCII form that was queried
    status: AvailabilityStatus  # AVAILABLE or TAKEN only
    http_status_code: int
    rcode: Optional[int]
    error: Optional[DNSError]
    response_time_ms: float = 0.0


def to_ascii(domain: str) -> str:
    """
    Convert a domain to its ASCII (punycode) form.

    ASCII input is only lower-cased. If IDNA encoding fails the lower-cased
    input is returned and the lookup is left to fail on its own.
    """
    lowered = domain.strip().lower()
    if all(ord(c) < 128 for c in lowered):
        return lowered
    try:
        return idna.encode(lowered, uts46=True).decode("ascii")
    except idna.IDNAError:
        return lowered


class DNSClient:
    """
    Async DNS-over-HTTPS client with TLS enforcement.

    Answers a single question per call: is ``name + tld`` registered?
    """

    # RCODE 3 in a DNS response: the queried name does not exist
    NXDOMAIN_RCODE = 3

    def __init__(
        self,
        endpoint: str = "https://cloudflare-dns.com/dns-query",
        timeout: float = 10.0,
        simulation_mode: bool = False,
        logger: Optional[AuditLogger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the DNS client.

        Args:
            endpoint: DNS-over-HTTPS JSON endpoint
            timeout: Request timeout in seconds
            simulation_mode: If True, no real network requests are made
            logger: Optional audit logger for failed lookups
            transport: Optional httpx transport (used to stub the network)
        """
        self._endpoint = endpoint
        self._timeout = timeout
        self._simulation_mode = simulation_mode
        self._logger = logger
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "DNSClient":
        """Async context manager entry."""
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                verify=True,
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def _validate_endpoint_url(self, endpoint: str) -> None:
        """
        Validate that the endpoint uses HTTPS (TLS).

        Raises:
            NetworkError: If the endpoint does not use HTTPS
        """
        parsed = urlparse(endpoint)
        if parsed.scheme.lower() != "https":
            raise NetworkError(
                code=DNSErrorCode.NETWORK_ERROR.value,
                message=f"DNS endpoint must use HTTPS: {endpoint}",
                details={"endpoint": endpoint, "scheme": parsed.scheme},
            )

    def _read_rcode(self, response: httpx.Response) -> int:
        """
        Extract the RCODE from a DNS JSON answer.

        Raises:
            ProtocolError: If the body is not JSON or lacks an integer Status
        """
        try:
            payload = response.json()
        except ValueError as e:
            raise ProtocolError(
                code=DNSErrorCode.PARSE_ERROR.value,
                message=f"DNS answer is not JSON: {e}",
            )
        rcode = payload.get("Status") if isinstance(payload, dict) else None
        if not isinstance(rcode, int) or isinstance(rcode, bool):
            raise ProtocolError(
                code=DNSErrorCode.PARSE_ERROR.value,
                message="DNS answer has no integer Status field",
                details={"payload": payload},
            )
        return rcode

    async def query(self, name: str, tld: str) -> DNSResponse:
        """
        Look up ``name + tld``.

        Never raises: every failure becomes a TAKEN response carrying an
        error record.
        """
        start_time = time.perf_counter()
        domain = to_ascii(f"{name}{tld}")

        try:
            self._validate_endpoint_url(self._endpoint)
        except NetworkError as e:
            return self._failed(domain, DNSErrorCode.NETWORK_ERROR, e.message, start_time)

        if self._simulation_mode:
            return self._create_simulation_response(domain, start_time)

        client = self._ensure_client()

        try:
            response = await client.get(
                self._endpoint,
                params={"name": domain},
                headers={"Accept": "application/dns-json"},
            )
        except httpx.TimeoutException:
            return self._failed(
                domain,
                DNSErrorCode.TIMEOUT,
                f"DNS lookup timed out after {self._timeout}s",
                start_time,
            )
        except Exception as e:
            return self._failed(
                domain, DNSErrorCode.NETWORK_ERROR, f"Connection error: {e}", start_time
            )

        if not response.is_success:
            return self._failed(
                domain,
                DNSErrorCode.HTTP_ERROR,
                f"DNS lookup failed: HTTP {response.status_code}",
                start_time,
                http_status_code=response.status_code,
            )

        try:
            rcode = self._read_rcode(response)
        except ProtocolError as e:
            return self._failed(
                domain,
                DNSErrorCode.PARSE_ERROR,
                e.message,
                start_time,
                http_status_code=response.status_code,
            )

        status = (
            AvailabilityStatus.AVAILABLE
            if rcode == self.NXDOMAIN_RCODE
            else AvailabilityStatus.TAKEN
        )
        return DNSResponse(
            domain=domain,
            status=status,
            http_status_code=response.status_code,
            rcode=rcode,
            error=None,
            response_time_ms=self._elapsed_ms(start_time),
        )

    async def check_availability(self, name: str, tld: str) -> AvailabilityStatus:
        """Availability oracle: AVAILABLE or TAKEN, never anything else."""
        response = await self.query(name, tld)
        return response.status

    def _failed(
        self,
        domain: str,
        code: DNSErrorCode,
        message: str,
        start_time: float,
        http_status_code: int = 0,
    ) -> DNSResponse:
        """Build the fail-closed response for a lookup that went wrong."""
        if self._logger:
            self._logger.log(
                LogLevel.WARN,
                "DNSClient",
                f"Lookup failed for {domain}, treating as taken",
                {"domain": domain, "code": code.value, "reason": message},
            )
        return DNSResponse(
            domain=domain,
            status=AvailabilityStatus.TAKEN,
            http_status_code=http_status_code,
            rcode=None,
            error=DNSError(
                code=code,
                message=message,
                http_status_code=http_status_code or None,
            ),
            response_time_ms=self._elapsed_ms(start_time),
        )

    def _elapsed_ms(self, start_time: float) -> float:
        """Calculate elapsed time in milliseconds."""
        return (time.perf_counter() - start_time) * 1000

    def _create_simulation_response(
        self, domain: str, start_time: float
    ) -> DNSResponse:
        """Simulated answer without network access; conservative TAKEN."""
        return DNSResponse(
            domain=domain,
            status=AvailabilityStatus.TAKEN,
            http_status_code=200,
            rcode=0,
            error=None,
            response_time_ms=self._elapsed_ms(start_time),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
