"""HTTP client for the remote analysis service.

One batch request per analysis run: ``POST /analyze`` with every identifier.
A call ends in exactly one outcome, the full result set or one typed failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from .config import ViewerConfig
from .engine.models import AnalysisResult, decode_results
from .errors import (
    AnalysisError,
    AnalysisInProgressError,
    DecodeError,
    HttpStatusError,
    NetworkError,
)

logger = logging.getLogger(__name__)


@dataclass
class AnalysisOutcome:
    """Result of one analysis call: either results or an error, never both."""
    results: list[AnalysisResult] = field(default_factory=list)
    error: AnalysisError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, results: list[AnalysisResult]) -> AnalysisOutcome:
        return cls(results=results)

    @classmethod
    def failure(cls, error: AnalysisError) -> AnalysisOutcome:
        return cls(error=error)


class AnalysisClient:
    """Async client for the analysis service."""

    def __init__(
        self,
        config: ViewerConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            config: Viewer configuration (service URL, timeout)
            http_client: Optional pre-built httpx client; one is created
                         per call when omitted
        """
        self.config = config or ViewerConfig()
        self._http_client = http_client
        self._pending = False

    @property
    def pending(self) -> bool:
        """True while a request is outstanding."""
        return self._pending

    async def analyze(self, identifiers: list[str]) -> list[AnalysisResult]:
        """Analyze a batch of sites.

        Args:
            identifiers: Sites to analyze, as collected from the input

        Returns:
            One result per record in the response, in response order

        Raises:
            AnalysisInProgressError: If a previous call has not finished
            NetworkError: If the request could not complete
            HttpStatusError: If the service returned a non-2xx status
            DecodeError: If the body is not an array of result objects
        """
        if self._pending:
            raise AnalysisInProgressError()

        self._pending = True
        try:
            return await self._post(list(identifiers))
        finally:
            self._pending = False

    async def analyze_outcome(self, identifiers: list[str]) -> AnalysisOutcome:
        """Analyze a batch and wrap the result or failure in an AnalysisOutcome."""
        try:
            return AnalysisOutcome.success(await self.analyze(identifiers))
        except AnalysisError as e:
            return AnalysisOutcome.failure(e)

    async def _post(self, identifiers: list[str]) -> list[AnalysisResult]:
        url = self.config.analyze_endpoint
        logger.info("Requesting analysis of %d site(s) from %s", len(identifiers), url)

        try:
            if self._http_client is not None:
                response = await self._http_client.post(url, json={"urls": identifiers})
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                    response = await client.post(url, json={"urls": identifiers})
        except httpx.TimeoutException as e:
            logger.warning("Analysis request timed out: %s", e)
            raise NetworkError(f"Request timed out ({type(e).__name__})") from e
        except httpx.TransportError as e:
            logger.warning("Analysis request failed: %s", e)
            raise NetworkError(str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning("Analysis service returned HTTP %d", response.status_code)
            raise HttpStatusError(response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(f"Response body is not valid JSON: {e}") from e

        results = decode_results(payload)
        logger.info("Received %d result(s)", len(results))
        return results
