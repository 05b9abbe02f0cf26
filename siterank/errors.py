"""Error types raised while collecting input and talking to the analysis service."""

from __future__ import annotations


class SiteRankError(Exception):
    """Base class for all SiteRank errors."""


class EmptyInputError(SiteRankError):
    """No identifiers were left after collecting the input text."""

    def __init__(self, message: str = "Please enter at least one URL."):
        super().__init__(message)


class AnalysisError(SiteRankError):
    """The analysis request did not produce a usable result set."""


class NetworkError(AnalysisError):
    """The request could not complete (DNS, connection refused, timeout)."""


class HttpStatusError(AnalysisError):
    """The service answered with a non-success status code."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}")


class DecodeError(AnalysisError):
    """The response body could not be parsed into analysis records."""


class AnalysisInProgressError(SiteRankError):
    """A second analysis was requested while one is still outstanding."""

    def __init__(self, message: str = "An analysis is already in progress"):
        super().__init__(message)
