"""Data model for website analysis results.

Records arrive from the analysis service as JSON objects. Decoding is lenient
about missing fields (they become ``None`` and render as a degraded value) but
strict about shape: a record that is not a JSON object is a decode failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any

from ..errors import DecodeError

logger = logging.getLogger(__name__)


def _detail_block(data: dict, key: str) -> dict:
    """Return the nested detail object, or an empty dict when unusable."""
    block = data.get(key)
    if isinstance(block, dict):
        return block
    if block is not None:
        logger.debug("Ignoring %s of type %s", key, type(block).__name__)
    return {}


@dataclass
class PerformanceDetails:
    """Latency, transfer and link-health metrics for one site."""
    latency_ms: float | None = None
    latency_score: float | None = None
    compression: str | None = None
    cache_control: str | None = None
    content_length_kb: float | None = None
    broken_links: int | None = None
    total_links: int | None = None
    overall_score: float | None = None

    @classmethod
    def from_dict(cls, data: dict) -> PerformanceDetails:
        return cls(**{f.name: data.get(f.name) for f in fields(cls)})


@dataclass
class SecurityDetails:
    """Presence of HTTPS and the common security response headers."""
    https: bool | None = None
    hsts: bool | None = None
    csp: bool | None = None
    x_content_type_options: bool | None = None
    x_frame_options: bool | None = None
    referrer_policy: bool | None = None
    overall_score: float | None = None

    @classmethod
    def from_dict(cls, data: dict) -> SecurityDetails:
        return cls(**{f.name: data.get(f.name) for f in fields(cls)})


@dataclass
class SEODetails:
    """On-page and crawlability SEO signals."""
    has_page_title: bool | None = None
    has_meta_description: bool | None = None
    has_meta_tags: bool | None = None
    has_heading_structure: bool | None = None
    mobile_friendly: bool | None = None
    has_canonical_tag: bool | None = None
    has_robots_txt: bool | None = None
    has_sitemap_xml: bool | None = None
    image_alt_text_percentage: float | None = None
    overall_score: float | None = None

    @classmethod
    def from_dict(cls, data: dict) -> SEODetails:
        return cls(**{f.name: data.get(f.name) for f in fields(cls)})


@dataclass
class AnalysisResult:
    """One site's analysis as returned by the service."""
    url: str | None = None
    performance: Any = None
    security: Any = None
    seo: Any = None
    backend: str | None = None
    protocols: str | None = None
    response_time: str | None = None
    performance_details: PerformanceDetails = field(default_factory=PerformanceDetails)
    security_details: SecurityDetails = field(default_factory=SecurityDetails)
    seo_details: SEODetails = field(default_factory=SEODetails)

    @classmethod
    def from_dict(cls, data: Any) -> AnalysisResult:
        """Build a result from one decoded JSON element.

        Raises:
            DecodeError: If ``data`` is not a JSON object
        """
        if not isinstance(data, dict):
            raise DecodeError(
                f"Expected an analysis record object, got {type(data).__name__}"
            )

        # 'total' is derived locally and never taken from the payload
        return cls(
            url=data.get("url"),
            performance=data.get("performance"),
            security=data.get("security"),
            seo=data.get("seo"),
            backend=data.get("backend"),
            protocols=data.get("protocols"),
            response_time=data.get("response_time"),
            performance_details=PerformanceDetails.from_dict(
                _detail_block(data, "performance_details")
            ),
            security_details=SecurityDetails.from_dict(
                _detail_block(data, "security_details")
            ),
            seo_details=SEODetails.from_dict(_detail_block(data, "seo_details")),
        )


@dataclass
class RankedResult:
    """An analysis result with its locally computed composite score."""
    result: AnalysisResult
    total: int

    @property
    def url(self) -> str | None:
        return self.result.url

    @property
    def performance(self) -> Any:
        return self.result.performance

    @property
    def security(self) -> Any:
        return self.result.security

    @property
    def seo(self) -> Any:
        return self.result.seo


def decode_results(payload: Any) -> list[AnalysisResult]:
    """Decode a parsed response body into analysis results.

    Args:
        payload: Parsed JSON body

    Returns:
        One AnalysisResult per element, in response order

    Raises:
        DecodeError: If the body is not an array of objects
    """
    if not isinstance(payload, list):
        raise DecodeError(
            f"Expected a JSON array of results, got {type(payload).__name__}"
        )
    return [AnalysisResult.from_dict(item) for item in payload]
