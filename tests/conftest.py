"""Shared fixtures: analysis service payloads."""

from __future__ import annotations

import pytest


def make_record(url: str, performance, security, seo, **overrides) -> dict:
    """Build one analysis record as the service returns it."""
    record = {
        "url": url,
        "performance": performance,
        "security": security,
        "seo": seo,
        "backend": "nginx",
        "protocols": "HTTP/2, TLS 1.3",
        "response_time": "234 ms",
        "performance_details": {
            "latency_ms": 233.6,
            "latency_score": 85,
            "compression": "gzip",
            "cache_control": "max-age=3600",
            "content_length_kb": 120,
            "broken_links": 2,
            "total_links": 40,
            "overall_score": performance,
        },
        "security_details": {
            "https": True,
            "hsts": True,
            "csp": False,
            "x_content_type_options": True,
            "x_frame_options": False,
            "referrer_policy": True,
            "overall_score": security,
        },
        "seo_details": {
            "has_page_title": True,
            "has_meta_description": False,
            "has_meta_tags": True,
            "has_heading_structure": True,
            "mobile_friendly": True,
            "has_canonical_tag": False,
            "has_robots_txt": True,
            "has_sitemap_xml": False,
            "image_alt_text_percentage": 75,
            "overall_score": seo,
        },
    }
    record.update(overrides)
    return record


@pytest.fixture
def sample_payload() -> list[dict]:
    """Two sites where b.com outranks a.com (80 vs 75)."""
    return [
        make_record("a.com", 60, 90, 75),
        make_record("b.com", 80, 80, 80),
    ]
