"""Optional Google PageSpeed Insights lookup.

Only called when PAGESPEED_API_KEY is configured. Any failure yields None
so the analysis continues with content-only scoring.
"""

import requests

import settings
from models import PerformanceMetrics

PAGESPEED_ENDPOINT = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"


def _category_score(categories: dict, key: str) -> float | None:
    score = (categories.get(key) or {}).get("score")
    if isinstance(score, (int, float)) and not isinstance(score, bool):
        return round(float(score) * 100, 1)
    return None


def _audit_value(audits: dict, key: str) -> float | None:
    value = (audits.get(key) or {}).get("numericValue")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return None


def fetch_performance_metrics(url: str, api_key: str, timeout: float | None = None) -> PerformanceMetrics | None:
    if not api_key:
        return None

    effective_timeout = settings.PAGESPEED_TIMEOUT_SECONDS if timeout is None else timeout
    try:
        response = requests.get(
            PAGESPEED_ENDPOINT,
            params=[
                ("url", url),
                ("key", api_key),
                ("strategy", "mobile"),
                ("category", "performance"),
                ("category", "seo"),
            ],
            timeout=effective_timeout,
        )
        if response.status_code != 200:
            print(f"PAGESPEED ERROR: HTTP {response.status_code} for {url}")
            return None
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        print("PAGESPEED ERROR:", str(e))
        return None

    lighthouse = data.get("lighthouseResult") if isinstance(data, dict) else None
    if not isinstance(lighthouse, dict):
        return None

    categories = lighthouse.get("categories") or {}
    audits = lighthouse.get("audits") or {}
    return {
        "performance_score": _category_score(categories, "performance"),
        "seo_score": _category_score(categories, "seo"),
        "lcp_ms": _audit_value(audits, "largest-contentful-paint"),
        "cls": _audit_value(audits, "cumulative-layout-shift"),
    }
