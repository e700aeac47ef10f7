"""Data models and types used across the backend.

HTTP request/response schemas live in schemas.py.
Types for the scraper, the AI pipeline and report profiles live here.
"""

from typing import Any, NamedTuple, TypedDict

import settings


class PageSignals(TypedDict):
    """Compact summary of a fetched page, built once per request."""

    title: str
    meta_description: str
    headings_text: str
    body_text: str
    image_count: int
    images_with_alt_count: int
    has_structured_data: bool


class PerformanceMetrics(TypedDict):
    """Subset of a PageSpeed Insights run used for scoring."""

    performance_score: float | None
    seo_score: float | None
    lcp_ms: float | None
    cls: float | None


class AnalysisReport(TypedDict):
    """Fixed-shape report returned to the frontend."""

    success: bool
    score: int
    whats_working: list[str]
    needs_attention: list[str]
    engine_insights: list[str]
    meta: dict[str, Any]


class ScoreWeights(NamedTuple):
    """Constants for the bounded content score."""

    base: float = 40
    strength_weight: float = 3
    strength_cap: float = 30
    issue_weight: float = 1.5
    issue_cap: float = 30
    low: int = 20
    high: int = 100


class ReportProfile(NamedTuple):
    """Target cardinalities and model settings for one report variant."""

    name: str
    whats_working_target: int
    needs_attention_target: int
    engine_insights_target: int
    body_text_limit: int
    model: str
    max_tokens: int
    weights: ScoreWeights


FULL_PROFILE = ReportProfile(
    name="full",
    whats_working_target=10,
    needs_attention_target=25,
    engine_insights_target=5,
    body_text_limit=12000,
    model=settings.CLAUDE_MODEL,
    max_tokens=settings.CLAUDE_MAX_TOKENS,
    weights=ScoreWeights(),
)

FRIENDLY_PROFILE = ReportProfile(
    name="friendly",
    whats_working_target=5,
    needs_attention_target=10,
    engine_insights_target=5,
    body_text_limit=7000,
    model=settings.CLAUDE_FRIENDLY_MODEL,
    max_tokens=settings.CLAUDE_FRIENDLY_MAX_TOKENS,
    weights=ScoreWeights(strength_cap=15, issue_weight=2, issue_cap=20),
)
