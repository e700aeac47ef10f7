"""Bounded AI visibility score.

The content score rises with the number of strengths and falls with the
number of issues. When PageSpeed metrics are available the score also
takes measured performance and on-page signals into account.
"""

from typing import Sequence

from models import PageSignals, PerformanceMetrics, ScoreWeights

DEFAULT_WEIGHTS = ScoreWeights()

LCP_GOOD_MS = 2500
LCP_POOR_MS = 4000
CLS_GOOD = 0.1
CLS_POOR = 0.25


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _content_points(strengths: Sequence[str], issues: Sequence[str], weights: ScoreWeights) -> float:
    bonus = min(len(strengths or []) * weights.strength_weight, weights.strength_cap)
    penalty = min(len(issues or []) * weights.issue_weight, weights.issue_cap)
    return weights.base + bonus - penalty


def compute_score(
    strengths: Sequence[str],
    issues: Sequence[str],
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> int:
    """Content-only score, clamped to [weights.low, weights.high]."""
    raw = _content_points(strengths, issues, weights)
    return int(_clamp(round(raw), weights.low, weights.high))


def _lighthouse_term(score: float | None, max_points: float) -> float:
    # 0..100 mapped onto -max_points..+max_points, 50 is neutral.
    if score is None:
        return 0.0
    return _clamp((float(score) - 50) / 50 * max_points, -max_points, max_points)


def _signal_points(signals: PageSignals | None) -> float:
    if not signals:
        return 0.0

    points = 0.0
    points += 2 if signals.get("meta_description") else -3
    points += 3 if signals.get("has_structured_data") else -3

    image_count = signals.get("image_count", 0) or 0
    if image_count > 0:
        coverage = (signals.get("images_with_alt_count", 0) or 0) / image_count
        if coverage >= 0.9:
            points += 2
        elif coverage < 0.5:
            points -= 3
    return points


def _metric_points(metrics: PerformanceMetrics) -> float:
    points = _lighthouse_term(metrics.get("performance_score"), 6)
    points += _lighthouse_term(metrics.get("seo_score"), 4)

    lcp_ms = metrics.get("lcp_ms")
    if lcp_ms is not None:
        if lcp_ms <= LCP_GOOD_MS:
            points += 3
        elif lcp_ms > LCP_POOR_MS:
            points -= 5

    cls = metrics.get("cls")
    if cls is not None:
        if cls <= CLS_GOOD:
            points += 2
        elif cls > CLS_POOR:
            points -= 4
    return points


def compute_metrics_score(
    strengths: Sequence[str],
    issues: Sequence[str],
    signals: PageSignals | None,
    metrics: PerformanceMetrics | None,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> int:
    """
    Content score plus bounded terms for measured performance, Core Web Vitals,
    meta description, structured data and alt-text coverage.
    Falls back to compute_score when no metrics are available.
    """
    if not metrics:
        return compute_score(strengths, issues, weights)

    raw = _content_points(strengths, issues, weights) + _signal_points(signals) + _metric_points(metrics)
    return int(_clamp(round(raw), weights.low, weights.high))
