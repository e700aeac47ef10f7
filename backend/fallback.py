"""Schema-valid report used whenever the AI pipeline cannot produce one.

Pure and side-effect free: no network, no environment lookups.
"""

from datetime import datetime, timezone

from models import AnalysisReport, FULL_PROFILE, ReportProfile
from normalizer import (
    engine_insight_filler,
    needs_attention_filler,
    normalize_field,
    whats_working_filler,
)

FALLBACK_SCORE = 50
FALLBACK_MODE = "lite-fallback"

FALLBACK_WHATS_WORKING = [
    "Your website is accessible and loads successfully for crawlers.",
    "HTTPS appears active, which is a baseline trust signal for AI engines.",
]

FALLBACK_NEEDS_ATTENTION = [needs_attention_filler(i) for i in range(3)]

FALLBACK_ENGINE_INSIGHTS = [engine_insight_filler(i) for i in range(5)]


def build_fallback_report(
    url: str,
    reason: str,
    profile: ReportProfile = FULL_PROFILE,
    snippet: str = "",
    model: str | None = None,
) -> AnalysisReport:
    meta = {
        "url": url,
        "mode": FALLBACK_MODE,
        "reason": reason or "fallback",
        "profile": profile.name,
        "model": model or profile.model,
        "analyzedAt": datetime.now(timezone.utc).isoformat(),
        "metricsUsed": False,
    }
    if snippet:
        meta["snippet"] = snippet

    return {
        "success": False,
        "score": FALLBACK_SCORE,
        "whats_working": normalize_field(
            FALLBACK_WHATS_WORKING, profile.whats_working_target, whats_working_filler
        ).items,
        "needs_attention": normalize_field(
            FALLBACK_NEEDS_ATTENTION, profile.needs_attention_target, needs_attention_filler
        ).items,
        "engine_insights": normalize_field(
            FALLBACK_ENGINE_INSIGHTS, profile.engine_insights_target, engine_insight_filler
        ).items,
        "meta": meta,
    }
