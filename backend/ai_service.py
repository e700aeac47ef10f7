"""
AI visibility analysis pipeline.

fetch page (+ optional PageSpeed) -> extract signals -> build prompt -> Claude
-> extract JSON -> validate shape -> normalize -> score.

Any failure from the fetch onward returns the fallback report. Never raises.
The Claude client is built by build_llm_client() and passed in, so callers
and tests can supply their own.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Callable

from anthropic import (
    Anthropic,
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AuthenticationError,
    PermissionDeniedError,
)

import settings
from fallback import build_fallback_report
from models import AnalysisReport, FULL_PROFILE, PageSignals, PerformanceMetrics, ReportProfile
from normalizer import has_usable_shape, normalize_report
from pagespeed import fetch_performance_metrics
from prompts import SYSTEM_MESSAGE, build_user_prompt
from response_parser import PARSE_INVALID, PARSE_MISSING, parse_model_output
from scoring import compute_metrics_score
from scraper import PageFetchError, extract_page_signals, fetch_html

HtmlFetcher = Callable[[str], str]
MetricsFetcher = Callable[[str, str], PerformanceMetrics | None]


def build_llm_client(api_key: str | None = None) -> Anthropic | None:
    """Return a Claude client, or None when no credential is configured."""
    key = (api_key if api_key is not None else settings.get_anthropic_api_key()).strip()
    if not key:
        return None
    # Single attempt per request; a timeout routes to the fallback.
    return Anthropic(api_key=key, timeout=settings.CLAUDE_TIMEOUT_SECONDS, max_retries=0)


def _extract_response_text(response: object) -> str:
    content = ""
    for block in getattr(response, "content", []) or []:
        text = getattr(block, "text", None)
        if text:
            content += text
    return content.strip()


def _call_claude(client: Anthropic, user_message: str, profile: ReportProfile) -> str:
    response = client.messages.create(
        model=profile.model,
        max_tokens=profile.max_tokens,
        system=SYSTEM_MESSAGE,
        messages=[{"role": "user", "content": user_message}],
        temperature=settings.CLAUDE_TEMPERATURE,
    )
    if getattr(response, "stop_reason", None) == "max_tokens":
        print(f"CLAUDE WARNING: output hit max_tokens for model={profile.model}.")
    return _extract_response_text(response)


def _reason_for_model_error(exc: Exception) -> str:
    if isinstance(exc, (APITimeoutError, TimeoutError)):
        return "model_timeout"
    if isinstance(exc, (AuthenticationError, PermissionDeniedError)):
        return "model_auth_error"
    if isinstance(exc, APIConnectionError):
        return "model_connection_error"
    if isinstance(exc, APIStatusError):
        return f"model_http_{exc.status_code}"
    if "timeout" in str(exc).lower() or "timed out" in str(exc).lower():
        return "model_timeout"
    return "model_error"


def _fallback(url: str, reason: str, profile: ReportProfile, raw: str = "") -> AnalysisReport:
    snippet = (raw or "")[: settings.SNIPPET_MAX_CHARS]
    print(f"FALLBACK: url={url} profile={profile.name} reason={reason}")
    if snippet:
        print("FALLBACK SNIPPET:", snippet)
    return build_fallback_report(
        url,
        reason,
        profile,
        snippet=snippet if settings.EXPOSE_DIAGNOSTIC_SNIPPETS else "",
    )


def _collect_page(
    url: str,
    fetcher: HtmlFetcher,
    metrics_fetcher: MetricsFetcher,
    pagespeed_key: str,
) -> tuple[str, PerformanceMetrics | None]:
    """Fetch markup, and PageSpeed metrics concurrently when a key is set."""
    if not pagespeed_key:
        return fetcher(url), None

    with ThreadPoolExecutor(max_workers=2) as pool:
        html_future = pool.submit(fetcher, url)
        metrics_future = pool.submit(metrics_fetcher, url, pagespeed_key)
        try:
            metrics = metrics_future.result()
        except Exception as e:
            print("PAGESPEED ERROR:", str(e))
            metrics = None
        return html_future.result(), metrics


def analyze_url(
    url: str,
    client: Anthropic | None,
    profile: ReportProfile = FULL_PROFILE,
    fetcher: HtmlFetcher = fetch_html,
    metrics_fetcher: MetricsFetcher = fetch_performance_metrics,
    pagespeed_key: str | None = None,
) -> AnalysisReport:
    """
    Run the full pipeline for `url` and return a fixed-shape report.
    On missing key, fetch, API or JSON failure, returns the fallback. Never raises.
    """
    if client is None:
        print("ERROR: ANTHROPIC_API_KEY not found in environment.")
        return _fallback(url, "no_api_key", profile)

    try:
        key = settings.get_pagespeed_api_key() if pagespeed_key is None else pagespeed_key
        try:
            html, metrics = _collect_page(url, fetcher, metrics_fetcher, key)
        except PageFetchError as e:
            print(f"FETCH ERROR: {url}:", str(e))
            return _fallback(url, e.reason, profile)

        signals: PageSignals = extract_page_signals(html, url, profile.body_text_limit)
        user_message = build_user_prompt(url, signals, profile)

        try:
            content = _call_claude(client, user_message, profile)
        except Exception as e:
            print("CLAUDE ERROR:", type(e).__name__, str(e))
            return _fallback(url, _reason_for_model_error(e), profile)

        print("========== RAW CLAUDE RESPONSE ==========")
        print(content[:2000])
        print("==========================================")

        if not content:
            return _fallback(url, "empty_response", profile)

        parsed = parse_model_output(content)
        if parsed.status == PARSE_MISSING:
            return _fallback(url, "parse_missing_json", profile, content)
        if parsed.status == PARSE_INVALID:
            return _fallback(url, "parse_invalid_json", profile, content)
        if not has_usable_shape(parsed.value):
            return _fallback(url, "invalid_shape", profile, parsed.candidate)

        normalized = normalize_report(parsed.value, profile)
        working = normalized.whats_working
        attention = normalized.needs_attention
        insights = normalized.engine_insights

        # Filler is excluded so the score reflects what the model actually found.
        score = compute_metrics_score(
            working.items[: working.supplied],
            attention.items[: attention.supplied],
            signals,
            metrics,
            profile.weights,
        )

        return {
            "success": True,
            "score": score,
            "whats_working": working.items,
            "needs_attention": attention.items,
            "engine_insights": insights.items,
            "meta": {
                "analyzedAt": datetime.now(timezone.utc).isoformat(),
                "model": profile.model,
                "profile": profile.name,
                "mode": "ai",
                "url": url,
                "metricsUsed": metrics is not None,
                "modelItems": {
                    "whatsWorking": working.supplied,
                    "needsAttention": attention.supplied,
                    "engineInsights": insights.supplied,
                },
            },
        }
    except Exception as e:
        print("ANALYSIS ERROR:", type(e).__name__, str(e))
        return _fallback(url, "internal_error", profile)
