"""Coerce parsed model output into the fixed report shape.

Every list leaving this module has exactly its target length. Missing or
short fields are padded with deterministic filler, long ones truncated.
"""

import json
import math
from typing import Any, Callable, NamedTuple

from models import ReportProfile

FillerFn = Callable[[int], str]

REPORT_FIELDS = ("whatsWorking", "needsAttention", "engineInsights")

_WHATS_WORKING_FILLER = [
    "The page is reachable and returns readable HTML that AI crawlers can process.",
    "Core page content is delivered as text rather than locked inside images or scripts.",
    "The site has a clear primary topic that AI engines can associate with the brand.",
    "Navigation exposes the main sections of the site, which helps engines map its structure.",
    "The page uses headings to break content into sections that can be summarized.",
    "Branding is consistent enough for AI engines to recognize the organization behind the site.",
    "Content is written in plain language that models can quote with little rewriting.",
    "The site presents its core offer early on the page, which supports direct answers.",
]

_NEEDS_ATTENTION_FILLER = [
    "[PRIORITY: High] Structured Data Coverage: AI engines rely on schema to understand entities and services. Solution: Add Organization, WebSite, and relevant Service/Product schemas sitewide. Impact: Improves inclusion in AI summaries.",
    "[PRIORITY: High] Answer-Ready Content: Pages lack short, direct answers to common questions. Solution: Add an FAQ block covering the top customer questions with two to three sentence answers. Impact: More citations in conversational results.",
    "[PRIORITY: Medium] Meta Description Gaps: Missing or weak descriptions reduce control over AI summaries. Solution: Write concise, task-focused descriptions for each key page. Impact: Clearer answers in AI results.",
    "[PRIORITY: Medium] Image Alt Text Coverage: Low coverage limits AI understanding of visuals. Solution: Add descriptive alt attributes to key images. Impact: Better context for multimodal AI.",
    "[PRIORITY: Medium] Entity Clarity: Brand, services and locations are not stated unambiguously. Solution: Name the business, its services and its service area in plain text near the top of the page. Impact: Stronger entity recognition.",
    "[PRIORITY: Medium] Authority Signals: Few visible credentials, reviews or citations. Solution: Add testimonials, certifications and links to authoritative sources. Impact: Higher trust when engines choose sources.",
    "[PRIORITY: Low] Content Freshness: No visible update dates on key pages. Solution: Show last-updated dates and refresh core pages regularly. Impact: Better eligibility for time-sensitive answers.",
    "[PRIORITY: Low] Internal Linking: Related pages are not linked with descriptive anchors. Solution: Link supporting pages from the homepage with task-based anchor text. Impact: Easier discovery of deeper content.",
]

_ENGINE_INSIGHT_FILLER = [
    "ChatGPT: Benefits from explicit FAQs and task-oriented sections; add Q/A blocks for core intents.",
    "Claude: Prefers clear structure and citations; ensure headings reflect user tasks and include authoritative links.",
    "Gemini: Leans on entities; add schema and unambiguous entity mentions for brands, services, and locations.",
    "Perplexity: Surfaces sources; add referenceable pages (guides, docs) with clear titles and summaries.",
    "Copilot: Values concise, skimmable answers; add checklists and short how-to steps.",
]


def _cycled(entries: list[str], index: int) -> str:
    base = entries[index % len(entries)]
    cycle = index // len(entries)
    if cycle == 0:
        return base
    return f"{base} (follow-up {cycle})"


def whats_working_filler(index: int) -> str:
    return _cycled(_WHATS_WORKING_FILLER, index)


def needs_attention_filler(index: int) -> str:
    return _cycled(_NEEDS_ATTENTION_FILLER, index)


def engine_insight_filler(index: int) -> str:
    return _cycled(_ENGINE_INSIGHT_FILLER, index)


class NormalizedField(NamedTuple):
    items: list[str]
    supplied: int


class NormalizedReport(NamedTuple):
    whats_working: NormalizedField
    needs_attention: NormalizedField
    engine_insights: NormalizedField


def _entry_to_text(entry: Any) -> str:
    if isinstance(entry, str):
        return entry.strip()
    if isinstance(entry, dict):
        title = str(entry.get("title") or "").strip()
        explanation = str(entry.get("explanation") or entry.get("description") or "").strip()
        if title and explanation:
            return f"{title}: {explanation}"
        if title or explanation:
            return title or explanation
        return json.dumps(entry, ensure_ascii=False)
    if isinstance(entry, (list, tuple)):
        return json.dumps(entry, ensure_ascii=False)
    return str(entry).strip()


def _is_count(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _list_entries(value: list) -> list[str]:
    items: list[str] = []
    for entry in value:
        if not entry:
            continue
        text = _entry_to_text(entry)
        if text:
            items.append(text)
    return items


def normalize_field(value: Any, target: int, filler_fn: FillerFn) -> NormalizedField:
    """Return exactly `target` strings built from `value`."""
    target = max(0, int(target))
    items: list[str] = []
    supplied = 0

    if isinstance(value, list):
        items = _list_entries(value)
        supplied = min(len(items), target)
    elif _is_count(value):
        # Model reported a count but omitted the content.
        for i in range(max(0, min(int(value), target))):
            items.append(filler_fn(i))

    while len(items) < target:
        items.append(filler_fn(len(items)))

    return NormalizedField(items[:target], supplied)


def has_usable_shape(parsed: Any) -> bool:
    """
    True when `parsed` is an object with at least one report field holding a
    non-empty entry. Counts and empty lists alone carry no model content.
    """
    if not isinstance(parsed, dict):
        return False
    return any(
        isinstance(parsed.get(field), list) and _list_entries(parsed[field])
        for field in REPORT_FIELDS
    )


def normalize_report(parsed: Any, profile: ReportProfile) -> NormalizedReport:
    source = parsed if isinstance(parsed, dict) else {}
    return NormalizedReport(
        whats_working=normalize_field(
            source.get("whatsWorking"), profile.whats_working_target, whats_working_filler
        ),
        needs_attention=normalize_field(
            source.get("needsAttention"), profile.needs_attention_target, needs_attention_filler
        ),
        engine_insights=normalize_field(
            source.get("engineInsights"), profile.engine_insights_target, engine_insight_filler
        ),
    )
