"""Prompt templates for the AI visibility analysis."""

from models import PageSignals, ReportProfile

SYSTEM_MESSAGE = """You are a precise AI SEO analyst focused on visibility in AI engines.
Return ONLY valid raw JSON that matches the requested structure exactly.
Do not include markdown, code fences, or text outside JSON."""

ENGINE_NAMES = ("ChatGPT", "Claude", "Gemini", "Perplexity", "Copilot")

USER_TEMPLATE = """You are an expert AI SEO specialist focused on visibility in AI engines ({engines}).

Analyze the site content below for AI visibility (not generic SEO):

\"\"\"
URL: {url}
Title: {title}
Description: {meta_description}
Headings: {headings}
Images: {image_count} total, {images_with_alt_count} with alt text
Structured data detected: {structured_data}
Body (first {body_limit} chars): {body_text}
\"\"\"

Return ONLY a JSON object with exactly these keys:
- "whatsWorking": array of EXACTLY {whats_working} strings (2-4 sentences each, specific to this site).
- "needsAttention": array of EXACTLY {needs_attention} strings. Each string must follow:
  "[PRIORITY: High|Medium|Low] Title: Problem for AI engines. Solution: 2-3 concrete steps. Impact: expected result."
- "engineInsights": array of EXACTLY {engine_insights} strings, one for each of {engines}, with actionable recommendations.

Example structure:

{{
  "whatsWorking": ["string"],
  "needsAttention": ["[PRIORITY: High] Title: Problem. Solution: Steps. Impact: Result."],
  "engineInsights": ["ChatGPT: recommendation"]
}}

No prose outside JSON. No code fences. Do not use unescaped double quotes inside string values.
Keep language plain and client-facing."""


def build_user_prompt(url: str, signals: PageSignals, profile: ReportProfile) -> str:
    def _text_value(value: object) -> str:
        cleaned = str(value or "").strip()
        return cleaned if cleaned else "Not provided"

    return USER_TEMPLATE.format(
        engines=", ".join(ENGINE_NAMES),
        url=url,
        title=_text_value(signals.get("title")),
        meta_description=_text_value(signals.get("meta_description")),
        headings=_text_value(signals.get("headings_text")),
        image_count=signals.get("image_count", 0),
        images_with_alt_count=signals.get("images_with_alt_count", 0),
        structured_data="yes" if signals.get("has_structured_data") else "no",
        body_limit=profile.body_text_limit,
        body_text=_text_value(str(signals.get("body_text") or "")[: profile.body_text_limit]),
        whats_working=profile.whats_working_target,
        needs_attention=profile.needs_attention_target,
        engine_insights=profile.engine_insights_target,
    )
