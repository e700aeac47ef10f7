"""Page fetcher and markup extractor.

Fetches a single page and reduces it to the PageSignals the prompt needs:
title, meta description, heading text, capped body text, image/alt counts
and structured-data presence. Does NOT crawl subpages.
"""

import re
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

import settings
from models import PageSignals

_REQUEST_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; SnipeRankBot/1.0)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

HEADINGS_MAX_CHARS = 2000
DEFAULT_BODY_TEXT_LIMIT = 12000

EMPTY_SIGNALS: PageSignals = {
    "title": "",
    "meta_description": "",
    "headings_text": "",
    "body_text": "",
    "image_count": 0,
    "images_with_alt_count": 0,
    "has_structured_data": False,
}

_WHITESPACE = re.compile(r"\s+")


class PageFetchError(Exception):
    """Raised when the target page cannot be fetched.

    `reason` is a short code that ends up in the fallback report's meta.
    """

    def __init__(self, reason: str, message: str = ""):
        super().__init__(message or reason)
        self.reason = reason


def normalize_target_url(raw_url: object) -> str | None:
    """Return a fetchable http(s) URL, or None when the input is unusable."""
    text = str(raw_url or "").strip()
    if not text:
        return None
    if "://" not in text:
        text = f"https://{text}"

    try:
        parsed = urlparse(text)
    except ValueError:
        return None

    host = parsed.hostname or ""
    if parsed.scheme not in {"http", "https"} or not host:
        return None
    if any(ch.isspace() for ch in parsed.netloc):
        return None
    if "." not in host and host != "localhost":
        return None
    return text


def fetch_html(url: str, timeout: float | None = None) -> str:
    """
    Fetch `url` once and return its markup.
    Raises PageFetchError on timeout, connection failure or non-2xx status.
    """
    effective_timeout = settings.FETCH_TIMEOUT_SECONDS if timeout is None else timeout
    try:
        response = requests.get(
            url,
            timeout=effective_timeout,
            headers=_REQUEST_HEADERS,
            allow_redirects=True,
        )
    except requests.exceptions.Timeout as e:
        raise PageFetchError("fetch_timeout", f"Timed out fetching {url}") from e
    except requests.exceptions.ConnectionError as e:
        raise PageFetchError("fetch_connection_error", f"Could not connect to {url}") from e
    except requests.RequestException as e:
        raise PageFetchError("fetch_error", str(e)[:200]) from e

    if response.status_code >= 400:
        raise PageFetchError(
            f"fetch_http_{response.status_code}",
            f"{url} returned HTTP {response.status_code}",
        )

    if not response.encoding:
        response.encoding = response.apparent_encoding or "utf-8"
    return response.text or ""


def _clean_text(value: str) -> str:
    return _WHITESPACE.sub(" ", value or "").strip()


def extract_page_signals(html: str, url: str, body_text_limit: int = DEFAULT_BODY_TEXT_LIMIT) -> PageSignals:
    """
    Reduce raw markup to PageSignals.
    Never raises: unparseable or empty markup yields empty/zero values.
    """
    if not html:
        return dict(EMPTY_SIGNALS)

    try:
        soup = BeautifulSoup(html, "html.parser")
    except Exception as e:
        print(f"EXTRACT ERROR: could not parse markup for {url}:", str(e))
        return dict(EMPTY_SIGNALS)

    # --- Structured data (before scripts are removed) ---
    has_structured_data = bool(
        soup.find("script", attrs={"type": re.compile(r"^application/ld\+json$", re.I)})
        or soup.find(attrs={"itemtype": True})
    )

    for tag in soup.find_all(["script", "style", "noscript"]):
        tag.decompose()

    # --- Title ---
    title = ""
    if soup.title:
        title = _clean_text(soup.title.get_text())

    # --- Meta description ---
    meta_description = ""
    meta_desc_tag = soup.find("meta", attrs={"name": re.compile(r"^description$", re.I)})
    if meta_desc_tag and meta_desc_tag.get("content"):
        meta_description = _clean_text(meta_desc_tag["content"])

    # --- Headings ---
    heading_texts = [_clean_text(h.get_text(" ")) for h in soup.find_all(["h1", "h2", "h3"])]
    headings_text = " | ".join(t for t in heading_texts if t)[:HEADINGS_MAX_CHARS]

    # --- Body text ---
    body = soup.body or soup
    body_text = _clean_text(body.get_text(" "))[: max(0, body_text_limit)]

    # --- Images ---
    images = soup.find_all("img")
    images_with_alt = 0
    for img in images:
        alt = img.get("alt")
        if isinstance(alt, str) and alt.strip():
            images_with_alt += 1

    return {
        "title": title,
        "meta_description": meta_description,
        "headings_text": headings_text,
        "body_text": body_text,
        "image_count": len(images),
        "images_with_alt_count": images_with_alt,
        "has_structured_data": has_structured_data,
    }
