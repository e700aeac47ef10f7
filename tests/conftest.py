"""
Pytest fixtures and configuration for backend tests.
"""

import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import Mock

import pytest

# Backend modules are imported as top-level modules, like the app does.
BACKEND_DIR = Path(__file__).parent.parent / "backend"
sys.path.insert(0, str(BACKEND_DIR))


class FakeMessages:
    """Stands in for Anthropic().messages: returns canned text or raises."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            content=[SimpleNamespace(type="text", text=self.text)],
            stop_reason="end_turn",
        )


class FakeClaude:
    def __init__(self, text="", error=None):
        self.messages = FakeMessages(text=text, error=error)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real credentials out of every test."""
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("PAGESPEED_API_KEY", raising=False)


@pytest.fixture
def fake_claude():
    """Factory fixture for fake Claude clients."""
    def _create(text="", error=None):
        return FakeClaude(text=text, error=error)
    return _create


@pytest.fixture
def mock_response():
    """Factory fixture to create mock HTTP responses."""
    def _create_response(status_code=200, text="", url="https://example.com", json_data=None):
        response = Mock()
        response.status_code = status_code
        response.text = text
        response.content = text.encode()
        response.url = url
        response.encoding = "utf-8"
        response.headers = {"Content-Type": "text/html; charset=utf-8"}
        response.json.return_value = json_data
        return response
    return _create_response


@pytest.fixture
def sample_html():
    """Sample HTML for testing."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>  Example Company - Leading Solutions </title>
        <meta name="description" content="We provide leading solutions for your business needs.">
        <meta name="viewport" content="width=device-width, initial-scale=1">
        <script type="application/ld+json">{"@context": "https://schema.org", "@type": "Organization"}</script>
        <style>body { color: red; }</style>
    </head>
    <body>
        <h1>Welcome to Example Company</h1>
        <h2>Our   Services</h2>
        <h3>Consulting</h3>
        <h4>Ignored heading</h4>
        <p>We are a leading provider of business solutions. Our team of experts
        is dedicated to helping you succeed.</p>
        <img src="logo.png" alt="Company Logo">
        <img src="team.png" alt="   ">
        <img src="office.png">
        <script>var tracking = "should not appear";</script>
        <noscript>Enable JavaScript</noscript>
    </body>
    </html>
    """


@pytest.fixture
def minimal_html():
    """Minimal HTML with very little content."""
    return """
    <!DOCTYPE html>
    <html>
    <head></head>
    <body><p>Hello</p></body>
    </html>
    """


@pytest.fixture
def full_model_output():
    """Well-formed model reply for the full profile."""
    import json

    return json.dumps({
        "whatsWorking": [f"Strength {i}" for i in range(10)],
        "needsAttention": [f"[PRIORITY: High] Issue {i}: Problem. Solution: Fix. Impact: Better." for i in range(25)],
        "engineInsights": [f"Engine {i}: insight" for i in range(5)],
    })
