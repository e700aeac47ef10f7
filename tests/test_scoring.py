"""Tests for the bounded score calculator."""

import pytest

from models import FRIENDLY_PROFILE, FULL_PROFILE, ScoreWeights
from scoring import compute_metrics_score, compute_score

GOOD_SIGNALS = {
    "title": "Example",
    "meta_description": "A description",
    "headings_text": "",
    "body_text": "",
    "image_count": 10,
    "images_with_alt_count": 10,
    "has_structured_data": True,
}

POOR_SIGNALS = {
    "title": "",
    "meta_description": "",
    "headings_text": "",
    "body_text": "",
    "image_count": 10,
    "images_with_alt_count": 1,
    "has_structured_data": False,
}

GOOD_METRICS = {"performance_score": 100, "seo_score": 100, "lcp_ms": 1200, "cls": 0.01}
POOR_METRICS = {"performance_score": 5, "seo_score": 10, "lcp_ms": 9000, "cls": 0.6}


def _items(n):
    return [f"item {i}" for i in range(n)]


class TestComputeScore:
    """Tests for the content-only formula."""

    def test_baseline_values(self):
        assert compute_score([], []) == 40
        assert compute_score(_items(10), []) == 70
        assert compute_score(_items(10), _items(25)) == 40
        assert compute_score([], _items(25)) == 20

    def test_caps(self):
        assert compute_score(_items(100), []) == 70
        assert compute_score([], _items(100)) == 20

    def test_rounding(self):
        assert compute_score(_items(1), _items(1)) == 42

    @pytest.mark.parametrize("issues", [0, 5, 25])
    def test_monotonic_in_strengths(self, issues):
        """More strengths never lowers the score."""
        scores = [compute_score(_items(n), _items(issues)) for n in range(0, 15)]
        assert scores == sorted(scores)

    @pytest.mark.parametrize("strengths", [0, 5, 10])
    def test_monotonic_in_issues(self, strengths):
        """More issues never raises the score."""
        scores = [compute_score(_items(strengths), _items(n)) for n in range(0, 30)]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.parametrize("weights", [
        FULL_PROFILE.weights,
        FRIENDLY_PROFILE.weights,
        ScoreWeights(base=95, strength_weight=10, strength_cap=50),
        ScoreWeights(base=0, issue_weight=10, issue_cap=90),
    ])
    def test_bounds(self, weights):
        for s in range(0, 12):
            for i in range(0, 30, 3):
                assert 20 <= compute_score(_items(s), _items(i), weights) <= 100


class TestComputeMetricsScore:
    """Tests for the metrics-aware variant."""

    def test_without_metrics_matches_content_score(self):
        assert compute_metrics_score(_items(3), _items(4), GOOD_SIGNALS, None) == compute_score(_items(3), _items(4))

    def test_good_metrics_raise_score(self):
        base = compute_score(_items(5), _items(10))
        assert compute_metrics_score(_items(5), _items(10), GOOD_SIGNALS, GOOD_METRICS) > base

    def test_poor_metrics_lower_score(self):
        base = compute_score(_items(5), _items(10))
        assert compute_metrics_score(_items(5), _items(10), POOR_SIGNALS, POOR_METRICS) < base

    def test_missing_metric_values_are_neutral(self):
        empty = {"performance_score": None, "seo_score": None, "lcp_ms": None, "cls": None}
        no_images = dict(GOOD_SIGNALS, image_count=0, images_with_alt_count=0)
        # meta description (+2) and structured data (+3) still count.
        assert compute_metrics_score([], [], no_images, empty) == 45

    @pytest.mark.parametrize("signals,metrics", [
        (GOOD_SIGNALS, GOOD_METRICS),
        (POOR_SIGNALS, POOR_METRICS),
    ])
    def test_bounds(self, signals, metrics):
        for s in range(0, 12):
            for i in range(0, 30, 5):
                assert 20 <= compute_metrics_score(_items(s), _items(i), signals, metrics) <= 100

    def test_monotonic_in_strengths_and_issues(self):
        by_strength = [compute_metrics_score(_items(n), _items(5), POOR_SIGNALS, GOOD_METRICS) for n in range(12)]
        assert by_strength == sorted(by_strength)
        by_issue = [compute_metrics_score(_items(5), _items(n), GOOD_SIGNALS, POOR_METRICS) for n in range(30)]
        assert by_issue == sorted(by_issue, reverse=True)
