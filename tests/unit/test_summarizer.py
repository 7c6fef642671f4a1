"""Tests for tier-3 summarizers."""

from __future__ import annotations

import json

from tests.fakes.fake_artifacts import text_of_tokens
from tiered_context.context.summarization import (
    TRUNCATION_MARKER,
    HeuristicSummarizer,
    PassthroughSummarizer,
    create_summarizer,
)
from tiered_context.core.config import AggregationConfig


class TestHeuristicSummarizer:
    """Shrinks content over the target; leaves smaller content alone."""

    def test_small_content_passes_through(self) -> None:
        text = text_of_tokens(200)
        result = HeuristicSummarizer().summarize(text, target_tokens=200)
        assert result.text == text
        assert result.method == "passthrough"
        assert result.changed is False

    def test_plain_text_truncated_proportionally(self) -> None:
        text = text_of_tokens(400)
        result = HeuristicSummarizer().summarize(text, target_tokens=200)
        assert result.method == "truncate"
        assert result.text == "x" * 800 + TRUNCATION_MARKER
        assert result.original_tokens == 400
        assert result.summarized_tokens < result.original_tokens
        assert result.malformed is False

    def test_json_object_keeps_first_fields(self) -> None:
        data = {f"field{i}": "v" * 300 for i in range(8)}
        data["field1"] = ["a", "b", "c"]
        result = HeuristicSummarizer().summarize(json.dumps(data), target_tokens=50)

        assert result.method == "json_fields"
        pruned = json.loads(result.text)
        assert list(pruned) == ["field0", "field1", "field2", "field3", "field4"]
        assert pruned["field0"] == "v" * 100 + "..."
        assert pruned["field1"] == "[Array of 3 items]"

    def test_short_values_kept_verbatim(self) -> None:
        data = {"title": "Short", "count": 3, "body": "z" * 2000}
        result = HeuristicSummarizer(max_string_chars=10).summarize(json.dumps(data), target_tokens=20)
        pruned = json.loads(result.text)
        assert pruned["title"] == "Short"
        assert pruned["count"] == 3
        assert pruned["body"] == "z" * 10 + "..."

    def test_json_array_truncated_as_text(self) -> None:
        text = json.dumps(["item"] * 500)
        result = HeuristicSummarizer().summarize(text, target_tokens=50)
        assert result.method == "truncate"
        assert result.text.endswith(TRUNCATION_MARKER)
        assert result.malformed is False

    def test_malformed_json_flagged_and_truncated(self) -> None:
        text = '{"broken": "' + "y" * 2000
        result = HeuristicSummarizer().summarize(text, target_tokens=50)
        assert result.malformed is True
        assert result.method == "truncate"
        assert result.text.endswith(TRUNCATION_MARKER)


class TestPassthroughSummarizer:
    def test_never_changes_content(self) -> None:
        text = text_of_tokens(1000)
        result = PassthroughSummarizer().summarize(text, target_tokens=10)
        assert result.text == text
        assert result.summarized_tokens == 1000


class TestFactory:
    def test_default_is_heuristic(self) -> None:
        assert isinstance(create_summarizer(None), HeuristicSummarizer)

    def test_passthrough_from_config(self) -> None:
        assert isinstance(create_summarizer(AggregationConfig(summarizer="passthrough")), PassthroughSummarizer)
