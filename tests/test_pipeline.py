"""Tests for change detection and persistence."""

import pytest

from clipurl.core.errors import PersistError
from clipurl.core.pipeline import LinkPipeline, PersistStatus
from clipurl.core.storage import LinkSink


class FailingSink(LinkSink):

    def persist(self, url):
        raise OSError(30, "Read-only file system")

    def describe(self):
        return "failing sink"


class TestLinkPipeline:

    def test_plain_text_is_adopted_but_not_persisted(self, memory_sink):
        pipeline = LinkPipeline(memory_sink)

        snapshot, outcome = pipeline.process("hello world", "")

        assert outcome.status is PersistStatus.SKIPPED_NOT_A_URL
        assert snapshot == "hello world"
        assert memory_sink.links == []

    def test_new_url_is_persisted(self, memory_sink):
        pipeline = LinkPipeline(memory_sink)

        snapshot, outcome = pipeline.process("https://example.com/a", "hello world")

        assert outcome.persisted
        assert outcome.record_id == 1
        assert str(outcome.url) == "https://example.com/a"
        assert snapshot == "https://example.com/a"
        assert memory_sink.links == ["https://example.com/a"]

    def test_unchanged_text_is_skipped(self, memory_sink):
        pipeline = LinkPipeline(memory_sink)

        snapshot, _ = pipeline.process("https://example.com/a", "")
        snapshot, outcome = pipeline.process("https://example.com/a", snapshot)

        assert outcome.status is PersistStatus.SKIPPED_UNCHANGED
        assert snapshot == "https://example.com/a"
        assert memory_sink.links == ["https://example.com/a"]

    @pytest.mark.parametrize("text", [
        "hello world",
        "https://example.com/a",
        "mailto:someone@example.com",
        "   ",
    ])
    def test_same_text_twice_persists_at_most_once(self, memory_sink, text):
        pipeline = LinkPipeline(memory_sink)

        snapshot, first = pipeline.process(text, "previous")
        snapshot, second = pipeline.process(text, snapshot)

        assert snapshot == text
        assert second.status is PersistStatus.SKIPPED_UNCHANGED
        assert len(memory_sink.links) == (1 if first.persisted else 0)

    def test_url_seen_again_after_other_text_is_persisted_again(self, memory_sink):
        pipeline = LinkPipeline(memory_sink)

        snapshot = ""
        for text in ["https://example.com/a", "hello", "https://example.com/a"]:
            snapshot, _ = pipeline.process(text, snapshot)

        assert memory_sink.links == ["https://example.com/a", "https://example.com/a"]

    def test_sink_failure_raises_persist_error(self):
        pipeline = LinkPipeline(FailingSink())

        with pytest.raises(PersistError) as exc_info:
            pipeline.process("https://example.com/a", "")

        assert "failing sink" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OSError)
