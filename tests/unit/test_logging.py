"""Tests for log stream routing."""

import logging

import pytest

from clustergate.logging import StreamFormatter, StreamRoutingFilter


def _record(stream: str | None = None) -> logging.LogRecord:
    record = logging.LogRecord("clustergate", logging.INFO, __file__, 1, "hello", None, None)
    if stream is not None:
        record.stream = stream
    return record


class TestStreamFormatter:
    @pytest.mark.parametrize(
        "stream,expected",
        [("stdout", "[stdout] hello"), ("stderr", "[stderr] hello"), (None, "hello")],
    )
    def test_tags_streams_when_enabled(self, stream: str | None, expected: str) -> None:
        formatter = StreamFormatter("%(message)s", tag_streams=True)
        assert formatter.format(_record(stream)) == expected

    def test_plain_by_default(self) -> None:
        formatter = StreamFormatter("%(message)s")
        assert formatter.format(_record("stdout")) == "hello"


class TestStreamRoutingFilter:
    def test_untagged_records_go_to_stderr(self) -> None:
        assert StreamRoutingFilter("stderr").filter(_record()) is True
        assert StreamRoutingFilter("stdout").filter(_record()) is False

    def test_tagged_records_follow_their_stream(self) -> None:
        assert StreamRoutingFilter("stdout").filter(_record("stdout")) is True
        assert StreamRoutingFilter("stderr").filter(_record("stdout")) is False
