"""Logging formatters and filters for stream routing."""

import logging


class StreamFormatter(logging.Formatter):
    """Logging formatter that prepends stream tags based on extra parameter.

    Records without a stream are formatted unchanged. Tagging is off by
    default so CLI output stays clean; debug runs enable it to show which
    stream a line was routed to.

    Parameters
    ----------
    fmt : str | None
        Format string passed to logging.Formatter
    tag_streams : bool
        Prefix messages with "[stdout]" or "[stderr]"
    """

    def __init__(self, fmt: str | None = None, tag_streams: bool = False) -> None:
        super().__init__(fmt)
        self.tag_streams = tag_streams

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with stream prefix if present.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format

        Returns
        -------
        str
            Formatted log message with optional stream prefix
        """
        msg = super().format(record)
        stream = getattr(record, "stream", None)

        if not self.tag_streams:
            return msg

        if stream == "stdout":
            return f"[stdout] {msg}"
        elif stream == "stderr":
            return f"[stderr] {msg}"

        return msg


class StreamRoutingFilter(logging.Filter):
    """Filter that routes log records based on stream extra parameter.

    Records without a stream go to stderr, keeping stdout for results.

    Parameters
    ----------
    stream_type : str
        Stream type to allow: "stdout" or "stderr"
    """

    def __init__(self, stream_type: str) -> None:
        super().__init__()
        self.stream_type = stream_type

    def filter(self, record: logging.LogRecord) -> bool:
        record_stream = getattr(record, "stream", None)

        if record_stream is None:
            return self.stream_type == "stderr"

        return record_stream == self.stream_type
