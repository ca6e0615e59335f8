"""Logging helpers for clustergate."""

from clustergate.logging.formatters import StreamFormatter, StreamRoutingFilter

__all__ = ["StreamFormatter", "StreamRoutingFilter"]
