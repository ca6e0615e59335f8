"""Core clustergate functionality."""

from __future__ import annotations

from clustergate.core.config import ConfigLoader

__all__ = ["ConfigLoader"]
