"""Centralized version constants for the tool and its artifacts."""
from __future__ import annotations

TOOL_VERSION = "v0.0.1"

PROGRESS_EVENT_VERSION = "1.0.0"
