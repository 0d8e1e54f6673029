"""Shared constants for the Textual UI."""

from __future__ import annotations

SWEEP_GREEN = "#3DDC97"
DEFAULT_RULE_LABEL = "Ignore URL parameters"
