"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known value rather
than magic integers scattered across the commands.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Command completed, or usage/help was displayed."""

GENERAL_ERROR: int = 1
"""Runtime failure: network, API, disabled feature, file I/O."""

USAGE_ERROR: int = 2
"""Missing or conflicting arguments. The network was never contacted."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C (128 + SIGINT)."""
