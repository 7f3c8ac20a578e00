"""Standardized CLI exit codes for kbgraph.

Exit code scheme:

    0  SUCCESS           -- command completed
    1  GENERAL_ERROR     -- unexpected failure, crash, unhandled exception
    2  USAGE_ERROR       -- invalid arguments, bad flags, unknown command (Click default)
    3  DATABASE_MISSING  -- entity snapshot not found
    4  DATABASE_INVALID  -- snapshot is not valid JSON or has the wrong shape
    5  GATE_FAILURE      -- a CI check failed (e.g. orphans present)

CI jobs can tell "the corpus has problems" (5) apart from "the tool could
not run" (1, 3, 4).
"""

from __future__ import annotations

import click

# ---------------------------------------------------------------------------
# Exit code constants
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1
EXIT_USAGE: int = 2
EXIT_DATABASE_MISSING: int = 3
EXIT_DATABASE_INVALID: int = 4
EXIT_GATE_FAILURE: int = 5

DESCRIPTIONS: dict[int, str] = {
    EXIT_SUCCESS: "success",
    EXIT_ERROR: "unexpected error",
    EXIT_USAGE: "invalid usage (bad arguments or flags)",
    EXIT_DATABASE_MISSING: "entity snapshot not found -- pass --database or set KBGRAPH_DATABASE",
    EXIT_DATABASE_INVALID: "entity snapshot is malformed",
    EXIT_GATE_FAILURE: "gate check failed",
}

# ---------------------------------------------------------------------------
# Custom exceptions (caught by Click's error handler)
# ---------------------------------------------------------------------------


class KbGraphError(click.ClickException):
    """Base class for kbgraph errors with exit codes."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.exit_code = exit_code

    def format_message(self) -> str:
        return self.message


class DatabaseMissingError(KbGraphError):
    """Raised when the entity snapshot does not exist."""

    def __init__(self, message: str = "No entity snapshot found. Pass --database or set KBGRAPH_DATABASE."):
        super().__init__(message, EXIT_DATABASE_MISSING)


class DatabaseInvalidError(KbGraphError):
    """Raised when the entity snapshot or render graph cannot be parsed."""

    def __init__(self, message: str = "Entity snapshot is malformed."):
        super().__init__(message, EXIT_DATABASE_INVALID)


class GateFailureError(KbGraphError):
    """Raised when a gate check fails."""

    def __init__(self, message: str = "Gate check failed."):
        super().__init__(message, EXIT_GATE_FAILURE)
