"""
Numeric token grammar and the policy applied to lines that fail it.
"""
import re
from enum import Enum

NUMERIC_TOKEN = re.compile(
    r"[+-]?(?:\.?\d+|\d+\.\d*|\.?\d+E[+-]?\d+|\d*\.\d+E[+-]?\d+)",
    re.IGNORECASE,
)


class OnInvalid(str, Enum):
    SILENT = "silent"
    WARN = "warn"
    ABORT = "abort"


def policy_from_flags(quiet: bool = False, strict: bool = False) -> OnInvalid:
    """strict wins over quiet: an aborting run still reports the offending line."""
    if strict:
        return OnInvalid.ABORT
    if quiet:
        return OnInvalid.SILENT
    return OnInvalid.WARN


class InvalidToken(ValueError):
    def __init__(self, token: str, line_number: int):
        super().__init__(f"invalid value '{token}' on input line {line_number}")
        self.token = token
        self.line_number = line_number


def parse_token(line: str) -> float | None:
    """Return the numeric value of a line, or None if it is not a valid token."""
    token = line.strip()
    if not NUMERIC_TOKEN.fullmatch(token):
        return None
    return float(token)
