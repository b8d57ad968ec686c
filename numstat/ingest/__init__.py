"""
Input side: line sources and numeric token validation.
"""
from numstat.ingest.sources import BaseLineSource, FileLineSource
from numstat.ingest.validation import (
    NUMERIC_TOKEN,
    InvalidToken,
    OnInvalid,
    parse_token,
    policy_from_flags,
)

__all__ = [
    "BaseLineSource",
    "FileLineSource",
    "NUMERIC_TOKEN",
    "InvalidToken",
    "OnInvalid",
    "parse_token",
    "policy_from_flags",
]
