"""
Leveled stderr logging shared by the CLI and the processing session.
"""
import sys

LOG_LEVEL = "warning"
LOG_ORDER = {"debug": 10, "info": 20, "warning": 30, "error": 40}


def set_log_level(level: str) -> None:
    global LOG_LEVEL
    if level not in LOG_ORDER:
        raise ValueError(f"unknown log level: {level}")
    LOG_LEVEL = level


def log(message, level="info"):
    if LOG_ORDER[level] < LOG_ORDER[LOG_LEVEL]:
        return
    print(message, file=sys.stderr)


def warning(message):
    log(message, "warning")
