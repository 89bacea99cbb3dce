"""Secure logging utilities for the duplicate scanner.

Saved prompts are free-form user text and often carry pasted credentials,
addresses or links.  Every context value is serialized with ``safe_json``
and scrubbed by ``sanitize_text`` before it reaches a handler; prompt text
itself is only ever logged through ``preview``.
"""
import json
import logging
import re
from typing import Any, List, Optional, Pattern, Tuple

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(level=logging.INFO, format=DEFAULT_FORMAT, datefmt=DATE_FORMAT)

logger = logging.getLogger('promptscan')

# Applied in order; UUIDs and hex digests before the generic token rule.
_REDACTIONS: List[Tuple[Pattern[str], str]] = [
    (re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}'), '<email>'),
    (re.compile(r'sk-[a-zA-Z0-9]{20,}'), '<api-key>'),
    (re.compile(r'ghp_[a-zA-Z0-9]{36}'), '<github-token>'),
    (re.compile(r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}', re.IGNORECASE), '<uuid>'),
    (re.compile(r'\b[0-9a-f]{24,}\b', re.IGNORECASE), '<hash>'),
    (re.compile(r'[a-zA-Z0-9]{32,}'), '<token>'),
    (re.compile(r'https?://[^\s"]+'), '<url>'),
]


def configure_logging(level: str = "INFO", fmt: Optional[str] = None) -> None:
    """Apply level and format (usually from ``Config``) to the package logger."""
    logger.setLevel(level.upper())
    if fmt:
        formatter = logging.Formatter(fmt, datefmt=DATE_FORMAT)
        for handler in logging.getLogger().handlers:
            handler.setFormatter(formatter)


def sanitize_text(text: str) -> str:
    """Replace emails, keys, tokens, UUIDs, hex digests and URLs with placeholders.

    Args:
        text: Input text that may contain sensitive data

    Returns:
        Sanitized text with sensitive patterns replaced
    """
    if not text:
        return text
    for pattern, placeholder in _REDACTIONS:
        text = pattern.sub(placeholder, text)
    return text


def preview(text: str, limit: int = 40) -> str:
    """Sanitized, single-line excerpt of prompt text for log context."""
    flat = " ".join(sanitize_text(text).split())
    if len(flat) <= limit:
        return flat
    return flat[:limit].rstrip() + "…"


def safe_json(obj: Any, max_length: int = 1000) -> str:
    """Serialize ``obj`` to sanitized JSON, truncated to ``max_length``.

    Args:
        obj: Object to serialize
        max_length: Maximum length of output string

    Returns:
        Sanitized JSON string, or ``<unable to serialize>``
    """
    try:
        json_str = json.dumps(obj, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return "<unable to serialize>"

    sanitized = sanitize_text(json_str)
    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length] + "... [truncated]"
    return sanitized


def _emit(level: int, message: str, context: dict) -> None:
    if not logger.isEnabledFor(level):
        return
    if context:
        message = f"{message} | Context: {safe_json(context)}"
    logger.log(level, message)


def log_info(message: str, **kwargs) -> None:
    """Log info message with optional sanitized context."""
    _emit(logging.INFO, message, kwargs)


def log_warning(message: str, **kwargs) -> None:
    """Log warning message with optional sanitized context."""
    _emit(logging.WARNING, message, kwargs)


def log_error(message: str, **kwargs) -> None:
    """Log error message with optional sanitized context."""
    _emit(logging.ERROR, message, kwargs)


def log_debug(message: str, **kwargs) -> None:
    """Log debug message; context is not serialized unless DEBUG is enabled."""
    _emit(logging.DEBUG, message, kwargs)


def log_scan_progress(stage: str, **kwargs) -> None:
    """Log scanner progress through its stages.

    Args:
        stage: Current stage of the scan
        **kwargs: Additional context
    """
    log_info(f"Scan progress: {stage}", **kwargs)
