"""Logging helpers for jsonrpc-proxy.

The library only creates module loggers and never configures handlers on
import. Applications that want console output call configure_logging().

Logging Levels:
- DEBUG: Requests sent, responses received, late results discarded
- WARNING: Calls abandoned after their time limit

Header values are passed through redact_headers() before they are logged,
since transports commonly carry credentials in headers.
"""

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

LOG_LEVEL_ENV = "JSONRPC_PROXY_LOG_LEVEL"

# Secret formats that show up in header values
DEFAULT_REDACT_PATTERNS: list[str] = [
    r"\bBearer\s+([A-Za-z0-9._\-+=/]{8,})",
    # key=value credentials: API_KEY=secret, token: secret
    r"\b[A-Z0-9_]*(?:KEY|TOKEN|SECRET|PASSWORD|PASSWD)\s*[=:]\s*([^\s\"';,]{8,})",
]

# Header names whose values are always masked regardless of content
SENSITIVE_HEADERS = frozenset(
    {"authorization", "proxy-authorization", "cookie", "x-api-key"}
)


@dataclass
class SecretRedactor:
    """Masks bearer tokens and key=value credentials in header values."""

    patterns: list[re.Pattern[str]] = field(default_factory=list)
    enabled: bool = True

    def __post_init__(self) -> None:
        if not self.patterns:
            self.patterns = [
                re.compile(p, re.IGNORECASE) for p in DEFAULT_REDACT_PATTERNS
            ]

    def redact(self, text: str) -> str:
        """Redact secrets from text, preserving partial info for debugging."""
        if not self.enabled or not text:
            return text
        result = text
        for pattern in self.patterns:
            result = pattern.sub(self._mask_match, result)
        return result

    def _mask_match(self, match: re.Match[str]) -> str:
        """Mask a matched secret, preserving start/end for identification."""
        full = match.group(0)
        token = match.group(1) if match.lastindex else full

        # Already masked
        if "..." in token:
            return full

        masked = mask_value(token)
        return full.replace(token, masked) if token != full else masked


def mask_value(token: str) -> str:
    """Mask a secret, keeping the first and last 4 chars of long values."""
    if len(token) < 12:
        return "***"
    return f"{token[:4]}...{token[-4:]}"


# Module-level redactor instance
_redactor = SecretRedactor()


def configure_redaction(
    enabled: bool = True, extra_patterns: list[str] | None = None
) -> None:
    """Configure secret redaction for logged values.

    Args:
        enabled: Whether to enable redaction.
        extra_patterns: Additional regex patterns to match secrets.
    """
    global _redactor
    patterns = [re.compile(p, re.IGNORECASE) for p in DEFAULT_REDACT_PATTERNS]
    if extra_patterns:
        patterns.extend(re.compile(p, re.IGNORECASE) for p in extra_patterns)
    _redactor = SecretRedactor(patterns=patterns, enabled=enabled)


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of headers that is safe to log."""
    if not _redactor.enabled:
        return dict(headers)
    return {
        name: mask_value(value)
        if name.lower() in SENSITIVE_HEADERS
        else _redactor.redact(value)
        for name, value in headers.items()
    }


# Third-party loggers that are too noisy at INFO level
NOISY_LOGGERS = [
    "httpx",
    "httpcore",
]


def configure_logging(level: str | None = None, use_rich: bool = False) -> None:
    """Configure logging for an application using jsonrpc-proxy.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses JSONRPC_PROXY_LOG_LEVEL env var or INFO.
        use_rich: Use Rich handler for colorful output.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    level = level.upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        level = "INFO"

    log_level = getattr(logging, level)

    console_handler: logging.Handler
    if use_rich:
        from rich.logging import RichHandler

        console_handler = RichHandler(
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        console_handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    logging.basicConfig(
        level=log_level,
        handlers=[console_handler],
        force=True,
    )

    # Suppress noisy third-party loggers
    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
