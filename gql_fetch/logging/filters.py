"""
Custom logging filters for gql_fetch.

Default headers usually carry credentials, so anything that looks like an
authorization value is masked before it reaches a handler.
"""

import logging
import re
from typing import List, Pattern, Tuple

MASK = "***MASKED***"


class SensitiveDataFilter(logging.Filter):
    """Filter to mask credentials in log messages."""

    def __init__(self) -> None:
        """Initialize sensitive data filter."""
        super().__init__()

        self.rules: List[Tuple[Pattern[str], str]] = [
            # Authorization headers, including the scheme
            (
                re.compile(
                    r"""(authorization["']?\s*[:=]\s*["']?(?:(?:basic|bearer|token)\s+)?)([^"'\s,}]+)""",
                    re.IGNORECASE,
                ),
                r"\1" + MASK,
            ),
            # Bearer tokens anywhere else
            (
                re.compile(r"(bearer\s+)([A-Za-z0-9\-._~+/=]+)", re.IGNORECASE),
                r"\1" + MASK,
            ),
            # API keys, tokens, secrets and passwords
            (
                re.compile(
                    r"""((?:api[_-]?key|token|secret|password)["']?\s*[:=]\s*["']?)([^"'\s,}]+)""",
                    re.IGNORECASE,
                ),
                r"\1" + MASK,
            ),
            # URLs with credentials
            (
                re.compile(r"(https?://[^:/\s]+):([^@\s]+)@", re.IGNORECASE),
                r"\1:" + MASK + "@",
            ),
        ]

    def mask(self, message: str) -> str:
        for pattern, replacement in self.rules:
            message = pattern.sub(replacement, message)
        return message

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log record to mask sensitive data."""
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Leave records with broken format arguments to the handler
            return True

        record.msg = self.mask(message)
        record.args = ()
        return True
