"""
Logging configuration for the BitMEX client.

Two handlers hang off the ``bmxclient`` logger:
  - Console : INFO-level, concise format
  - File    : DEBUG-level, detailed format, rotated at 5 MB (5 backups)

Both handlers run records through ``RedactingFilter``, which masks the
registered API secrets and any auth header value (``api-key``,
``api-signature``, ``api-secret``) before anything is written.
"""

from __future__ import annotations

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, Optional

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"

_MAX_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 5

REDACTED = "[REDACTED]"

REDACT_KEYS = frozenset({"api-key", "api-signature", "api-secret", "apisecret", "secret"})

# key, optional quote, separator, optional quote, then the value up to a delimiter
_KEY_VALUE_RE = re.compile(
    r"(?P<key>" + "|".join(re.escape(k) for k in sorted(REDACT_KEYS, key=len, reverse=True)) + r")"
    r"(?P<sep>['\"]?\s*[:=]\s*['\"]?)"
    r"(?P<value>[^'\",\s}]+)",
    re.IGNORECASE,
)


class RedactingFilter(logging.Filter):
    """Mask known secrets and auth header values in the rendered message."""

    def __init__(self, secrets: Iterable[str] = ()):
        super().__init__()
        self._secrets = set()
        self.add(secrets)

    def add(self, secrets: Iterable[str]) -> None:
        self._secrets.update(s.strip() for s in secrets if s and s.strip())

    def redact(self, text: str) -> str:
        # Longest first so a secret containing another is masked whole.
        for secret in sorted(self._secrets, key=len, reverse=True):
            text = text.replace(secret, REDACTED)
        return _KEY_VALUE_RE.sub(lambda m: f"{m.group('key')}{m.group('sep')}{REDACTED}", text)

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = self.redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(
    log_level: int = logging.DEBUG,
    log_dir: Optional[Path] = None,
    secrets: Iterable[str] = (),
) -> logging.Logger:
    """
    Configure and return the ``bmxclient`` logger.

    Safe to call again once credentials are known: later calls only register
    the extra *secrets* with the existing handlers.

    Parameters
    ----------
    log_level : int
        Minimum level for the *file* handler (console is always INFO).
    log_dir : Path, optional
        Where ``bmxclient.log`` goes; defaults to ``LOG_DIR``.
    secrets : iterable of str
        Literal values that must never reach a log line.
    """
    secrets = list(secrets)
    logger = logging.getLogger("bmxclient")
    logger.setLevel(log_level)

    if logger.handlers:
        for handler in logger.handlers:
            for flt in handler.filters:
                if isinstance(flt, RedactingFilter):
                    flt.add(secrets)
        return logger

    log_dir = log_dir or LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    redactor = RedactingFilter(secrets)

    log_file = log_dir / "bmxclient.log"
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.addFilter(redactor)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s.%(funcName)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.addFilter(redactor)
    console_handler.setFormatter(logging.Formatter("%(levelname)-8s | %(message)s"))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    logger.debug("Logging initialised – file: %s", log_file)
    return logger
