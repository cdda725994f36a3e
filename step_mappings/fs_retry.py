"""Atomic file writes with retry/backoff policies for the final rename."""

from __future__ import annotations

import dataclasses as dc
import logging
import os
import stat
import tempfile
import time
from pathlib import Path

_logger = logging.getLogger(__name__)

# mkstemp creates files readable by the owner only.
DEFAULT_FILE_MODE = 0o644


@dc.dataclass(frozen=True, slots=True)
class RetryConfig:
    """
    Configuration for retry loops.

    Attributes
    ----------
    max_attempts : int
        Maximum number of attempts (must be >= 1).
    retry_delay : float
        Delay in seconds between retry attempts (must be >= 0).

    Raises
    ------
    ValueError
        If max_attempts < 1 or retry_delay < 0.
    """

    max_attempts: int
    retry_delay: float

    def __post_init__(self) -> None:
        """Validate retry configuration values."""
        if self.max_attempts < 1:
            msg = "max_attempts must be >= 1"
            raise ValueError(msg)
        if self.retry_delay < 0:
            msg = "retry_delay must be >= 0"
            raise ValueError(msg)


DEFAULT_UNLINK_RETRY = RetryConfig(max_attempts=3, retry_delay=0.5)
DEFAULT_REPLACE_RETRY = RetryConfig(max_attempts=4, retry_delay=0.1)


def _log_retry_attempt(
    logger: logging.Logger, action: str, attempt: int, path: Path, retry_delay: float
) -> None:
    """Log a retry attempt with delay information."""
    logger.debug(
        "Attempt %d to %s %s failed. Retrying in %.1fs...",
        attempt + 1,
        action,
        path,
        retry_delay,
    )


def retry_unlink(
    path: Path,
    *,
    config: RetryConfig = DEFAULT_UNLINK_RETRY,
    logger: logging.Logger | None = None,
) -> None:
    """
    Unlink *path* with retries for transient filesystem errors.

    If the path does not exist or is removed during retries (FileNotFoundError),
    the operation succeeds silently. Transient errors (PermissionError, OSError)
    trigger retries with the configured delay.

    Raises
    ------
    PermissionError, OSError
        When all retry attempts are exhausted.
    """
    if not path.exists():
        return

    log = logger or _logger
    for attempt in range(config.max_attempts):
        try:
            path.unlink()
            return  # noqa: TRY300
        except FileNotFoundError:
            return
        except OSError:
            if attempt == config.max_attempts - 1:
                raise
            _log_retry_attempt(log, "remove", attempt, path, config.retry_delay)
            time.sleep(config.retry_delay)


def retry_replace(
    source: Path,
    target: Path,
    *,
    config: RetryConfig = DEFAULT_REPLACE_RETRY,
    logger: logging.Logger | None = None,
) -> None:
    """
    Move *source* over *target* with :func:`os.replace`, retrying on lock errors.

    Only :class:`PermissionError` is retried; Windows reports a target held
    open by another process that way. Any other :class:`OSError` propagates
    immediately.

    Raises
    ------
    PermissionError
        When all retry attempts are exhausted.
    """
    log = logger or _logger
    for attempt in range(config.max_attempts):
        try:
            os.replace(source, target)
            return  # noqa: TRY300
        except PermissionError:
            if attempt == config.max_attempts - 1:
                log.warning(
                    "Failed to replace %s after %d attempts",
                    target,
                    config.max_attempts,
                )
                raise
            _log_retry_attempt(log, "replace", attempt, target, config.retry_delay)
            time.sleep(config.retry_delay)


def _copy_permissions(target: Path, tmp_path: Path) -> None:
    """Give *tmp_path* the mode of *target*, or 0o644 for a new file."""
    try:
        mode = stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        mode = DEFAULT_FILE_MODE
    tmp_path.chmod(mode)


def write_text_atomic(
    path: Path,
    text: str,
    *,
    encoding: str = "utf-8",
    config: RetryConfig = DEFAULT_REPLACE_RETRY,
    logger: logging.Logger | None = None,
) -> None:
    """
    Write *text* to *path* so readers only ever see the old or new content.

    The text is written verbatim (no newline translation) to a temporary file
    beside *path*, flushed to disk, then renamed into place. The temporary
    file is removed if anything fails.

    Parameters
    ----------
    path : Path
        Destination file. Its directory must already exist.
    text : str
        Complete new content.
    encoding : str, optional
        Text encoding. Defaults to UTF-8.
    config : RetryConfig, optional
        Retry policy for the final rename.
    logger : logging.Logger | None, optional
        Logger for retry attempts. Defaults to module logger.
    """
    log = logger or _logger
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        _copy_permissions(path, tmp_path)
        retry_replace(tmp_path, path, config=config, logger=log)
    except BaseException:
        retry_unlink(tmp_path, logger=log)
        raise
    log.debug("Wrote %d characters to %s", len(text), path)
