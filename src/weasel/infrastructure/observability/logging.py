"""Logging configuration with JSON formatting and a process-wide on/off switch."""

import logging
import sys
import traceback
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

from weasel.config.settings import ObservabilitySettings, get_settings

PACKAGE_LOGGER = "weasel"
_DISABLED_LEVEL = logging.CRITICAL + 1

# Level the package logger had before logging was switched off (None = enabled)
_saved_level: int | None = None


# Hey future me, module loggers are all children of "weasel" and sit at NOTSET, so they
# inherit the package logger's effective level. Parking that level above CRITICAL silences
# the whole hierarchy without touching handlers or third-party loggers.
def set_logging_enabled(enabled: bool) -> None:
    """Enable or disable all weasel loggers process-wide."""
    global _saved_level
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if enabled:
        if _saved_level is not None:
            package_logger.setLevel(_saved_level)
            _saved_level = None
    elif _saved_level is None:
        _saved_level = package_logger.level
        package_logger.setLevel(_DISABLED_LEVEL)


def is_logging_enabled() -> bool:
    return _saved_level is None


def _exception_chain(exc: BaseException) -> list[BaseException]:
    """Causes/contexts of exc, root cause first."""
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain[::-1]


def _is_own_frame(filename: str) -> bool:
    return "/site-packages/" not in filename and PACKAGE_LOGGER in filename


class CompactExceptionFormatter(logging.Formatter):
    """Text formatter that prints exception chains root cause first, weasel frames only.

    Example output:
    ERROR │ weasel.application...:154 │ Exception occurred while checking state of Imgur
    ╰─► ConnectError: All connection attempts failed
        File "imgur.py", line 145, in probe_state
          response = await self._api_get("/credits")
    """

    def formatException(self, ei: Any) -> str:
        exc_value = ei[1]
        if exc_value is None:
            return ""

        out: list[str] = []
        for exc in _exception_chain(exc_value):
            out.append(f"╰─► {type(exc).__name__}: {exc}")
            frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
            for frame in frames:
                if not _is_own_frame(frame.filename):
                    continue
                out.append(
                    f'    File "{Path(frame.filename).name}", line {frame.lineno}, in {frame.name}'
                )
                if frame.line:
                    out.append(f"      {frame.line.strip()}")
        return "\n".join(out)


class DetectorJsonFormatter(jsonlogger.JsonFormatter):  # type: ignore[name-defined,misc]
    """JSON formatter that stamps every record with the app name and source location.

    Detector state transitions pass `service`/`state` through `extra=`, those end up as
    top-level keys.
    """

    def __init__(self, *args: Any, app_name: str = PACKAGE_LOGGER, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.app_name = app_name

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.update(
            app=self.app_name,
            time=self.formatTime(record, self.datefmt),
            severity=record.levelname,
            source=f"{record.name}:{record.lineno}",
        )
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)


_NOISY_LOGGERS = ("httpx", "httpcore", "hpack", "asyncio")


# Listen future me, call this ONCE at startup. It swaps out whatever handlers the root
# logger had, so calling it again (tests, reloads) doesn't stack handlers.
def configure_logging(
    log_level: str = "INFO",
    json_format: bool = False,
    app_name: str = PACKAGE_LOGGER,
    enabled: bool = True,
) -> None:
    """Configure logging.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL), unknown names mean INFO
        json_format: One JSON object per line instead of the compact text format
        app_name: Name stamped on JSON records and the startup log
        enabled: Initial value of the process-wide weasel logging switch
    """
    level = logging.getLevelNamesMapping().get(log_level.upper(), logging.INFO)

    formatter: logging.Formatter
    if json_format:
        formatter = DetectorJsonFormatter(
            "%(message)s %(name)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
            app_name=app_name,
        )
    else:
        formatter = CompactExceptionFormatter(
            fmt="%(asctime)s │ %(levelname)-7s │ %(name)s:%(lineno)d │ %(message)s",
            datefmt="%H:%M:%S",
        )

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for old_handler in list(root_logger.handlers):
        root_logger.removeHandler(old_handler)
    root_logger.addHandler(stream_handler)
    root_logger.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    set_logging_enabled(enabled)

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={"app": app_name, "log_level": log_level, "json_format": json_format},
    )


def configure_logging_from_settings(settings: ObservabilitySettings | None = None) -> None:
    """configure_logging() driven by WEASEL_OBSERVABILITY__* settings."""
    settings = settings or get_settings().observability
    configure_logging(
        log_level=settings.log_level,
        json_format=settings.log_json_format,
        enabled=settings.logging_enabled,
    )
