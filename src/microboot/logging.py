"""Logging setup driven by the pass-through logging flags.

The seven logging flags (``--logtostderr``, ``--alsologtostderr``,
``--log_dir``, ``--stderrthreshold``, ``--v``, ``--vmodule``,
``--log_backtrace_at``) are parsed by the command together with every other
flag and forwarded here as a `LoggingFlags` value. This module turns them into
handlers on the root logger:

- a Rich console handler on stderr, and/or
- a plain file handler writing ``microboot.log`` in the log directory.

Handlers installed by a previous call are replaced; handlers installed by
anyone else (e.g. pytest's capture) are left alone.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import platform
import sys
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

from microboot import config
from microboot.interfaces import BootstrapError

if TYPE_CHECKING:
    from logging import Logger

    from microboot.flags import FlagValues

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "microboot"

# stderrthreshold accepts severity names or their numeric index.
SEVERITIES = {
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "FATAL": logging.CRITICAL,
}
SEVERITY_ORDER = ("INFO", "WARNING", "ERROR", "FATAL")
DEFAULT_STDERR_THRESHOLD = logging.ERROR

_MANAGED = "_microboot_managed"


class LoggingConfigError(BootstrapError):
    """Raised when a logging flag has a malformed value."""

    def __init__(self, flag: str, value: str, reason: str) -> None:
        self.flag = flag
        self.value = value
        super().__init__(f"Invalid --{flag} value {value!r}: {reason}")


@dataclass(frozen=True)
class LoggingFlags:
    """The logging flag values forwarded by the bootstrap step."""

    logtostderr: bool = False
    alsologtostderr: bool = False
    log_dir: str = ""
    stderrthreshold: str = ""
    v: str = ""
    vmodule: str = ""
    log_backtrace_at: str = ""

    @classmethod
    def from_flags(cls, flags: FlagValues) -> LoggingFlags:
        """Pick the logging values out of the full flag set."""
        return cls(
            logtostderr=flags.logtostderr,
            alsologtostderr=flags.alsologtostderr,
            log_dir=flags.log_dir,
            stderrthreshold=flags.stderrthreshold,
            v=flags.v,
            vmodule=flags.vmodule,
            log_backtrace_at=flags.log_backtrace_at,
        )


class ComponentPrefixFilter(logging.Filter):
    """Tag console records with the component that emitted them.

    Records from this package get the module under the package, so
    ``microboot.adapters.broker`` shows as ``[broker]``. Records from any other
    logger get its top-level name, e.g. ``[urllib3]``. The package root
    logger itself gets no tag.
    """

    def __init__(self, project: str = PROJECT_PREFIX) -> None:
        super().__init__()
        self.project = project

    def filter(self, record: logging.LogRecord) -> bool:
        head, _, rest = record.name.partition(".")
        if head != self.project:
            record.prefix = f"[{head}]"
        elif rest:
            record.prefix = f"[{rest.rsplit('.', 1)[-1]}]"
        else:
            record.prefix = ""
        return True


class BacktraceFilter(logging.Filter):
    """Attach a stack trace to records emitted from one source location.

    Args:
        filename: Base name of the source file, e.g. ``bootstrap.py``.
        lineno: Line number within that file.
    """

    def __init__(self, filename: str, lineno: int) -> None:
        super().__init__()
        self.filename = filename
        self.lineno = lineno

    def filter(self, record: logging.LogRecord) -> bool:
        if (
            record.filename == self.filename
            and record.lineno == self.lineno
            and not record.stack_info
        ):
            stack = "".join(traceback.format_stack())
            record.stack_info = "Stack (most recent call last):\n" + stack.rstrip("\n")
        return True


def parse_threshold(value: str) -> int:
    """Parse a ``--stderrthreshold`` value into a logging level.

    Accepts ``INFO``, ``WARNING``, ``ERROR``, ``FATAL`` (any case) or their
    index ``0``..``3``. An empty value gives `DEFAULT_STDERR_THRESHOLD`.

    Raises:
        LoggingConfigError: For anything else.
    """
    value = value.strip()
    if not value:
        return DEFAULT_STDERR_THRESHOLD
    if value.isdigit():
        index = int(value)
        if index >= len(SEVERITY_ORDER):
            raise LoggingConfigError("stderrthreshold", value, "unknown severity")
        return SEVERITIES[SEVERITY_ORDER[index]]
    if (level := SEVERITIES.get(value.upper())) is None:
        raise LoggingConfigError("stderrthreshold", value, "unknown severity")
    return level


def parse_verbosity(value: str, flag: str = "v") -> int:
    """Parse a non-negative verbosity such as ``--v=2``. Empty means 0."""
    value = value.strip()
    if not value:
        return 0
    try:
        verbosity = int(value)
    except ValueError as e:
        raise LoggingConfigError(flag, value, "expected an integer") from e
    if verbosity < 0:
        raise LoggingConfigError(flag, value, "must not be negative")
    return verbosity


def parse_vmodule(value: str) -> dict[str, int]:
    """Parse ``pattern=N`` pairs from a comma-separated ``--vmodule`` value.

    Later pairs override earlier ones for the same pattern.

    Raises:
        LoggingConfigError: If an item is not ``pattern=N``.
    """
    modules: dict[str, int] = {}
    for item in (s.strip() for s in value.split(",")):
        if not item:
            continue
        pattern, sep, level = item.partition("=")
        if not sep or not pattern.strip():
            raise LoggingConfigError("vmodule", item, "expected pattern=N")
        modules[pattern.strip()] = parse_verbosity(level, flag="vmodule")
    return modules


def parse_backtrace_at(value: str) -> tuple[str, int] | None:
    """Parse ``file:N`` from ``--log_backtrace_at``; empty means disabled."""
    value = value.strip()
    if not value:
        return None
    filename, sep, line = value.rpartition(":")
    if not sep or not filename or not line.isdigit():
        raise LoggingConfigError("log_backtrace_at", value, "expected file:N")
    return filename, int(line)


def config_console_handler(
    level: int = logging.INFO, color: bool = True
) -> RichHandler:
    """Configure and return a RichHandler writing to stderr.

    Args:
        level: Minimum level for console output.
        color: Enable color output when True.

    Returns:
        RichHandler: Configured handler suitable to attach to the root logger.
    """
    ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=level <= logging.DEBUG,
    )
    handler.setFormatter(logging.Formatter(fmt="%(prefix)s %(message)s"))
    handler.addFilter(ComponentPrefixFilter())
    return handler


def config_file_handler(log_dir: Path) -> logging.FileHandler:
    """Configure and return a handler appending to ``microboot.log`` in ``log_dir``.

    The directory is created if needed.
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_dir / config.LOG_FILE_NAME, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d:%(threadName)s] %(levelname)s "
            "%(name)s:%(lineno)d: %(message)s"
        )
    )
    return handler


def _install(handlers: list[logging.Handler]) -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _MANAGED, False):
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        setattr(handler, _MANAGED, True)
        root.addHandler(handler)
    root.setLevel(logging.DEBUG)  # capture all levels; handlers filter


def _apply_vmodule(modules: dict[str, int]) -> None:
    """Set logger levels for ``--vmodule`` patterns.

    A plain logger name (no ``*``, ``?`` or ``[``) is created if needed, so
    loggers added beneath it later inherit its level. A glob pattern only
    reaches loggers that already exist when logging is configured.
    """
    for pattern, verbosity in modules.items():
        level = logging.DEBUG if verbosity > 0 else logging.INFO
        if not any(c in pattern for c in "*?["):
            logging.getLogger(pattern).setLevel(level)
            continue
        for name in list(logging.root.manager.loggerDict):
            if fnmatch.fnmatchcase(name, pattern):
                logging.getLogger(name).setLevel(level)


def configure_logging(flags: LoggingFlags, color: bool = True) -> list[logging.Handler]:
    """Install root handlers according to ``flags``.

    All values are validated before any handler is touched, so a malformed
    flag leaves the previous configuration in place.

    Returns:
        The handlers now installed by this module.

    Raises:
        LoggingConfigError: If a flag value is malformed or the log
            directory cannot be written.
    """
    threshold = parse_threshold(flags.stderrthreshold)
    verbosity = parse_verbosity(flags.v)
    modules = parse_vmodule(flags.vmodule)
    backtrace_at = parse_backtrace_at(flags.log_backtrace_at)

    handlers: list[logging.Handler] = []
    if flags.logtostderr:
        handlers.append(config_console_handler(level=logging.DEBUG, color=color))
    else:
        log_dir = Path(flags.log_dir) if flags.log_dir else config.default_log_dir()
        try:
            handlers.append(config_file_handler(log_dir))
        except OSError as e:
            raise LoggingConfigError("log_dir", str(log_dir), str(e)) from e
        console_level = logging.DEBUG if flags.alsologtostderr else threshold
        handlers.append(config_console_handler(level=console_level, color=color))

    if backtrace_at is not None:
        for handler in handlers:
            handler.addFilter(BacktraceFilter(*backtrace_at))

    _install(handlers)

    logging.getLogger(PROJECT_PREFIX).setLevel(
        logging.DEBUG if verbosity > 0 else logging.INFO
    )
    _apply_vmodule(modules)

    return handlers


def log_startup(
    logger: Logger,
    *,
    app_version: str,
    flags: LoggingFlags,
    handlers: list[logging.Handler],
) -> None:
    """Log a one-line startup summary and DEBUG diagnostics."""
    logger.info(
        "MICROBOOT %s: stderr=%s, files=%s",
        app_version,
        "ALL" if flags.logtostderr or flags.alsologtostderr else "THRESHOLD",
        "OFF" if flags.logtostderr else "ON",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flags.vmodule:
        logger.debug("Per-module verbosity: %s", parse_vmodule(flags.vmodule))
