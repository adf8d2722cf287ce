"""peruse CLI entry point.

Allows running via `python -m peruse` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

import platformdirs

from .constants import PagerConstants
from .errors import NoInputError, PagerError
from .version import get_version_string

logger = logging.getLogger(__name__)

USAGE = "usage: peruse [--version] [--log | --log-file PATH] [FILE]"


class UsageError(Exception):
    """Bad command line."""


@dataclass
class Options:
    file: Optional[str] = None
    log_file: Optional[str] = None
    version: bool = False
    help: bool = False


def default_log_path() -> Path:
    """Log file location under the platform's user log directory."""
    return Path(platformdirs.user_log_dir(PagerConstants.PROGRAM_NAME)) / PagerConstants.LOG_FILE_NAME


def parse_args(args: list[str]) -> Options:
    """Very small argument parser: a few flags and an optional file name."""
    options = Options(log_file=os.environ.get(PagerConstants.LOG_ENV_VAR) or None)
    positional: list[str] = []
    it = iter(args)
    for arg in it:
        if arg in ("--version", "-V"):
            options.version = True
        elif arg in ("--help", "-h"):
            options.help = True
        elif arg == "--log":
            options.log_file = str(default_log_path())
        elif arg == "--log-file":
            value = next(it, None)
            if not value:
                raise UsageError("--log-file requires a path")
            options.log_file = value
        elif arg.startswith("--log-file="):
            options.log_file = arg.split("=", 1)[1]
        elif arg == "--":
            positional.extend(it)
        elif arg.startswith("-") and arg != "-":
            raise UsageError(f"unknown option {arg}")
        else:
            positional.append(arg)
    if len(positional) > 1:
        raise UsageError("only one file can be viewed at a time")
    if positional:
        options.file = positional[0]
    return options


def configure_logging(log_file: Optional[str]) -> None:
    """Send log records to ``log_file``; without one, logging stays silent.

    Nothing may be logged to the terminal while the pager owns it.
    """
    if not log_file:
        return
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(path),
        level=logging.DEBUG,
        format=PagerConstants.LOG_FORMAT,
    )


def _take_keyboard_from_tty() -> BinaryIO:
    """Move piped standard input aside and put the controlling tty on fd 0.

    The keyboard is always read from fd 0, so when the document arrives
    on a pipe the pipe moves to a new descriptor, which is returned as a
    binary file.
    """
    input_fd = os.dup(0)
    try:
        tty_fd = os.open("/dev/tty", os.O_RDONLY)
    except OSError as e:
        os.close(input_fd)
        raise PagerError(f"Could not open /dev/tty for keyboard input: {e.strerror}") from e
    os.dup2(tty_fd, 0)
    os.close(tty_fd)
    return os.fdopen(input_fd, "rb", buffering=0)


def open_input(path: Optional[str]) -> BinaryIO:
    """Open the document stream: the named file, else piped standard input.

    Raises:
        NoInputError: no file was named and standard input is a terminal
        PagerError: the file could not be opened
    """
    piped = None
    if not os.isatty(0):
        piped = _take_keyboard_from_tty()

    if path is not None and path != "-":
        if piped is not None:
            piped.close()
        try:
            return open(path, "rb", buffering=0)
        except OSError as e:
            raise PagerError(f"{PagerConstants.OPEN_FAILED_MESSAGE.format(path)}: {e.strerror}") from e

    if piped is None:
        raise NoInputError(PagerConstants.NO_INPUT_MESSAGE)
    return piped


def run(path: Optional[str]) -> None:
    """Page the given file (or piped standard input) until the user quits."""
    # Lazy import to avoid importing UI deps for --version
    from .linesource import LineReader
    from .pager import Pager

    with open_input(path) as stream:
        pager = Pager(LineReader.from_file(stream))
        pager.run()


def main(argv: Optional[list[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    try:
        options = parse_args(args)
    except UsageError as e:
        print(f"{PagerConstants.PROGRAM_NAME}: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        sys.exit(2)

    if options.help:
        print(USAGE)
        return
    if options.version:
        print(get_version_string())
        return

    configure_logging(options.log_file)
    try:
        run(options.file)
    except (PagerError, OSError) as e:
        logger.exception("Fatal error")
        print(f"{PagerConstants.PROGRAM_NAME}: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":  # pragma: no cover
    main()
