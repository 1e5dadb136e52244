import sys
from pathlib import Path

import fncli

from . import config
from .core.errors import TodoError
from .lib.log import setup_logging

_VERBOSE_FLAGS = ("-v", "--verbose")


def split_verbose(args: list[str]) -> tuple[bool, list[str]]:
    """Pull leading -v/--verbose off argv; anything after the command is left alone."""
    verbose = False
    while args and args[0] in _VERBOSE_FLAGS:
        verbose = True
        args = args[1:]
    return verbose, args


def main():
    verbose, user_args = split_verbose(sys.argv[1:])
    level = "DEBUG" if verbose else config.get_log_level()
    setup_logging(level, config.LOG_PATH)
    fncli.autodiscover(Path(__file__).parent, "todo")

    if not user_args:
        from .tasks import dash

        dash()
        return
    try:
        code = fncli.dispatch(["todo", *user_args])
    except TodoError as e:
        sys.stderr.write(f"{e}\n")
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
