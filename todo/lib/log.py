import logging
import sys
from pathlib import Path

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "WARNING", log_file: Path | None = None) -> None:
    """
    Configure the `todo` logger: stderr at `level`, plus an optional file
    handler that keeps everything down to DEBUG.
    """
    logger = logging.getLogger("todo")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.WARNING))
    console.setFormatter(fmt)
    logger.addHandler(console)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(str(log_file), encoding="utf-8")
        except OSError as e:
            logger.warning("file logging disabled: %s", e)
            return
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        logger.addHandler(fh)
