import logging

from .config import LOG_LEVEL


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Call once at program start (cli.main)."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )