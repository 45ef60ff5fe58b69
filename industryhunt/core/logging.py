import logging

from industryhunt.core import config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    root = logging.getLogger()
    root.setLevel((level or config.LOG_LEVEL).upper())

    # Keep a single handler when the app factory runs more than once (tests, reload).
    if any(getattr(handler, "_industryhunt", False) for handler in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._industryhunt = True
    root.addHandler(handler)
