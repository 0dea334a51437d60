import logging
import sys
from typing import Optional

from .config import LOG_LEVEL, LOG_NAMESPACES


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True # If no namespaces are specified, allow all records
        # Allow record if its name starts with any of the allowed namespaces
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)


log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def configure_logging(
    level: str = LOG_LEVEL, allowed_namespaces: Optional[list[str]] = None
) -> logging.Logger:
    """Attach the console handler to the ``marketplace`` logger.

    Modules log through ``logging.getLogger(__name__)`` so they become children
    of ``marketplace`` and inherit its level and handler. Calling this twice
    does not stack handlers.
    """
    app_logger = logging.getLogger("marketplace")
    app_logger.setLevel(level)

    for handler in list(app_logger.handlers):
        if getattr(handler, "_marketplace_console", False):
            app_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler._marketplace_console = True

    namespaces = LOG_NAMESPACES if allowed_namespaces is None else allowed_namespaces
    if namespaces:
        console_handler.addFilter(NamespaceFilter(namespaces))

    app_logger.addHandler(console_handler)

    # SQL echo is noisy; raise to DEBUG when chasing a query.
    logging.getLogger("tortoise").setLevel(logging.WARNING)
    return app_logger
