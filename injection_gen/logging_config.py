"""Logging setup for injection-gen.

All modules obtain their logger through get_logger() so that records end up
under the ``injection_gen`` namespace and can be configured in one place.
"""

import logging

from rich.logging import RichHandler

ROOT_LOGGER_NAME = "injection_gen"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(level: int | str = logging.WARNING, use_rich: bool = True) -> None:
    """Attach a handler to the package root logger.

    Calling this more than once only updates the level.

    Args:
        level: Logging level name or number.
        use_rich: Render records with rich; plain stderr stream otherwise.
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    if _configured:
        return

    if use_rich:
        handler: logging.Handler = RichHandler(
            rich_tracebacks=True, show_path=False, markup=False
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(levelname)s %(name)s: %(message)s")
        )

    root.addHandler(handler)
    _configured = True
