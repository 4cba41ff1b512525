"""Root logger setup for the API process."""
import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a console handler.

    Does nothing if the root logger already has handlers, so repeated
    ``create_app`` calls (tests, reloads) don't duplicate output.

    Args:
        level: Logging level name, case insensitive
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
