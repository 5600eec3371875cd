import logging
import sys

_PACKAGE_LOGGER = "stepwise"


def configure_logging(*, verbose: bool = False) -> None:
    """Send log records to stderr: stepwise at INFO, everything else at WARNING.

    With verbose, every logger is opened up to DEBUG.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)

    logging.getLogger(_PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.INFO)
