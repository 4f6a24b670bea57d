import logging
import sys

_HTTP_LOGGERS = ("httpx", "httpcore")
_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _root_level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Send pipeline logs to stderr so stdout only carries job summaries.

    ``verbose`` wins over ``quiet``. HTTP client chatter stays at WARNING
    unless running verbose.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(_root_level(verbose=verbose, quiet=quiet))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(handler)

    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if verbose else logging.WARNING)
