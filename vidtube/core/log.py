# vidtube/core/log.py

import logging


LOG_FORMAT = "%(asctime)s.%(msecs)03d | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Console logging for the `vidtube` logger tree.
    Safe to call more than once; the handler is only attached the first time.
    """
    logger = logging.getLogger("vidtube")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not any(getattr(h, "_vidtube", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler._vidtube = True
        logger.addHandler(handler)

    return logger
