# qslp/log.py
import logging

FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach one stream handler to the package logger. Safe to call on every
    Streamlit rerun: the handler is only added once.
    """
    log = logging.getLogger("qslp")
    log.setLevel(str(level).upper())
    if not any(getattr(h, "_qslp", False) for h in log.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(FORMAT))
        handler._qslp = True
        log.addHandler(handler)
    return log
