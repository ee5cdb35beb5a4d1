import logging

from app.config import settings


_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``marketplace`` namespace.

    Handlers are attached once, to the namespace root, so every module
    logger shares the same format, level (LOG_LEVEL) and optional LOG_FILE.
    """
    root = logging.getLogger("marketplace")
    if not getattr(root, "_marketplace_configured", False):
        level = _LEVELS.get((settings.LOG_LEVEL or "").strip().upper(), logging.INFO)
        root.setLevel(level)
        formatter = logging.Formatter(
            fmt="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        sh = logging.StreamHandler()
        sh.setFormatter(formatter)
        root.addHandler(sh)

        if settings.LOG_FILE:
            try:
                fh = logging.FileHandler(settings.LOG_FILE, encoding="utf-8")
                fh.setFormatter(formatter)
                root.addHandler(fh)
            except OSError:
                root.warning("LOG_FILE could not be opened; continuing without file logging")

        setattr(root, "_marketplace_configured", True)
    return root.getChild(name)
