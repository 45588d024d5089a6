import logging, sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    root = logging.getLogger()
    if root.handlers:
        # deja configurat (uvicorn --log-config / pytest caplog); aliniem doar nivelul
        root.setLevel(level)
        return
    root.setLevel(level)
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    h = logging.StreamHandler(sys.stdout)
    h.setFormatter(fmt)
    root.addHandler(h)

    if log_file:
        # fișier cu rotire zilnică, păstrăm o săptămână
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        fh = TimedRotatingFileHandler(log_file, when="midnight", backupCount=7, encoding="utf-8")
        fh.setFormatter(fmt)
        root.addHandler(fh)

    for _name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(_name).setLevel(level)
