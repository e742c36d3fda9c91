# storefront/utils/logging.py
import logging
import sys
from typing import Optional

from storefront.utils.settings import LOG_LEVEL, LOG_FORMAT


def setup_logging(level: Optional[str] = None, format_string: Optional[str] = None) -> None:
    """
    Konfiguracja logowania dla calej aplikacji (stdout).
    Wywolywane raz przy starcie procesu (api albo celery worker).
    """
    numeric_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format=format_string or LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    #za glosne biblioteki
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
