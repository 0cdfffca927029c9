import logging
from urllib.parse import urlsplit, urlunsplit


def setup_logging(level: str = "INFO") -> None:
    """Configure root + uvicorn loggers once per process."""
    if getattr(setup_logging, "_configured", False):
        return

    lvl = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        level=lvl,
    )
    # keep uvicorn loggers aligned
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(lvl)
    setup_logging._configured = True


def mask_url(url: str) -> str:
    """Mask password in a URL for logging."""
    parts = urlsplit(url)
    if not parts.password:
        return url
    host = parts.hostname or ""
    port = f":{parts.port}" if parts.port else ""
    netloc = f"{parts.username}:****@{host}{port}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))
