import os
from typing import Optional

import requests
from cachecontrol import CacheControl  # type: ignore
from cachecontrol.caches import FileCache  # type: ignore

from .. import __version__

ADOPTIUM_API_BASE = "https://api.adoptium.net"
DEFAULT_HTTP_TIMEOUT = 30.0


def cache_path():
    if "JAVASETUP_CACHE_DIR" in os.environ:
        return os.environ["JAVASETUP_CACHE_DIR"]
    return "cache"


def adoptium_api_base():
    if "JAVASETUP_ADOPTIUM_API" in os.environ:
        return os.environ["JAVASETUP_ADOPTIUM_API"].rstrip("/")
    return ADOPTIUM_API_BASE


def http_timeout() -> float:
    if "JAVASETUP_HTTP_TIMEOUT" in os.environ:
        return float(os.environ["JAVASETUP_HTTP_TIMEOUT"])
    return DEFAULT_HTTP_TIMEOUT


def max_pages() -> Optional[int]:
    if "JAVASETUP_MAX_PAGES" in os.environ:
        return int(os.environ["JAVASETUP_MAX_PAGES"])
    return None


def default_session():
    # honours the catalog's cache headers, unlike a forever cache
    http_cache = FileCache(os.path.join(cache_path(), "http_cache"))
    sess = CacheControl(requests.Session(), http_cache)

    sess.headers.update({"User-Agent": f"javasetup/{__version__}"})

    return sess
