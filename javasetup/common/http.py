from typing import Any, Optional

import requests


def get_json(sess: requests.Session, url: str, timeout: Optional[float] = None) -> tuple[int, Any]:
    """GET ``url`` and decode the body as JSON.

    The payload is ``None`` for non-200 responses. Transport failures raise
    ``requests.RequestException``; an undecodable 200 body raises
    ``ValueError``.
    """
    r = sess.get(url, timeout=timeout)
    if r.status_code != 200:
        return r.status_code, None
    return r.status_code, r.json()
