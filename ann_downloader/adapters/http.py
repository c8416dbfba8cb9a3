"""
HTTP Document Transport

Implements DocumentTransport with httpx, following redirects by hand.
The static server redirects to paths that 404 once re-escaped, so each
Location path is sent on the wire as the exact bytes the server gave.
"""
import logging
from typing import BinaryIO, Optional

import httpx

from ..core.errors import TransportError
from ..core.ports import DocumentTransport

logger = logging.getLogger(__name__)

MAX_REDIRECTS = 10


def location_header(response: httpx.Response) -> Optional[bytes]:
    """Raw Location header bytes, undecoded"""
    for name, value in response.headers.raw:
        if name.lower() == b"location":
            return value
    return None


def redirect_target(current: httpx.URL, location: bytes) -> tuple[httpx.URL, Optional[bytes]]:
    """Resolve a Location header into the next URL and its request-target.

    Scheme and host come from URL joining. For an absolute path or an
    absolute URL the request-target is the Location's own path and query
    bytes, untouched; a relative reference has none and goes by the
    joined URL.
    """
    target = current.join(location.decode("latin-1"))

    raw = None
    if location.startswith(b"/") and not location.startswith(b"//"):
        raw = location
    else:
        scheme_end = location.find(b"://")
        if scheme_end != -1:
            path_start = location.find(b"/", scheme_end + 3)
            raw = location[path_start:] if path_start != -1 else b"/"

    if raw is not None:
        raw = raw.split(b"#", 1)[0]
    return target, raw


class HttpDocumentTransport(DocumentTransport):
    """Streams documents with manual, path-preserving redirects"""

    def __init__(self, client: httpx.Client, max_redirects: int = MAX_REDIRECTS):
        self.client = client
        self.max_redirects = max_redirects

    def download(self, url: str, out: BinaryIO) -> int:
        target = httpx.URL(url)
        extensions = {}

        try:
            for _ in range(self.max_redirects + 1):
                with self.client.stream("GET", target, follow_redirects=False, extensions=extensions) as response:
                    if response.is_redirect:
                        location = location_header(response)
                        if not location:
                            raise TransportError(f"Redirect without Location from {target}")
                        target, raw = redirect_target(target, location)
                        extensions = {} if raw is None else {"target": raw}
                        logger.debug(f"Redirected to {target}")
                        continue

                    if not response.is_success:
                        raise TransportError(f"GET {target} returned HTTP {response.status_code}")

                    written = 0
                    for chunk in response.iter_bytes():
                        out.write(chunk)
                        written += len(chunk)
                    return written
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"GET {target} failed: {e}") from e

        raise TransportError(f"Stopped after {self.max_redirects} redirects from {url}")
