"""HTTP fetch helpers built on a requests Session.

The core does not retry and does not impose a timeout of its own; both are
left to the surrounding transport. A timeout can still be configured for
operator tooling such as the CLI.
"""

from __future__ import annotations

import json
import logging
from typing import IO, Any

import requests
from requests import Session

from chartbroker.core.errors import FetchError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


class HttpFetcher:
    """Adapter that performs GET requests and maps failures to FetchError."""

    def __init__(self, session: Session | None = None, timeout: float | None = None) -> None:
        self.session = session or Session()
        self.timeout = timeout

    def _get(self, url: str, *, stream: bool = False) -> requests.Response:
        """Issue a GET and raise FetchError on transport errors or non-2xx."""
        try:
            resp = self.session.get(url, timeout=self.timeout, stream=stream)
        except requests.RequestException as exc:
            logger.error("GET %s failed: %s", url, exc)
            raise FetchError(f"GET {url} failed: {exc}", url=url) from exc

        if not 200 <= resp.status_code < 300:
            resp.close()
            logger.error("GET %s returned HTTP %s", url, resp.status_code)
            raise FetchError(
                f"GET {url} returned HTTP {resp.status_code}",
                url=url,
                status_code=resp.status_code,
            )
        return resp

    def fetch(self, url: str) -> bytes:
        """Return the response body of url."""
        return self._get(url).content

    def fetch_object(self, url: str) -> Any:
        """Return the decoded JSON document at url."""
        body = self.fetch(url)
        try:
            return json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.error("GET %s returned invalid JSON: %s", url, exc)
            raise FetchError(f"GET {url} returned invalid JSON: {exc}", url=url) from exc

    def fetch_to_file(self, url: str, fh: IO[bytes]) -> None:
        """Stream the body of url into an open binary file."""
        resp = self._get(url, stream=True)
        try:
            for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                if chunk:
                    fh.write(chunk)
        except requests.RequestException as exc:
            logger.error("Download of %s interrupted: %s", url, exc)
            raise FetchError(f"GET {url} interrupted: {exc}", url=url) from exc
        finally:
            resp.close()
        fh.flush()
