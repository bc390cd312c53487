"""Staging of chart artifacts into temporary files."""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Protocol

from chartbroker.core.errors import InvalidLocatorError
from chartbroker.core.schemas import STORAGE_HTTPS_BASE, STORAGE_SCHEME

logger = logging.getLogger(__name__)

_CHART_PREFIX = "chart-"


class FileFetcher(Protocol):
    def fetch_to_file(self, url: str, fh: IO[bytes]) -> None:
        """Stream the body of url into fh."""
        ...


def chart_url(locator: str) -> str:
    """
    Return the download URL for a chart locator.

    `gs://` locators map onto the storage HTTPS endpoint, plain HTTP(S)
    URLs are used as-is.
    """
    if locator.startswith(STORAGE_SCHEME):
        return locator.replace(STORAGE_SCHEME, STORAGE_HTTPS_BASE, 1)
    if locator.startswith(("https://", "http://")):
        return locator
    raise InvalidLocatorError(
        f"invalid chart locator {locator!r}; {STORAGE_SCHEME}... or http(s)://... is required"
    )


@contextmanager
def staged_chart(fetcher: FileFetcher, locator: str) -> Iterator[Path]:
    """
    Download a chart into a temporary file and yield its path.

    The file is removed when the block exits, whether it succeeded or not.
    """
    url = chart_url(locator)
    fd, name = tempfile.mkstemp(prefix=_CHART_PREFIX)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fetcher.fetch_to_file(url, fh)
        logger.debug("Staged chart %s at %s", locator, path)
        yield path
    finally:
        path.unlink(missing_ok=True)
