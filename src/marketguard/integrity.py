"""Integrity verification of newly published dist artifacts.

Each queued artifact is downloaded once and its SHA-256 compared with the
digest declared in the index. Downloads run one after another, so the
resulting messages follow queue order.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from http.client import HTTPException
from typing import Protocol
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from marketguard import __version__
from marketguard.config import DEFAULT_FETCH_TIMEOUT
from marketguard.errors import ArtifactFetchError
from marketguard.validation import ValidationResult

# Read size when streaming a download into the hash
CHUNK_SIZE = 64 * 1024

USER_AGENT = f"marketguard/{__version__}"

# Characters left as-is when encoding a URL for the request line
URL_SAFE_CHARS = ":/?#[]@!$&'()*+,;=%~"


@dataclass(frozen=True)
class ArtifactRequest:
    """A new version's artifact waiting to be verified."""

    label: str
    url: str
    sha256: str


class ArtifactSource(Protocol):
    """Protocol for downloading artifact bytes."""

    def fetch(self, url: str) -> bytes:
        """Download url, raising ArtifactFetchError on any failure."""
        ...


class HttpArtifactSource:
    """Downloads artifacts with a single HTTP GET and no retries."""

    def __init__(self, timeout: float = DEFAULT_FETCH_TIMEOUT) -> None:
        self._timeout = timeout

    def fetch(self, url: str) -> bytes:
        """Download url, failing on non-2xx responses and network errors."""
        try:
            request = Request(request_url(url), headers={"User-Agent": USER_AGENT})  # noqa: S310
            with urlopen(request, timeout=self._timeout) as response:  # noqa: S310
                status = response.status
                if not 200 <= status < 300:
                    msg = f"{status} {response.reason}"
                    raise ArtifactFetchError(msg)
                chunks = []
                while chunk := response.read(CHUNK_SIZE):
                    chunks.append(chunk)
                return b"".join(chunks)
        except HTTPError as e:
            msg = f"{e.code} {e.reason}"
            raise ArtifactFetchError(msg) from e
        except URLError as e:
            raise ArtifactFetchError(str(e.reason)) from e
        except OSError as e:
            raise ArtifactFetchError(str(e) or type(e).__name__) from e
        except (HTTPException, ValueError) as e:
            # Malformed URLs and broken responses from http.client
            raise ArtifactFetchError(str(e) or type(e).__name__) from e


def request_url(url: str) -> str:
    """Percent-encode spaces, control and non-ASCII characters in url.

    Existing escapes and URL delimiters are kept, so an already valid URL
    is returned unchanged.
    """
    return quote(url, safe=URL_SAFE_CHARS)


def sha256_hex(data: bytes) -> str:
    """Lowercase hex SHA-256 digest of data."""
    return hashlib.sha256(data).hexdigest()


def verify_artifact(
    request: ArtifactRequest, source: ArtifactSource, result: ValidationResult
) -> None:
    """Download one artifact and record any failure or digest mismatch."""
    try:
        data = source.fetch(request.url)
    except ArtifactFetchError as e:
        result.add(f'dist download failed for "{request.label}": {e}')
        return

    if sha256_hex(data) != request.sha256:
        result.add(f'dist sha256 mismatch for "{request.label}"')


def verify_artifacts(
    requests: list[ArtifactRequest], source: ArtifactSource, result: ValidationResult
) -> None:
    """Verify queued artifacts sequentially, in queue order."""
    for request in requests:
        verify_artifact(request, source, result)
