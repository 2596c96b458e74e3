"""Opening located resources as binary streams."""

import io
import zipfile
from typing import BinaryIO, cast
from urllib.parse import urlparse
from urllib.request import url2pathname, urlopen

from loaderchain.locator import Locator


def open_stream(locator: Locator) -> BinaryIO:
    """Open ``locator`` for binary reading.

    Supports ``file:`` URLs, ``zip:<archive>!/<member>`` URLs and anything
    ``urllib.request.urlopen`` can open.

    Raises:
        OSError: If the resource cannot be opened.
    """
    url = locator.url
    if url.startswith("zip:"):
        return _open_zip_member(url[len("zip:") :])

    parsed = urlparse(url)
    if parsed.scheme == "file":
        return open(url2pathname(parsed.path), "rb")
    return cast(BinaryIO, urlopen(url))


def _open_zip_member(address: str) -> BinaryIO:
    archive, sep, member = address.partition("!/")
    if not sep:
        raise FileNotFoundError(f"Malformed zip locator: zip:{address}")
    try:
        with zipfile.ZipFile(archive) as zf:
            data = zf.read(member)
    except KeyError as e:
        raise FileNotFoundError(f"No member '{member}' in {archive}") from e
    except zipfile.BadZipFile as e:
        raise OSError(f"Corrupt archive {archive}: {e}") from e
    return io.BytesIO(data)
