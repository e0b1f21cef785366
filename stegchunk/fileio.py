import logging
import os
from typing import Optional

import requests

from .utils import as_data, Data as _Data


"""
File and network access. The codec itself never touches files,
everything that reads or writes bytes goes through here.
"""

logger = logging.getLogger(__name__)

# Seconds to wait for a remote server when opening an URL,
# unless STEGCHUNK_HTTP_TIMEOUT says otherwise
HTTP_TIMEOUT = 30.0


def http_timeout() -> float:
    """
    :returns: the timeout set in STEGCHUNK_HTTP_TIMEOUT, or HTTP_TIMEOUT if it is unset or not a positive number.
    """
    value = os.environ.get('STEGCHUNK_HTTP_TIMEOUT')
    if value is None:
        return HTTP_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        timeout = 0
    if timeout <= 0:
        logger.warning("ignoring invalid STEGCHUNK_HTTP_TIMEOUT %r, using %s", value, HTTP_TIMEOUT)
        return HTTP_TIMEOUT
    return timeout


def is_url(filename: str) -> bool:
    return filename.startswith('http://') or filename.startswith('https://')


def read_all_bytes(path) -> bytes:
    """
    :param path: a path to a file on disc.
    :returns: the full content of the file.
    :raises OSError: if the file cannot be read.
    """
    with open(path, 'rb') as f:
        data = f.read()
    logger.debug("read %d bytes from %s", len(data), path)
    return data


def fetch_bytes(url: str, timeout: Optional[float] = None) -> bytes:
    """
    :param url: an http or https link.
    :param timeout: seconds to wait for the server, defaults to :func:`http_timeout`.
    :returns: the body of the response.
    :raises requests.RequestException: on network failure or an error status.
    """
    if timeout is None:
        timeout = http_timeout()
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    logger.debug("fetched %d bytes from %s", len(response.content), url)
    return response.content


def load(filename: str) -> bytes:
    """
    :returns: the bytes of filename, which may be a local path or an http(s) link.
    """
    if is_url(str(filename)):
        return fetch_bytes(str(filename))
    return read_all_bytes(filename)


def write_all_bytes(path, data: _Data, overwrite: bool = True) -> None:
    """
    :param path: the file to write to.
    :param data: the bytes to write.
    :param overwrite: if False, the file must not exist yet.
    :raises FileExistsError: if overwrite is False and the file already exists.
    :raises OSError: if the file cannot be written.
    """
    data = as_data(data)
    with open(path, 'wb' if overwrite else 'xb') as f:
        f.write(data)
    logger.debug("wrote %d bytes to %s", len(data), path)
