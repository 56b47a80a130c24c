"""
URL path construction for the management API.

Every segment is percent-encoded on its own using an "everything except
ASCII letters and digits" rule, so a virtual host named ``/`` becomes ``%2F``
and a queue named ``foo/bar`` becomes ``foo%2Fbar``. Structural slashes are
only ever inserted between segments.

    >>> path("queues", "/", "foo/bar")
    'queues/%2F/foo%2Fbar'
"""

from typing import Union

Segment = Union[str, int]

_UNRESERVED = frozenset(b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789")


def encode_segment(segment: Segment) -> str:
    """Percent-encode every byte of the UTF-8 form that is not alphanumeric."""
    return "".join(
        chr(byte) if byte in _UNRESERVED else f"%{byte:02X}"
        for byte in str(segment).encode("utf-8")
    )


def path(*segments: Segment) -> str:
    """Join individually encoded segments with ``/``."""
    return "/".join(encode_segment(s) for s in segments)


def join_endpoint(endpoint: str, relative_path: str) -> str:
    """``endpoint + "/" + relative_path`` without doubling the slash."""
    return f"{endpoint.rstrip('/')}/{relative_path}"
