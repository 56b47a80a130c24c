# src/rabbitmq_http_client/core/secrets.py
"""
Zeroizable storage for credentials.

Python strings are immutable and cannot be wiped, so the password is kept
in a ``bytearray`` that is overwritten with zeros on ``close()`` (and, as a
last resort, when the object is garbage collected).
"""
from typing import Union


class Secret:
    """
    A secret value backed by a mutable buffer.

    Example:
        >>> secret = Secret("s3kRe7")
        >>> secret.reveal()
        's3kRe7'
        >>> secret.close()
        >>> secret.is_cleared
        True
    """

    __slots__ = ("_buffer", "_cleared")

    def __init__(self, value: Union[str, bytes, bytearray]):
        if isinstance(value, str):
            value = value.encode("utf-8")
        self._buffer = bytearray(value)
        self._cleared = False

    def reveal(self) -> str:
        """Return the plaintext. Raises ValueError once the secret was cleared."""
        if self._cleared:
            raise ValueError("secret has been cleared")
        return self._buffer.decode("utf-8")

    def close(self) -> None:
        """Overwrite the backing buffer. Idempotent."""
        for i in range(len(self._buffer)):
            self._buffer[i] = 0
        self._cleared = True

    def copy(self) -> "Secret":
        """An independent Secret over a new buffer with the same value."""
        if self._cleared:
            raise ValueError("secret has been cleared")
        return Secret(self._buffer)

    @property
    def is_cleared(self) -> bool:
        return self._cleared

    def __len__(self) -> int:
        return len(self._buffer)

    def __repr__(self) -> str:
        return "Secret('***')"

    __str__ = __repr__

    def __del__(self):
        try:
            self.close()
        except Exception:
            pass
