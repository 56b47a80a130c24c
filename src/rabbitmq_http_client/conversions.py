"""
Lenient readers for runtime parameter values.

Runtime parameter values are free-form JSON objects with hyphenated keys.
Required keys raise :class:`~rabbitmq_http_client.core.exceptions.ConversionError`
when absent; optional keys of the wrong type read as None; enum-valued keys
the library does not recognise fall back to a default and log a warning.
"""

import logging
from typing import Any, Mapping, Optional

from .core.exceptions import ConversionError

logger = logging.getLogger(__name__)


def required_str(values: Mapping[str, Any], key: str) -> str:
    item = values.get(key)
    if not isinstance(item, str):
        raise ConversionError.missing_property(key)
    return item


def optional_str(values: Mapping[str, Any], key: str) -> Optional[str]:
    item = values.get(key)
    return item if isinstance(item, str) else None


def optional_int(values: Mapping[str, Any], key: str) -> Optional[int]:
    item = values.get(key)
    if isinstance(item, bool) or not isinstance(item, int):
        return None
    return item


def optional_bool(values: Mapping[str, Any], key: str) -> Optional[bool]:
    item = values.get(key)
    return item if isinstance(item, bool) else None


def parse_enum_or_default(enum_cls, values: Mapping[str, Any], key: str, default, owner: str):
    """Decode an enum-valued key; unknown values fall back to ``default`` with a warning."""
    raw = values.get(key)
    if raw is None:
        return default
    parsed = enum_cls(raw) if isinstance(raw, str) else None
    if parsed is None or parsed.is_unknown:
        logger.warning(
            f"Unrecognised {key} value {raw!r} in {owner}, using {default.value!r}",
            extra={"parameter": owner, "key": key, "value": raw, "default": default.value},
        )
        return default
    return parsed
