"""Utility modules."""

from .sanitizer import (
    mask_sensitive_data,
    mask_url,
    mask_headers,
    mask_secret,
    sanitize_url,
    add_sensitive_keys,
    get_sensitive_keys,
)

__all__ = [
    'mask_sensitive_data',
    'mask_url',
    'mask_headers',
    'mask_secret',
    'sanitize_url',
    'add_sensitive_keys',
    'get_sensitive_keys',
]
