"""Utility helpers."""

from .sanitizer import mask_sensitive_data, add_sensitive_keys

__all__ = ["mask_sensitive_data", "add_sensitive_keys"]
