"""Utilities package - Helper functions for names and collation."""

from .text_utils import (
    get_display_name,
    get_initials,
    collation_key,
)

__all__ = [
    'get_display_name',
    'get_initials',
    'collation_key',
]
