"""
Text utilities for org-chart display.

Handles display names, initials and name collation.
"""
import unicodedata


def get_display_name(entity) -> str:
    """
    Get the name shown on a tile.

    Args:
        entity: Person or Branch

    Returns:
        "First Last" for persons, the first name alone for branches
    """
    return entity.display_name


def get_initials(entity) -> str:
    """
    Build avatar initials from first (and last) name.

    Args:
        entity: Person or Branch

    Returns:
        Uppercase initials, e.g. "AJ" for Alice Johnson, "H" for a branch named HQ
    """
    parts = [entity.first_name, getattr(entity, 'last_name', None)]
    return ''.join(part[0] for part in parts if part).upper()


def collation_key(text: str) -> str:
    """
    Case- and accent-insensitive sort key.

    Compares base letters only, so "émile", "Emile" and "EMILE" collate
    together.

    Args:
        text: Display text

    Returns:
        Normalized key suitable for ``sorted(key=...)``
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize('NFKD', text)
    stripped = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()
