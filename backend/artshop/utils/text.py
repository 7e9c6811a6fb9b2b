from typing import Optional


def fold(value: Optional[str]) -> Optional[str]:
    """Case-fold for comparisons; unlike SQL lower() this covers non-ASCII letters."""
    if value is None:
        return None
    return value.casefold()
