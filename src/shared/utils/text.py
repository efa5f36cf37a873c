"""Text normalisation shared by every store adapter."""


def fold_case(value: str | None) -> str | None:
    """
    Case-insensitive comparison key.

    Uses full Unicode case folding, so "FÊTE" and "fête" (or "STRASSE"
    and "straße") produce the same key on every backend.
    """
    if value is None:
        return None
    return value.casefold()
