"""Namespaced identifier (NSID) normalization."""

from lexgen.exceptions import NormalizationError


def nsid_to_symbol(nsid: str) -> str:
    """Convert a dotted identifier into a PascalCase symbol.

    Each segment keeps its own casing except the first character, which is
    upper-cased; segments are joined without a separator.

    Args:
        nsid: Dotted identifier such as ``"com.example.getThing"``

    Returns:
        The symbol, e.g. ``"ComExampleGetThing"``

    Raises:
        NormalizationError: If the identifier is not a string, is empty, or
            has an empty segment

    Example:
        ```python
        nsid_to_symbol("app.bsky.feed.post")
        # 'AppBskyFeedPost'
        ```
    """
    if not isinstance(nsid, str):
        raise NormalizationError(
            f"Identifier must be a string, got {type(nsid).__name__}",
            context={"nsid": nsid},
        )
    if not nsid:
        raise NormalizationError("Identifier is empty", context={"nsid": nsid})

    segments = nsid.split(".")
    if any(not segment for segment in segments):
        raise NormalizationError(
            f"Identifier '{nsid}' has an empty segment",
            context={"nsid": nsid, "segments": segments},
        )

    return "".join(segment[0].upper() + segment[1:] for segment in segments)


__all__ = ["nsid_to_symbol"]
