"""Mark the parts of a display string that match search terms."""

import re


def highlight_segments(text: str, terms: list[str] | tuple[str, ...]) -> list[tuple[str, bool]]:
    """Split ``text`` into (segment, is_match) pairs.

    Matching is case-insensitive on substrings; at a given position the longest
    term wins.
    """
    wanted = sorted({t for t in terms if t}, key=len, reverse=True)
    if not wanted or not text:
        return [(text, False)] if text else []

    pattern = re.compile("|".join(re.escape(t) for t in wanted), re.IGNORECASE)
    segments: list[tuple[str, bool]] = []
    pos = 0
    for match in pattern.finditer(text):
        if match.start() > pos:
            segments.append((text[pos : match.start()], False))
        segments.append((match.group(0), True))
        pos = match.end()
    if pos < len(text):
        segments.append((text[pos:], False))
    return segments


def highlight(text: str, terms: list[str] | tuple[str, ...], *, marker: str = "**") -> str:
    """Wrap every matching segment of ``text`` in ``marker``."""
    return "".join(
        f"{marker}{segment}{marker}" if is_match else segment
        for segment, is_match in highlight_segments(text, terms)
    )
