"""Text normalization shared by the lyrics and translation clients."""


def format_lyrics(text: str) -> list[str]:
    """Split raw lyrics into trimmed, non-empty lines.

    Windows line endings are normalized first so ``\\r`` never leaks into a line.
    """
    normalized = text.replace("\r\n", "\n")
    return [stripped for line in normalized.split("\n") if (stripped := line.strip())]
