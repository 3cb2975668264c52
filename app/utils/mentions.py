import re


_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


def extract_mentions(text: str) -> list[str]:
    """Return the distinct email-like tokens in ``text``.

    Tokens are lower-cased and kept in first-seen order. No check is made
    that the addresses belong to registered accounts.
    """
    if not text:
        return []
    seen: dict[str, None] = {}
    for match in _EMAIL_RE.findall(text):
        seen.setdefault(match.lower(), None)
    return list(seen)
