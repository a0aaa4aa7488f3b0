# util/functions.py
def join_url(base: str, path: str) -> str:
    """
    - Join `base` and `path` with exactly one slash.
    - Trailing slashes on the base are dropped first.
    """
    return base.rstrip("/") + "/" + path.lstrip("/")


def clip_text(text: str, max_chars: int = 300) -> str:
    """
    - Trim upstream bodies before they reach logs or reports.
    - Adds an ellipsis when trimming occurs.
    """
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + " …"
