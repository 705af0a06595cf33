"""Session ID helpers for displaying and resolving task IDs."""

from typing import Iterable

SESSION_PREFIX = "ses_"
DEFAULT_SHORT_ID_LENGTH = 8


def _suffix(session_id: str) -> str:
    return session_id[len(SESSION_PREFIX):] if session_id.startswith(SESSION_PREFIX) else session_id


def short_id(session_id: str, min_len: int = DEFAULT_SHORT_ID_LENGTH) -> str:
    """
    Short display form of a session ID.

    Example: ses_41e080918ffeyhQtX6E4vERe4O -> 41e08091
    """
    return _suffix(session_id)[:min_len]


def unique_short_id(
    session_id: str, sibling_ids: Iterable[str], min_len: int = DEFAULT_SHORT_ID_LENGTH
) -> str:
    """
    Shortest display ID (at least ``min_len``) not shared with any sibling.

    Extends git-style until no other session's suffix starts with it. IDs
    without the ``ses_`` prefix are cut to ``min_len`` as-is.
    """
    if not session_id.startswith(SESSION_PREFIX):
        return session_id[:min_len]

    suffix = _suffix(session_id)
    others = [_suffix(other) for other in sibling_ids if other != session_id]

    for length in range(min_len, len(suffix) + 1):
        candidate = suffix[:length]
        if not any(other.startswith(candidate) for other in others):
            return candidate
    return suffix


def resolve_task_id(id_or_prefix: str, session_ids: Iterable[str]) -> str | None:
    """
    Resolve a full session ID, short ID or prefix to a known session ID.

    Returns:
        The matching session ID, or None when nothing or more than one matches
    """
    known = list(session_ids)
    if id_or_prefix in known:
        return id_or_prefix

    needle = _suffix(id_or_prefix)
    if not needle:
        return None
    matches = [sid for sid in known if _suffix(sid).startswith(needle)]
    return matches[0] if len(matches) == 1 else None
