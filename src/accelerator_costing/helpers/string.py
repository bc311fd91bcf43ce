from typing import Optional, Tuple


def stripped(val: Optional[str], default: Optional[str] = None) -> Optional[str]:
    """
    Return val as a trimmed string; if val is None, use default; if the result
    is empty after trimming, return None.
    """
    s = default if val is None else val
    if s is None:
        return None
    s = str(s).strip()
    return s or None


def split_assignment(text: str) -> Tuple[str, str]:
    """Split 'key=value' into a trimmed (key, value) pair."""
    key, sep, value = (text or "").partition("=")
    key, value = stripped(key), stripped(value)
    if not sep or key is None or value is None:
        raise ValueError(f"Expected KEY=VALUE, got {text!r}")
    return key, value
