"""Safe logging helpers that avoid leaking credential material."""

from __future__ import annotations


def token_presence(label: str, token: str | None) -> str:
    """Describe whether an API key was configured without logging its value."""
    if not token:
        return f"{label}=absent"
    return f"{label}=present"
