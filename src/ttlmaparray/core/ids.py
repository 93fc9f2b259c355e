from __future__ import annotations

import uuid


def new_key() -> str:
    """Return a random UUID4 string, unique within the process run."""
    return str(uuid.uuid4())
