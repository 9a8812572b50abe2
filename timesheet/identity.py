from __future__ import annotations
import json
from pathlib import Path
from uuid import uuid4

from .logging import get_logger

# Storage key shared by the identity file and the web form cookie.
IDENTITY_KEY = "timesheet_user_id"

logger = get_logger(__name__)


def new_identity() -> str:
    return str(uuid4())


class LocalIdentity:
    """Pseudo-identity persisted on this machine and reused across sessions.

    It only scopes "my entries" in the form; it is not authentication.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> str | None:
        if not self.path.exists():
            return None
        try:
            content = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("identity_unreadable", path=str(self.path))
            return None
        value = content.get(IDENTITY_KEY) if isinstance(content, dict) else None
        return value or None

    def get_or_create(self) -> str:
        existing = self.load()
        if existing:
            return existing
        identity = new_identity()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({IDENTITY_KEY: identity}), encoding="utf-8")
        logger.info("identity_created", path=str(self.path))
        return identity
