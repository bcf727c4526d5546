from __future__ import annotations

from typing import Optional, Protocol


class SessionRepository(Protocol):
    """Per-user scratchpad for multi-step dialogs; never a source of truth."""

    def get(self, user_id: str) -> Optional[dict]:
        raise NotImplementedError

    def set(self, user_id: str, data: dict) -> None:
        raise NotImplementedError

    def delete(self, user_id: str) -> None:
        raise NotImplementedError
