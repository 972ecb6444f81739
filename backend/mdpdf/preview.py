from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .config import MAX_PREVIEWS
from .logging_utils import get_logger

log = get_logger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class PreviewHandle:
    handle_id: str
    slot: str
    data: bytes
    page_count: int
    created_at: str = field(default_factory=_utc_now)
    revoked: bool = False

    @property
    def url(self) -> str:
        return f"/preview/{self.handle_id}"

    @property
    def byte_size(self) -> int:
        return len(self.data)

    def release(self) -> None:
        self.revoked = True
        self.data = b""


class PreviewRegistry:
    """Keeps one live preview per slot; publishing revokes the previous one.

    At most ``max_live`` slots hold a preview at once. Publishing to a new slot
    past that limit revokes the least recently published one.
    """

    def __init__(self, max_live: int = MAX_PREVIEWS) -> None:
        if max_live < 1:
            raise ValueError("max_live must be at least 1")
        self.max_live = max_live
        self._lock = threading.Lock()
        self._handles: dict[str, PreviewHandle] = {}
        # Insertion order is publish order; republishing moves a slot to the end.
        self._slots: dict[str, str] = {}

    def publish(self, data: bytes, *, page_count: int, slot: str = "default") -> PreviewHandle:
        handle = PreviewHandle(
            handle_id=secrets.token_hex(8),
            slot=slot,
            data=bytes(data),
            page_count=page_count,
        )
        with self._lock:
            previous = self._slots.get(slot)
            if previous:
                self._release_locked(previous)
            while len(self._slots) >= self.max_live:
                oldest = next(iter(self._slots.values()))
                log.info("Preview limit %d reached; evicting %s", self.max_live, oldest)
                self._release_locked(oldest)
            self._handles[handle.handle_id] = handle
            self._slots[slot] = handle.handle_id
        log.debug("Published preview %s for slot %s (%d bytes)", handle.handle_id, slot, handle.byte_size)
        return handle

    def get(self, handle_id: str) -> PreviewHandle:
        with self._lock:
            handle = self._handles.get(handle_id)
        if not handle or handle.revoked:
            raise KeyError(handle_id)
        return handle

    def current(self, slot: str = "default") -> PreviewHandle | None:
        with self._lock:
            handle_id = self._slots.get(slot)
            return self._handles.get(handle_id) if handle_id else None

    def revoke(self, handle_id: str) -> bool:
        with self._lock:
            return self._release_locked(handle_id)

    def revoke_slot(self, slot: str = "default") -> bool:
        with self._lock:
            handle_id = self._slots.get(slot)
            if not handle_id:
                return False
            return self._release_locked(handle_id)

    def _release_locked(self, handle_id: str) -> bool:
        handle = self._handles.pop(handle_id, None)
        if not handle:
            return False
        if self._slots.get(handle.slot) == handle_id:
            del self._slots[handle.slot]
        handle.release()
        log.debug("Revoked preview %s", handle_id)
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)
