"""Page-lifetime registry of job form models.

Each rendered job page gets its own `FormDocument`, addressed by the token
embedded in the page's htmx URLs. Nothing here is persisted: a restart or an
eviction simply expires the page.
"""

from __future__ import annotations

import threading
import time
import uuid
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field

from sync_form_core.config_manager import get_config_manager
from sync_form_core.form_model import FormDocument
from sync_form_core.logger import get_logger

logger = get_logger(__name__)


@dataclass
class FormSession:
    token: str
    document: FormDocument
    created_at: float = field(default_factory=time.time)
    # Serializes the event handlers of one page.
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class FormSessionStore:
    """Bounded, least-recently-used store of form sessions."""

    def __init__(self, max_sessions: int | None = None):
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, FormSession] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def max_sessions(self) -> int:
        if self._max_sessions is not None:
            return max(1, int(self._max_sessions))
        return get_config_manager().get_max_sessions()

    def create(self, build_markup: Callable[[str], str]) -> FormSession:
        """Render a new page for a fresh token and register its model."""
        token = uuid.uuid4().hex[:12]
        session = FormSession(token=token, document=FormDocument.parse(build_markup(token)))
        with self._lock:
            self._sessions[token] = session
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted form session %s", evicted)
        logger.debug("Created form session %s", token)
        return session

    def get(self, token: str) -> FormSession | None:
        with self._lock:
            session = self._sessions.get(token or "")
            if session is not None:
                self._sessions.move_to_end(session.token)
            return session

    def discard(self, token: str) -> bool:
        with self._lock:
            return self._sessions.pop(token or "", None) is not None

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


form_sessions = FormSessionStore()
