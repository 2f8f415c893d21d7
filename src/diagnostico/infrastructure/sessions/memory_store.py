"""
Хранилище состояний мастера в памяти процесса.
Одна запись на сессию браузера; неактивные сессии удаляются по TTL.
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Mapping, Optional, Tuple

from ...domain.entities.wizard_state import WizardState
from ...domain.services.wizard import create_state


@dataclass
class StoredWizard:
    state: WizardState
    last_access: datetime


class InMemoryWizardStore:
    """
    Простое хранилище сессий мастера в памяти.
    Состояние не переживает перезапуск процесса.
    """

    def __init__(self, ttl_minutes: int = 120) -> None:
        self._sessions: Dict[str, StoredWizard] = {}
        self._ttl = timedelta(minutes=ttl_minutes)
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def get(self, session_id: Optional[str]) -> Optional[WizardState]:
        """Состояние сессии или None, если ее нет или она истекла"""
        self._purge_expired()
        if not session_id or session_id not in self._sessions:
            return None
        stored = self._sessions[session_id]
        stored.last_access = datetime.utcnow()
        return stored.state

    def get_or_create(
        self,
        session_id: Optional[str],
        utms: Optional[Mapping[str, str]] = None
    ) -> Tuple[str, WizardState, bool]:
        """
        Возвращает (session_id, состояние, создано_ли_новое).
        UTM метки сохраняются только при создании.
        """
        state = self.get(session_id)
        if state is not None:
            return session_id, state, False

        new_id = uuid.uuid4().hex
        state = create_state(utms)
        self.save(new_id, state)
        self._logger.debug(f"Новая сессия мастера: {new_id}, utms={dict(state.utms)}")
        return new_id, state, True

    def save(self, session_id: str, state: WizardState) -> None:
        self._sessions[session_id] = StoredWizard(state=state, last_access=datetime.utcnow())

    def __len__(self) -> int:
        return len(self._sessions)

    def _purge_expired(self) -> None:
        cutoff = datetime.utcnow() - self._ttl
        expired = [sid for sid, stored in self._sessions.items() if stored.last_access < cutoff]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            self._logger.debug(f"Удалено истекших сессий мастера: {len(expired)}")
