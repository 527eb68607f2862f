from __future__ import annotations

import threading
from dataclasses import replace

from carbooking.application.exceptions import WizardConflictError, WizardNotFoundError
from carbooking.application.ports.wizard_store import WizardStorePort
from carbooking.domain.entities.wizard_state import WizardState


class MemoryWizardStore(WizardStorePort):
    def __init__(self) -> None:
        self._states: dict[str, WizardState] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> WizardState | None:
        with self._lock:
            return self._states.get(session_id)

    def insert(self, state: WizardState) -> WizardState:
        with self._lock:
            if state.session_id in self._states:
                raise WizardConflictError(f"Booking wizard {state.session_id} is already open")
            stored = replace(state, version=1)
            self._states[state.session_id] = stored
            return stored

    def save(self, state: WizardState) -> WizardState:
        with self._lock:
            current = self._states.get(state.session_id)
            if current is None:
                raise WizardNotFoundError(f"Booking wizard {state.session_id} is not open")
            if current.version != state.version:
                raise WizardConflictError(
                    f"Booking wizard {state.session_id} was changed by another request; reload and retry"
                )
            stored = replace(state, version=current.version + 1)
            self._states[state.session_id] = stored
            return stored

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._states.pop(session_id, None) is not None
