from __future__ import annotations

from abc import ABC, abstractmethod

from carbooking.domain.entities.wizard_state import WizardState


class WizardStorePort(ABC):
    @abstractmethod
    def get(self, session_id: str) -> WizardState | None:
        """Return the open session, or None once it was closed."""
        raise NotImplementedError

    @abstractmethod
    def insert(self, state: WizardState) -> WizardState:
        """Store a newly opened session."""
        raise NotImplementedError

    @abstractmethod
    def save(self, state: WizardState) -> WizardState:
        """
        Replace an open session. `state.version` must match the stored version;
        returns the stored state with its version bumped. Raises
        WizardNotFoundError if the session was closed and WizardConflictError
        if it changed since it was read.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Close a session. Returns True if it was open."""
        raise NotImplementedError
