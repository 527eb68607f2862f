class BackendUpstreamError(RuntimeError):
    """Raised when the rental backend fails (network errors, timeouts, 5xx responses)."""
    pass


class BackendRejectedError(RuntimeError):
    """Raised when the rental backend rejects a request; carries the server's message."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class WizardError(RuntimeError):
    """Base class for wizard operations that cannot be applied."""
    pass


class WizardNotFoundError(WizardError):
    """Raised when a wizard session is closed or never existed."""
    pass


class WizardStepError(WizardError):
    """Raised when an operation is not allowed on the wizard's current step."""
    pass


class WizardFieldError(WizardError):
    """Raised for unknown fields, out-of-range car indexes or edits to inheriting drafts."""
    pass


class WizardConflictError(WizardError):
    """Raised when a session changed since it was read, or a submit is already in flight."""
    pass
