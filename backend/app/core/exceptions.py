class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class InvalidInputError(AppError):
    """Raised when a request is missing or carries a malformed required field.

    Always raised before any state is touched.
    """
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)

class EventNotFoundError(AppError):
    """Raised when an update or delete references an unknown event id."""
    def __init__(self, event_id: str):
        super().__init__(f"Event with id {event_id} not found", status_code=404, details={"id": event_id})

class PersistenceError(AppError):
    """Raised when the store could not durably save an aggregate."""
    def __init__(self, kind: str):
        super().__init__(f"Could not save {kind}; the change did not take effect", status_code=503, details={"kind": kind})
