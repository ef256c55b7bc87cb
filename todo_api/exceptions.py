class TodoError(Exception):
    """Base class for errors raised by the service layer."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(TodoError):
    """Malformed or missing input; the caller can fix the request and retry."""


class NotFoundError(TodoError):
    """A referenced entity does not exist."""


class AccessDeniedError(TodoError):
    """The principal is authenticated but may not act on the resource."""


class AuthenticationMissingError(TodoError):
    """No principal reached code that requires one."""
