"""Domain exceptions mapped to HTTP responses by the API layer."""


class RistowordError(Exception):
    """Base class for errors that should reach the client."""

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(RistowordError):
    """A required field is missing from the request body."""

    status_code = 400


class NotFoundError(RistowordError):
    """No record with the requested ID."""

    status_code = 404

    def __init__(self, resource: str, record_id: object):
        self.resource = resource
        self.record_id = record_id
        super().__init__(f"{resource} #{record_id} not found")
