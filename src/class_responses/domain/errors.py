"""Domain errors raised by the response services."""


class ClassResponsesError(Exception):
    """Base class for expected domain failures."""


class NotFoundError(ClassResponsesError):
    """Raised when a session id does not match any stored row."""


class InvalidInputError(ClassResponsesError):
    """Raised when a submission or save payload is missing required data."""


class AlreadySubmittedError(ClassResponsesError):
    """Raised when a respondent already submitted under an assignment id."""


class NoSubmissionsError(ClassResponsesError):
    """Raised when a combined export is requested for an empty assignment."""


class StorageError(RuntimeError):
    """Raised by adapters when the store does not return an expected row."""
