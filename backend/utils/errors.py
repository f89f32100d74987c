"""
Error taxonomy for BOQ operations

Store-level failures are wrapped into one of these kinds with the context of
the step that failed. The HTTP layer maps each kind to a status code.
"""


class BOQServiceError(Exception):
    """Base class for every error raised by the BOQ core"""

    http_status = 500

    def __init__(self, message: str, **context):
        self.message = message
        self.context = context
        super().__init__(message)


class NotFoundError(BOQServiceError):
    """Referenced BOQ does not exist"""

    http_status = 404


class InvalidStateError(BOQServiceError):
    """Mutation attempted on a BOQ that is not in draft status"""

    http_status = 409


class ConstraintError(BOQServiceError):
    """Uniqueness or referential violation at insert time"""

    http_status = 409


class DataAccessError(BOQServiceError):
    """Any other store failure (connection loss, bad query, failed commit)"""

    http_status = 500


class OperationCancelledError(DataAccessError):
    """The caller's deadline expired or the operation was cancelled"""

    http_status = 504
