class SwiftCodeServiceError(Exception):
    """Base class for errors raised by the SWIFT code core."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(SwiftCodeServiceError):
    status_code = 404


class DuplicateKeyError(SwiftCodeServiceError):
    status_code = 409


class SwiftCodeValidationError(SwiftCodeServiceError):
    status_code = 400


class StoreUnavailableError(SwiftCodeServiceError):
    status_code = 500


class IngestionError(SwiftCodeServiceError):
    """Source file could not be read. Raised before the store is touched."""
