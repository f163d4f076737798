"""Exceptions raised by the screening pipeline and mapped to HTTP responses in main."""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class AuthError(AppError):
    status_code = 401


class NotFoundError(AppError):
    status_code = 404


class PersistenceError(AppError):
    status_code = 500


class UnsupportedFileType(ValueError):
    """Raised for uploads that are neither PDF nor DOCX."""
