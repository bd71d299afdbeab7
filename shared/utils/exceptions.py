"""Custom exceptions for the PDF upload service."""


class FileUploadException(Exception):
    """Base exception for all upload-related errors."""
    pass


class MissingFileException(FileUploadException):
    """Raised when the upload request carries no file."""
    pass


class InvalidFileTypeException(FileUploadException):
    """Raised when the uploaded file is not an accepted content type."""
    pass


class ValidationException(FileUploadException):
    """Raised when a stored file record fails validation."""
    pass


class FileNotFoundException(FileUploadException):
    """Raised when a stored file cannot be found."""
    pass


class StorageException(FileUploadException):
    """Raised when storage operations fail."""
    pass


class PayloadTooLargeException(StorageException):
    """Raised when a payload exceeds the storage size limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"Payload of {size} bytes exceeds the {limit} byte limit")
        self.size = size
        self.limit = limit
