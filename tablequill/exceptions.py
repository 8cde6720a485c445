"""Custom exceptions for TableQuill."""

from typing import Optional


class TableQuillError(Exception):
    """Base exception for TableQuill errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ParsingError(TableQuillError):
    """Exception raised while reading table markup."""

    pass


class LayoutError(TableQuillError):
    """Exception raised during width/height resolution or pagination."""

    pass


class RenderingError(TableQuillError):
    """Exception raised while writing the output document."""

    pass


class FontError(TableQuillError):
    """Exception raised during font registration or resolution."""

    pass


class MediaError(TableQuillError):
    """Exception raised during image processing."""

    pass


class ImageNotFoundError(MediaError):
    """Image source does not exist or cannot be opened."""

    pass


class UnsupportedImageError(MediaError):
    """Image type is not supported or cannot be determined."""

    pass
