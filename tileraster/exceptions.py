"""Custom exceptions for tileraster."""


class TileRasterError(Exception):
    """Base exception for all tileraster errors."""

    def __init__(self, message: str, details: dict | None = None):
        """Initialize exception.

        Args:
            message: Error message
            details: Optional dictionary with additional context
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigurationError(TileRasterError):
    """Configuration loading or validation errors."""
    pass


class QueryError(TileRasterError):
    """Raster request parameters missing or unparseable."""
    pass


class TileError(TileRasterError):
    """Tile address outside the configured pyramid."""
    pass
