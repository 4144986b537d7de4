class SieveCacheError(Exception):
    """Base class for all sievecache exceptions."""
    pass

class ConfigurationError(SieveCacheError, ValueError):
    """Raised when a cache is constructed with invalid settings."""
    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(message)
        self.original_exception = original_exception
        self.message = message

    def __str__(self) -> str:
        if self.original_exception:
            return f"{self.message} (Original: {str(self.original_exception)})"
        return self.message

class CacheOperationError(SieveCacheError):
    """Raised when an internal cache structure is used inconsistently."""
    pass
