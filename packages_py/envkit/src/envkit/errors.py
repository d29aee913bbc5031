"""Custom exceptions for envkit."""

class EnvKitError(Exception):
    """Base class for all envkit errors."""
    pass

class EnvResolutionError(EnvKitError):
    """Raised when a status query cannot produce a ValidationResult."""
    pass

class FileSystemUnavailableError(EnvKitError):
    """Raised by a FileSystem that does not permit disk access."""
    pass

class SpecDefinitionError(EnvKitError, ValueError):
    """Raised when variable specs are malformed (e.g., duplicate names).

    Also a ValueError, so pydantic validators report it as a validation error.
    """
    pass

class ConfigLoadError(EnvKitError):
    """Raised when an envkit.yaml file cannot be read or validated."""
    pass
