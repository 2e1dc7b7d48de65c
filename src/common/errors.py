"""Exception types shared across depbump modules."""


class DepbumpError(Exception):
    """Base class for depbump errors."""


class RegistryError(DepbumpError):
    """Registry request failed or returned an unusable payload."""


class ConfigError(DepbumpError):
    """Configuration file could not be read or parsed."""
