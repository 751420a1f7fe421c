"""
Custom exceptions for HAML Localizer.
"""

class HamlLocalizerError(Exception):
    """Base exception for HAML Localizer."""
    pass

class NotDefinedLineType(HamlLocalizerError):
    """Raised when a line type has no replacement strategy."""
    pass

class AttributeParseError(HamlLocalizerError):
    """Raised when an attribute source is not a plain literal hash."""
    pass

class LocaleFileError(HamlLocalizerError):
    """Raised when an existing locale document cannot be read back."""
    pass

class ConfigError(HamlLocalizerError):
    """Raised when configuration-related errors occur."""
    pass
