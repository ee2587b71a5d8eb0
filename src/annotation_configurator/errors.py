from __future__ import annotations


class ConfiguratorError(RuntimeError):
    """Base class for configuration loading and binding failures."""


class SourceIOError(ConfiguratorError):
    """Raised when a property source exists but cannot be read or parsed."""


class SourceLookupError(ConfiguratorError):
    """Raised when a resource directory cannot be found."""


class ConversionError(ConfiguratorError):
    """Raised when a property value does not match the field's declared type."""


class UnsupportedTypeError(ConfiguratorError):
    """Raised when a configured field declares a type that cannot be converted."""


class BindingError(ConfiguratorError):
    """Raised when a converted value cannot be written to its field."""
