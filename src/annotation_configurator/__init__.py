"""Populate annotated class attributes from layered property files and environment variables."""

from __future__ import annotations

from annotation_configurator.binder import FieldBinder, describe_fields
from annotation_configurator.context import PropertyConfigContext
from annotation_configurator.errors import (
    BindingError,
    ConfiguratorError,
    ConversionError,
    SourceIOError,
    SourceLookupError,
    UnsupportedTypeError,
)
from annotation_configurator.merger import ConfigMerger
from annotation_configurator.models import Config, FieldDescriptor, MergedSettings
from annotation_configurator.sources.loader import ResourceLoader, SourceLoader

__all__ = [
    "BindingError",
    "Config",
    "ConfigMerger",
    "ConfiguratorError",
    "ConversionError",
    "FieldBinder",
    "FieldDescriptor",
    "MergedSettings",
    "PropertyConfigContext",
    "ResourceLoader",
    "SourceIOError",
    "SourceLoader",
    "SourceLookupError",
    "UnsupportedTypeError",
    "describe_fields",
]
