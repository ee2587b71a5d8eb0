from __future__ import annotations

import logging
import os
import re
import types
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Annotated, Any, Callable, Union, get_args, get_origin, get_type_hints

from annotation_configurator.errors import BindingError, ConversionError, UnsupportedTypeError
from annotation_configurator.models import (
    Config,
    FieldDescriptor,
    FieldKind,
    FieldSetter,
    TypeTag,
)

LOGGER = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)[fFdD]?"
)
_SECRET_MARKERS = ("password", "key")
_SCALAR_KINDS = {str: FieldKind.TEXT, int: FieldKind.INTEGER, float: FieldKind.FLOAT, bool: FieldKind.BOOLEAN}
_LIST_ORIGINS = (list, Sequence)


def describe_fields(owner: type) -> list[FieldDescriptor]:
    """Collect every attribute of ``owner`` annotated with a :class:`Config` marker."""
    descriptors: list[FieldDescriptor] = []
    for attribute, hint in get_type_hints(owner, include_extras=True).items():
        if get_origin(hint) is not Annotated:
            continue
        marker = next((meta for meta in hint.__metadata__ if isinstance(meta, Config)), None)
        if marker is None:
            continue
        descriptors.append(
            FieldDescriptor(attribute=attribute, property_name=marker.name, annotation=get_args(hint)[0])
        )
    return descriptors


def resolve_type_tag(annotation: Any) -> TypeTag:
    """Map a field annotation onto the closed set of convertible types."""
    annotation = _unwrap_optional(annotation)
    if get_origin(annotation) in _LIST_ORIGINS or annotation is list:
        args = get_args(annotation)
        if len(args) != 1:
            raise UnsupportedTypeError(f"List field {annotation!r} must declare exactly one element type")
        element = _resolve_scalar(_unwrap_optional(args[0]))
        if element is None:
            raise UnsupportedTypeError(f"Unsupported list element type {args[0]!r}")
        return TypeTag(FieldKind.LIST, element=element)
    tag = _resolve_scalar(annotation)
    if tag is None:
        raise UnsupportedTypeError(
            f"Unsupported property type {annotation!r}; must be one of: str, int, float, bool, Enum or a list of these"
        )
    return tag


def convert(value: str, tag: TypeTag) -> Any:
    """Convert a raw property string according to ``tag``."""
    return _CONVERTERS[tag.kind](value, tag)


def is_secret(property_name: str) -> bool:
    lowered = property_name.lower()
    return any(marker in lowered for marker in _SECRET_MARKERS)


class FieldBinder:
    """Resolves effective values for configured fields and writes them through a setter."""

    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ = environ

    def bind(self, fields: Sequence[FieldDescriptor], settings: Mapping[str, str], setter: FieldSetter) -> None:
        for field in fields:
            self._bind_field(field, settings, setter)

    def effective_value(self, name: str, settings: Mapping[str, str]) -> str | None:
        environ = self._environ if self._environ is not None else os.environ
        env_value = environ.get(name)
        if env_value is not None:
            return env_value.strip()
        return settings.get(name)

    def _bind_field(self, field: FieldDescriptor, settings: Mapping[str, str], setter: FieldSetter) -> None:
        name = field.property_name
        if not name:
            LOGGER.warning(
                "Field %s does not specify a property name in its %s marker; skipping",
                field.attribute,
                Config.__name__,
            )
            return
        raw = self.effective_value(name, settings)
        if raw is None:
            LOGGER.debug("No configuration found for setting %s; leaving at default value", name)
            return
        try:
            tag = resolve_type_tag(field.annotation)
        except UnsupportedTypeError as exc:
            raise UnsupportedTypeError(f"Field {field.attribute!r}: {exc}") from exc
        value = convert(raw, tag)
        try:
            setter(field, value)
        except (AttributeError, TypeError) as exc:
            raise BindingError(f"Unable to set field {field.attribute!r}: {exc}") from exc
        if is_secret(name):
            LOGGER.info("Configured setting %s", name)
        else:
            LOGGER.info("Configured setting: %s = %s", name, raw)


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return annotation


def _resolve_scalar(annotation: Any) -> TypeTag | None:
    if get_origin(annotation) is not None or not isinstance(annotation, type):
        return None
    if issubclass(annotation, Enum):
        return TypeTag(FieldKind.ENUM, enum_type=annotation)
    kind = _SCALAR_KINDS.get(annotation)
    if kind is None:
        return None
    return TypeTag(kind)


def _to_text(value: str, tag: TypeTag) -> str:
    return value


def _to_integer(value: str, tag: TypeTag) -> int:
    if not _INTEGER_RE.fullmatch(value):
        raise ConversionError(f"For input string: {value!r} is not a base-10 integer")
    return int(value)


def _to_float(value: str, tag: TypeTag) -> float:
    trimmed = value.strip()
    if not _FLOAT_RE.fullmatch(trimmed):
        raise ConversionError(f"For input string: {value!r} is not a floating point number")
    if trimmed[-1] in "fFdD":
        trimmed = trimmed[:-1]
    return float(trimmed)


def _to_boolean(value: str, tag: TypeTag) -> bool:
    return value.lower() == "true"


def _to_enum(value: str, tag: TypeTag) -> Enum:
    assert tag.enum_type is not None
    member = tag.enum_type.__members__.get(value)
    if member is None:
        raise ConversionError(f"No enum constant {tag.enum_type.__name__}.{value}")
    return member


def _to_list(value: str, tag: TypeTag) -> list[Any]:
    assert tag.element is not None
    return [convert(element.strip(), tag.element) for element in value.split(",")]


_CONVERTERS: dict[FieldKind, Callable[[str, TypeTag], Any]] = {
    FieldKind.TEXT: _to_text,
    FieldKind.INTEGER: _to_integer,
    FieldKind.FLOAT: _to_float,
    FieldKind.BOOLEAN: _to_boolean,
    FieldKind.ENUM: _to_enum,
    FieldKind.LIST: _to_list,
}
