from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class Config:
    """Marks an annotated attribute as a configuration property.

    ``name`` is looked up both as an environment variable and as a key in the
    merged property sources::

        class Settings:
            port: Annotated[int, Config("PORT")] = 8080
    """

    name: str | None


@dataclass(frozen=True)
class FieldDescriptor:
    attribute: str
    property_name: str | None
    annotation: Any


class FieldKind(Enum):
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    ENUM = "enum"
    LIST = "list"


@dataclass(frozen=True)
class TypeTag:
    kind: FieldKind
    enum_type: type[Enum] | None = None
    element: TypeTag | None = None


class FieldSetter(Protocol):
    """Writes a converted value into the owner of ``field``; raises on failure."""

    def __call__(self, field: FieldDescriptor, value: Any) -> None:
        ...


class MergedSettings(Mapping[str, str]):
    """Read-only view of the key/value pairs merged from all property sources."""

    def __init__(self, values: Mapping[str, str] | None = None):
        self._values: Mapping[str, str] = MappingProxyType(dict(values or {}))

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"MergedSettings({dict(self._values)!r})"


class SettingsSnapshot(BaseModel):
    sources: list[str]
    settings: dict[str, str]
    masked: list[str] = []
    environment_applied: bool = False

    model_config = ConfigDict(extra="forbid")
