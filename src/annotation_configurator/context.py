from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Sequence

from annotation_configurator.binder import FieldBinder, describe_fields
from annotation_configurator.merger import ConfigMerger
from annotation_configurator.models import FieldDescriptor, FieldSetter, MergedSettings
from annotation_configurator.sources.loader import SourceLoader


class PropertyConfigContext:
    """Reads property sources once and configures annotated attributes from them.

    Sources later in the list override earlier ones, and an environment variable
    named like a property overrides every source::

        class Settings:
            port: Annotated[int, Config("PORT")] = 8080

            def __init__(self) -> None:
                PropertyConfigContext(["base.properties", "local.properties"]).configure_instance(self)
    """

    def __init__(
        self,
        sources: str | Sequence[str | None] | None,
        *,
        loader: SourceLoader | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        self._settings = ConfigMerger(loader).build(sources)
        self._binder = FieldBinder(environ)

    @property
    def settings(self) -> MergedSettings:
        return self._settings

    def configure(self, owner: type, setter: FieldSetter) -> None:
        """Set every ``Config``-annotated attribute of ``owner`` through ``setter``."""
        self._binder.bind(describe_fields(owner), self._settings, setter)

    def configure_instance(self, instance: Any) -> None:
        def assign(field: FieldDescriptor, value: Any) -> None:
            setattr(instance, field.attribute, value)

        self.configure(type(instance), assign)
