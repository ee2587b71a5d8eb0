from __future__ import annotations

import logging
from typing import Sequence

from annotation_configurator.errors import SourceIOError
from annotation_configurator.models import MergedSettings
from annotation_configurator.sources.loader import ResourceLoader, SourceLoader
from annotation_configurator.sources.properties import PropertySyntaxError, parser_for

LOGGER = logging.getLogger(__name__)


class ConfigMerger:
    """Merges property sources in order; later sources override earlier ones."""

    def __init__(self, loader: SourceLoader | None = None):
        self._loader = loader if loader is not None else ResourceLoader()

    def build(self, sources: str | Sequence[str | None] | None) -> MergedSettings:
        if sources is None or isinstance(sources, str):
            sources = [sources]
        merged: dict[str, str] = {}
        for source in sources:
            merged.update(self._read_source(source))
        return MergedSettings(merged)

    def _read_source(self, source: str | None) -> dict[str, str]:
        if not source:
            return {}
        try:
            stream = self._loader.lookup(source)
        except OSError as exc:
            LOGGER.error("Error opening property source %s: %s", source, exc)
            raise SourceIOError(f"Unable to open property source {source}: {exc}") from exc
        if stream is None:
            return {}
        with stream:
            try:
                text = stream.read().decode("utf-8-sig")
                values = parser_for(source)(text)
            except (OSError, UnicodeDecodeError, PropertySyntaxError) as exc:
                LOGGER.error("Error reading property source %s: %s", source, exc)
                raise SourceIOError(f"Unable to read property source {source}: {exc}") from exc
        LOGGER.info("Added properties from source: %s", source)
        return values
