from __future__ import annotations

from annotation_configurator.sources.loader import ResourceLoader, SourceLoader
from annotation_configurator.sources.properties import parse_dotenv, parse_properties, parser_for

__all__ = ["ResourceLoader", "SourceLoader", "parse_dotenv", "parse_properties", "parser_for"]
