"""Entity extractors run against a :class:`~ontoParser.kg.document.ParsedDocument`."""

from ontoParser.extractors.classes import ClassExtractor
from ontoParser.extractors.prefixes import PrefixExtractor
from ontoParser.extractors.properties import PropertyExtractor
from ontoParser.extractors.resources import ResourceHelper
from ontoParser.extractors.restrictions import RestrictionExtractor
from ontoParser.extractors.shapes import ShapeExtractor
from ontoParser.extractors.xml_fallback import XmlFallbackExtractor

__all__ = [
    "ClassExtractor",
    "PrefixExtractor",
    "PropertyExtractor",
    "ResourceHelper",
    "RestrictionExtractor",
    "ShapeExtractor",
    "XmlFallbackExtractor",
]
