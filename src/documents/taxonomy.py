"""
Product Taxonomy
================
Closed vocabulary for tagging RAG documents and filtering retrieval.

- ProductCategory: ROBOT, OPE, ERCO
- PowerType: BATTERY, FUEL, UNKNOWN
- DocumentSpecificity: PRODUCT_SPECIFIC, CATEGORY_COMMON, GENERAL

The raw tables live in config/taxonomy_vocabulary.py. This module compiles
them once into an immutable Taxonomy that both classifiers share.

Usage:
    taxonomy = get_taxonomy()
    for category, model_pattern in taxonomy.model_patterns:
        ...
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Pattern, Tuple

from config import taxonomy_vocabulary as vocabulary


class ProductCategory(str, Enum):
    """Product line a document belongs to"""
    ROBOT = "robot"
    OPE = "ope"    # Outdoor Power Equipment
    ERCO = "erco"  # Leaf blowers


class PowerType(str, Enum):
    """Power source of the product a document describes"""
    BATTERY = "battery"
    FUEL = "fuel"
    UNKNOWN = "unknown"


class DocumentSpecificity(str, Enum):
    """How narrowly a document applies, narrowest first"""
    PRODUCT_SPECIFIC = "product_specific"  # One model, e.g. TM-850
    CATEGORY_COMMON = "category_common"    # All robots, all OPE, ...
    GENERAL = "general"                    # General knowledge


@dataclass(frozen=True)
class ModelPattern:
    """Model number pattern of one category"""
    pattern: Pattern
    series: Tuple[str, ...]

    def find_all(self, text: str) -> list:
        """All model tokens in text, canonical "SERIES-NUMBER" form, in order of appearance"""
        return [
            f"{match.group(1)}-{match.group(2)}".upper()
            for match in self.pattern.finditer(text)
        ]

    def find_first(self, text: str) -> Optional[str]:
        match = self.pattern.search(text)
        if match is None:
            return None
        return f"{match.group(1)}-{match.group(2)}".upper()


def compile_model_pattern(series, number: str) -> Pattern:
    """
    Build a whole-token model number regex.

    Group 1 is the series prefix, group 2 the number part. The token must not
    be preceded by a letter, digit or hyphen and must not be followed by a
    letter or digit.
    """
    prefixes = "|".join(re.escape(prefix) for prefix in series)
    return re.compile(
        rf"(?<![A-Z0-9-])({prefixes})-?({number})(?![A-Z0-9])",
        re.IGNORECASE,
    )


@dataclass(frozen=True)
class Taxonomy:
    """Immutable taxonomy tables shared by the document and query classifiers"""
    model_patterns: Tuple[Tuple[ProductCategory, ModelPattern], ...]
    ope_battery_prefixes: Tuple[str, ...]
    battery_keywords: Tuple[str, ...]
    fuel_keywords: Tuple[str, ...]
    path_keywords: Tuple[Tuple[ProductCategory, Tuple[str, ...]], ...]
    query_keywords: Tuple[Tuple[ProductCategory, Pattern], ...]

    @property
    def categories(self) -> Tuple[ProductCategory, ...]:
        return tuple(category for category, _ in self.model_patterns)

    def pattern_for(self, category: Optional[ProductCategory]) -> Optional[ModelPattern]:
        for candidate, model_pattern in self.model_patterns:
            if candidate == category:
                return model_pattern
        return None


def build_taxonomy(
    model_patterns=None,
    ope_battery_prefixes=None,
    power_type_keywords: Optional[Dict] = None,
    path_keywords: Optional[Dict] = None,
    query_keywords: Optional[Dict] = None,
) -> Taxonomy:
    """
    Compile raw vocabulary tables into a Taxonomy.

    Every argument defaults to the matching table in config.taxonomy_vocabulary.
    Category order follows model_patterns; path and query keywords are
    re-ordered to match it.
    """
    model_patterns = vocabulary.MODEL_PATTERNS if model_patterns is None else model_patterns
    ope_battery_prefixes = (
        vocabulary.OPE_BATTERY_PREFIXES if ope_battery_prefixes is None else ope_battery_prefixes
    )
    power_type_keywords = power_type_keywords or vocabulary.POWER_TYPE_KEYWORDS
    path_keywords = path_keywords or vocabulary.CATEGORY_PATH_KEYWORDS
    query_keywords = query_keywords or vocabulary.QUERY_CATEGORY_KEYWORDS

    compiled = tuple(
        (
            ProductCategory(entry["category"]),
            ModelPattern(
                pattern=compile_model_pattern(entry["series"], entry["number"]),
                series=tuple(entry["series"]),
            ),
        )
        for entry in model_patterns
    )
    order = [category for category, _ in compiled]

    return Taxonomy(
        model_patterns=compiled,
        ope_battery_prefixes=tuple(prefix.upper() for prefix in ope_battery_prefixes),
        battery_keywords=tuple(power_type_keywords.get("battery", [])),
        fuel_keywords=tuple(power_type_keywords.get("fuel", [])),
        path_keywords=tuple(
            (category, tuple(k.lower() for k in path_keywords.get(category.value, [])))
            for category in order
        ),
        query_keywords=tuple(
            (category, _compile_query_keywords(query_keywords.get(category.value, [])))
            for category in order
            if query_keywords.get(category.value)
        ),
    )


def _compile_query_keywords(keywords) -> Pattern:
    alternatives = "|".join(re.escape(keyword) for keyword in keywords)
    return re.compile(rf"(?<!\w)(?:{alternatives})(?!\w)", re.IGNORECASE)


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

_taxonomy: Optional[Taxonomy] = None


def get_taxonomy() -> Taxonomy:
    """Get singleton Taxonomy instance"""
    global _taxonomy

    if _taxonomy is None:
        _taxonomy = build_taxonomy()

    return _taxonomy
