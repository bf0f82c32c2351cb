"""
Document Taxonomy Classifier
============================
Tags an ingested document with product category, power type, model identity
and specificity so retrieval can keep unrelated products apart.

Classification steps:
1. Category: path/name conventions first, then model patterns in taxonomy order
2. Model numbers: filename first, content only if the filename has none
3. Power type: OPE battery series, robot policy, then keyword counts
4. Specificity: filename hints, then number of models found

Every step is total: a miss degrades to None / UNKNOWN / GENERAL, it never raises.

Usage:
    classifier = get_document_classifier()
    tags = classifier.classify_document(filename, file_path, content, "robot-collection")
    chunk_metadata = tags.to_metadata()
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from src.documents.taxonomy import (
    DocumentSpecificity,
    PowerType,
    ProductCategory,
    Taxonomy,
    get_taxonomy,
)
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

UNCATEGORIZED = "uncategorized"

_SERIES_PATTERN = re.compile(r"^([A-Za-z]+)")


@dataclass
class DocumentTags:
    """Taxonomy tags of one document"""
    product_category: Optional[ProductCategory]
    power_type: PowerType
    model_number: Optional[str]   # e.g. "TM-850", "CS-350"
    model_series: Optional[str]   # e.g. "TM", "CS"
    specificity: DocumentSpecificity
    applicable_models: Optional[List[str]] = None  # Only when several models were found
    tags: List[str] = field(default_factory=list)

    def to_metadata(self) -> Dict[str, Any]:
        """
        Flatten into scalar metadata for a vector store.

        None values are dropped, enums become their string values and
        lists are joined with ", ".
        """
        metadata = {
            "product_category": self.product_category.value if self.product_category else None,
            "power_type": self.power_type.value,
            "model_number": self.model_number,
            "model_series": self.model_series,
            "specificity": self.specificity.value,
            "applicable_models": ", ".join(self.applicable_models) if self.applicable_models else None,
            "tags": ", ".join(self.tags) if self.tags else None,
        }
        return {key: value for key, value in metadata.items() if value is not None}


class DocumentClassifier:
    """
    Classify documents into the product taxonomy.

    Pure and stateless apart from the shared, immutable Taxonomy.
    """

    def __init__(self, taxonomy: Optional[Taxonomy] = None):
        self.taxonomy = taxonomy or get_taxonomy()

    def detect_product_category(
        self,
        filename: str,
        file_path: str,
        content: str
    ) -> Optional[ProductCategory]:
        """
        Determine product category from filename, path or content.

        Args:
            filename: Original filename
            file_path: Full path of the uploaded file
            content: Extracted document text

        Returns:
            First matching category in taxonomy order, or None
        """
        full_text = f"{filename} {file_path} {content}".lower()

        for category, keywords in self.taxonomy.path_keywords:
            if any(keyword in full_text for keyword in keywords):
                return category

        for category, model_pattern in self.taxonomy.model_patterns:
            if model_pattern.pattern.search(content):
                return category

        return None

    def extract_model_numbers(self, text: str, category: Optional[ProductCategory]) -> List[str]:
        """
        Extract model numbers of one category from text.

        Args:
            text: Text to search
            category: Category whose pattern is applied

        Returns:
            Unique upper-cased model numbers in order of first appearance
        """
        model_pattern = self.taxonomy.pattern_for(category)
        if model_pattern is None:
            return []

        # dict keeps insertion order
        return list(dict.fromkeys(model_pattern.find_all(text)))

    def detect_power_type(
        self,
        content: str,
        model_number: Optional[str],
        category: Optional[ProductCategory]
    ) -> PowerType:
        """
        Detect power type from model number and content keywords.

        Args:
            content: Document text
            model_number: Primary model number, if any
            category: Detected product category

        Returns:
            BATTERY, FUEL or UNKNOWN
        """
        if category == ProductCategory.OPE and model_number:
            upper_model = model_number.upper()
            if any(upper_model.startswith(prefix) for prefix in self.taxonomy.ope_battery_prefixes):
                return PowerType.BATTERY

        # Robots are battery powered regardless of model
        if category == ProductCategory.ROBOT and model_number:
            return PowerType.BATTERY

        lower_content = content.lower()
        battery_matches = sum(1 for keyword in self.taxonomy.battery_keywords if keyword in lower_content)
        fuel_matches = sum(1 for keyword in self.taxonomy.fuel_keywords if keyword in lower_content)

        if battery_matches > fuel_matches and battery_matches > 0:
            return PowerType.BATTERY
        if fuel_matches > battery_matches and fuel_matches > 0:
            return PowerType.FUEL

        return PowerType.UNKNOWN

    def detect_specificity(
        self,
        model_numbers: List[str],
        category: Optional[ProductCategory],
        filename: str
    ) -> DocumentSpecificity:
        """
        Determine how narrowly a document applies.

        Args:
            model_numbers: Model numbers found for the document
            category: Detected product category
            filename: Original filename

        Returns:
            DocumentSpecificity
        """
        lower_filename = filename.lower()

        if "general" in lower_filename or "overview" in lower_filename:
            return DocumentSpecificity.GENERAL

        if len(model_numbers) == 1 and model_numbers[0].lower() in lower_filename:
            return DocumentSpecificity.PRODUCT_SPECIFIC

        if category is not None and not model_numbers:
            return DocumentSpecificity.CATEGORY_COMMON

        if len(model_numbers) > 1:
            return DocumentSpecificity.CATEGORY_COMMON

        # Single model found in content only; still treated as that product's document
        if len(model_numbers) == 1:
            return DocumentSpecificity.PRODUCT_SPECIFIC

        return DocumentSpecificity.GENERAL

    @staticmethod
    def extract_model_series(model_number: Optional[str]) -> Optional[str]:
        """Extract model series, e.g. "TM" from "TM-850" """
        if not model_number:
            return None

        match = _SERIES_PATTERN.match(model_number)
        return match.group(1) if match else None

    def classify_document(
        self,
        filename: str,
        file_path: str,
        content: str,
        collection_name: str
    ) -> DocumentTags:
        """
        Full classification of a document.

        Args:
            filename: Original filename
            file_path: Full path of the uploaded file
            content: Extracted document text
            collection_name: Target collection, added to the free-text tags

        Returns:
            DocumentTags
        """
        category = self.detect_product_category(filename, file_path, content)

        # Filename is the most reliable source, content is the fallback
        model_numbers = self.extract_model_numbers(filename, category)
        if not model_numbers:
            model_numbers = self.extract_model_numbers(content, category)
        primary_model = model_numbers[0] if model_numbers else None

        power_type = self.detect_power_type(content, primary_model, category)
        specificity = self.detect_specificity(model_numbers, category, filename)

        tags = [
            collection_name,
            category.value if category else UNCATEGORIZED,
            specificity.value,
            power_type.value,
        ]

        result = DocumentTags(
            product_category=category,
            power_type=power_type,
            model_number=primary_model,
            model_series=self.extract_model_series(primary_model),
            specificity=specificity,
            applicable_models=model_numbers if len(model_numbers) > 1 else None,
            tags=[tag for tag in tags if tag is not None and tag != ""],
        )

        logger.debug(
            f"[CLASSIFY] {filename} → category={category.value if category else None}, "
            f"model={primary_model}, power={power_type.value}, specificity={specificity.value}"
        )
        return result


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

_document_classifier: Optional[DocumentClassifier] = None


def get_document_classifier() -> DocumentClassifier:
    """Get singleton DocumentClassifier instance"""
    global _document_classifier

    if _document_classifier is None:
        _document_classifier = DocumentClassifier()

    return _document_classifier
