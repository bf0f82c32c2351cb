"""
Query Taxonomy Classifier
Detects product model / category in a user query and turns it into a
metadata filter for vector-store retrieval.

Filter tiers:
- Model identified: the model's own documents + common docs of its category
- Category identified: everything in the category + general docs
- Nothing identified: general and category-common docs only
"""
from dataclasses import dataclass
from typing import Optional

from src.documents.taxonomy import DocumentSpecificity, ProductCategory, Taxonomy, get_taxonomy
from src.utils.logger import setup_logger
from src.vectordb.search_filter import And, Eq, In, Or, SearchFilter

logger = setup_logger(__name__)


@dataclass
class QueryModelMatch:
    """Model number and category found in a query"""
    model_number: Optional[str]
    category: Optional[ProductCategory]


class QueryClassifier:
    """Classify user queries to determine the retrieval filter"""

    def __init__(self, taxonomy: Optional[Taxonomy] = None):
        self.taxonomy = taxonomy or get_taxonomy()

    def extract_model_from_query(self, query: str) -> QueryModelMatch:
        """
        Extract model number from a user query.

        Categories are tried in taxonomy order and the first one whose
        pattern matches wins, even if a later pattern would match too.
        """
        upper_query = query.upper()

        for category, model_pattern in self.taxonomy.model_patterns:
            model_number = model_pattern.find_first(upper_query)
            if model_number:
                return QueryModelMatch(model_number=model_number, category=category)

        return QueryModelMatch(model_number=None, category=None)

    def detect_query_category(self, query: str) -> Optional[ProductCategory]:
        """Detect a category named in the query without a model number"""
        for category, pattern in self.taxonomy.query_keywords:
            if pattern.search(query):
                return category
        return None

    def build_search_filter(self, query: str) -> Optional[SearchFilter]:
        """
        Build metadata filter for vector-store search.

        Args:
            query: User query

        Returns:
            Filter tree to pass to the vector store
        """
        match = self.extract_model_from_query(query)

        if match.model_number:
            # Exact model OR common docs of that category, never another model's manual
            logger.debug(f"Query filter: model tier ({match.model_number}, {match.category.value})")
            return Or(
                Eq("model_number", match.model_number),
                And(
                    Eq("specificity", DocumentSpecificity.CATEGORY_COMMON),
                    Eq("product_category", match.category),
                ),
            )

        category = self.detect_query_category(query)
        if category:
            logger.debug(f"Query filter: category tier ({category.value})")
            return Or(
                Eq("product_category", category),
                Eq("specificity", DocumentSpecificity.GENERAL),
            )

        logger.debug("Query filter: general tier")
        return In("specificity", [DocumentSpecificity.GENERAL, DocumentSpecificity.CATEGORY_COMMON])


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

_query_classifier: Optional[QueryClassifier] = None


def get_query_classifier() -> QueryClassifier:
    """Get singleton QueryClassifier instance"""
    global _query_classifier

    if _query_classifier is None:
        _query_classifier = QueryClassifier()

    return _query_classifier
