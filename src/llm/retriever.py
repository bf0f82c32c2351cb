"""
Taxonomy-aware Retriever
Runs a vector-store query restricted by the metadata filter derived from the
user query, so answers are not built from unrelated products' manuals.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from config.ai_settings import LOG_QUERIES, RAG_TOP_K
from src.llm.query_classifier import QueryClassifier, get_query_classifier
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class RetrievedDocument:
    """One retrieved chunk"""
    id: str
    text: str
    similarity: float
    metadata: Dict[str, Any]


class TaxonomyRetriever:
    """Filtered retrieval on top of a vector store client"""

    def __init__(
        self,
        vectordb,
        query_classifier: Optional[QueryClassifier] = None,
        top_k: int = RAG_TOP_K
    ):
        """
        Args:
            vectordb: Client exposing query(query_text, n_results, search_filter)
            query_classifier: Builds the metadata filter for a query
            top_k: Default number of chunks to return
        """
        self.vectordb = vectordb
        self.query_classifier = query_classifier or get_query_classifier()
        self.top_k = top_k

    def retrieve(self, query: str, top_k: Optional[int] = None) -> List[RetrievedDocument]:
        """
        Retrieve chunks for a query

        Args:
            query: User query
            top_k: Number of chunks, defaults to the retriever's top_k

        Returns:
            Retrieved chunks, most similar first
        """
        search_filter = self.query_classifier.build_search_filter(query)
        if LOG_QUERIES:
            logger.info(f"Retrieving for '{query[:80]}' with filter {search_filter}")

        results = self.vectordb.query(
            query_text=query,
            n_results=top_k or self.top_k,
            search_filter=search_filter
        )

        ids = (results.get("ids") or [[]])[0]
        documents = (results.get("documents") or [[]])[0]
        metadatas = (results.get("metadatas") or [[]])[0]
        distances = (results.get("distances") or [[]])[0]

        # L2 distance conversion: similarity = max(0, 1 - distance/2)
        retrieved = [
            RetrievedDocument(
                id=doc_id,
                text=text,
                similarity=max(0, 1 - distance / 2),
                metadata=metadata or {}
            )
            for doc_id, text, metadata, distance in zip(ids, documents, metadatas, distances)
        ]

        logger.info(f"Retrieved {len(retrieved)} documents")
        return retrieved
