"""
ChromaDB Vector Database Client
Persists classified chunks with their taxonomy metadata and answers
similarity queries restricted by a SearchFilter.

Writing a document first removes every chunk previously stored for the same
(collection_name, source), so re-ingesting a shorter version leaves no
stale chunks behind.
"""
from typing import Any, Dict, List, Optional, Tuple

import chromadb

from config.ai_settings import CHROMA_COLLECTION_NAME, CHROMA_PERSIST_DIR
from src.utils.logger import setup_logger
from src.vectordb.search_filter import And, Eq, SearchFilter

logger = setup_logger(__name__)

QUERY_INCLUDE = ["documents", "metadatas", "distances"]


def sanitize_value(value: Any) -> Any:
    """Chroma accepts only str, int, float and bool metadata values"""
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


def sanitize_metadata(metadata: Dict[str, Any]) -> Dict[str, Any]:
    """Drop None values and flatten the rest to primitives"""
    return {
        key: sanitize_value(value)
        for key, value in metadata.items()
        if value is not None
    }


def _document_keys(chunks: List[Dict]) -> List[Tuple[str, str]]:
    """Distinct (source, collection_name) pairs of the chunks, in order"""
    keys = (
        (chunk.get("metadata", {}).get("source"), chunk.get("metadata", {}).get("collection_name"))
        for chunk in chunks
    )
    return list(dict.fromkeys(key for key in keys if key[0] and key[1]))


class ChromaDBClient:
    """Taxonomy-aware wrapper around one persistent Chroma collection"""

    def __init__(
        self,
        persist_directory: str = CHROMA_PERSIST_DIR,
        collection_name: str = CHROMA_COLLECTION_NAME
    ):
        """
        Args:
            persist_directory: On-disk location of the Chroma database
            collection_name: Collection holding the tagged chunks
        """
        self.persist_directory = persist_directory
        self.collection_name = collection_name

        try:
            self.client = chromadb.PersistentClient(path=persist_directory)
            self.collection = self._open_collection()
        except Exception as e:
            logger.error(f"❌ Cannot open ChromaDB at {persist_directory}: {e}")
            raise

        logger.info(f"✅ ChromaDB collection '{collection_name}' ready ({self.collection.count()} chunks)")

    def _open_collection(self):
        return self.client.get_or_create_collection(
            name=self.collection_name,
            metadata={"description": "Product manuals tagged with the product taxonomy"}
        )

    def add_documents(
        self,
        chunks: List[Dict],
        embeddings: Optional[List[List[float]]] = None
    ) -> int:
        """
        Upsert chunks produced by the document processor

        Args:
            chunks: Chunk dicts with chunk_id, text and metadata
            embeddings: Precomputed vectors, one per chunk. When omitted the
                collection's embedding function embeds the texts.

        Returns:
            Number of chunks written
        """
        if embeddings is not None and len(embeddings) != len(chunks):
            raise ValueError(f"Got {len(chunks)} chunks but {len(embeddings)} embeddings")

        if not chunks:
            logger.warning("⚠️  Nothing to store, chunk list is empty")
            return 0

        payload = {
            "ids": [chunk["chunk_id"] for chunk in chunks],
            "documents": [chunk["text"] for chunk in chunks],
            "metadatas": [sanitize_metadata(chunk.get("metadata", {})) for chunk in chunks],
        }
        if embeddings is not None:
            payload["embeddings"] = embeddings

        # Replace the previous version of each document; its chunk count may have shrunk
        for source, collection_name in _document_keys(chunks):
            self.delete_by_source(source, collection_name)

        try:
            self.collection.upsert(**payload)
        except Exception as e:
            logger.error(f"❌ Failed to store {len(chunks)} chunks: {e}")
            raise

        logger.info(f"✅ Stored {len(chunks)} chunks in '{self.collection_name}'")
        return len(chunks)

    def query(
        self,
        query_text: str,
        n_results: int = 5,
        search_filter: Optional[SearchFilter] = None,
        query_embedding: Optional[List[float]] = None
    ) -> Dict:
        """
        Similarity search restricted by a taxonomy filter

        Args:
            query_text: User query, embedded by the collection unless
                query_embedding is given
            n_results: Maximum number of chunks
            search_filter: Filter applied before ranking; None searches everything
            query_embedding: Precomputed query vector

        Returns:
            Raw Chroma result dict (ids, documents, metadatas, distances)
        """
        where = search_filter.to_chroma() if search_filter is not None else None
        if query_embedding is not None:
            request = {"query_embeddings": [query_embedding]}
        else:
            request = {"query_texts": [query_text]}

        try:
            results = self.collection.query(
                **request,
                n_results=n_results,
                where=where,
                include=QUERY_INCLUDE
            )
        except Exception as e:
            logger.error(f"❌ Filtered query failed (where={where}): {e}")
            raise

        logger.info(f"🔎 '{query_text[:50]}' where={where} -> {len(results['ids'][0])} chunks")
        return results

    def get_matching(self, search_filter: SearchFilter, limit: Optional[int] = None) -> Dict:
        """Chunks whose metadata satisfies the filter, without similarity ranking"""
        return self.collection.get(
            where=search_filter.to_chroma(),
            limit=limit,
            include=["documents", "metadatas"]
        )

    def get_count(self) -> int:
        return self.collection.count()

    def clear_collection(self):
        """Drop and recreate the collection"""
        try:
            self.client.delete_collection(name=self.collection_name)
            self.collection = self._open_collection()
        except Exception as e:
            logger.error(f"❌ Failed to reset '{self.collection_name}': {e}")
            raise

        logger.info(f"🗑️  Collection '{self.collection_name}' reset")

    def delete_by_source(self, source: str, collection_name: str):
        """Remove every chunk of one source document within one tag collection"""
        where = And(Eq("source", source), Eq("collection_name", collection_name)).to_chroma()
        try:
            self.collection.delete(where=where)
        except Exception as e:
            logger.error(f"❌ Failed to delete chunks of {collection_name}/{source}: {e}")
            raise

        logger.info(f"🗑️  Deleted chunks of {collection_name}/{source}")
