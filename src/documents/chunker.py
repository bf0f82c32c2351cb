"""
Text Chunking Module
Packs whole sentences into word-budgeted chunks. Every chunk inherits the
taxonomy metadata of its document, so retrieval filters apply per chunk.
"""
import re
from typing import Dict, Iterator, List

from config.ai_settings import CHUNK_OVERLAP, CHUNK_SIZE
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

_SENTENCE_BOUNDARY = re.compile(r'(?<=[.!?])\s+')


def word_count(text: str) -> int:
    return len(text.split())


class TextChunker:
    """Sentence-aligned chunker with sentence-level overlap"""

    def __init__(self, chunk_size: int = CHUNK_SIZE, chunk_overlap: int = CHUNK_OVERLAP):
        """
        Args:
            chunk_size: Word budget per chunk. A single sentence longer than
                the budget still becomes one chunk.
            chunk_overlap: Word budget of trailing sentences repeated at the
                start of the next chunk
        """
        if chunk_overlap >= chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    @staticmethod
    def split_sentences(text: str) -> List[str]:
        return [s.strip() for s in _SENTENCE_BOUNDARY.split(text) if s.strip()]

    def _windows(self, sentences: List[str]) -> Iterator[List[str]]:
        window: List[str] = []
        size = 0
        for sentence in sentences:
            length = word_count(sentence)
            if window and size + length > self.chunk_size:
                yield window
                window = self._overlap(window)
                size = sum(word_count(s) for s in window)
            window.append(sentence)
            size += length

        if window:
            yield window

    def _overlap(self, window: List[str]) -> List[str]:
        """Longest run of trailing sentences within the overlap budget"""
        tail = []
        budget = self.chunk_overlap
        for sentence in reversed(window):
            budget -= word_count(sentence)
            if budget < 0:
                break
            tail.append(sentence)
        return tail[::-1]

    def chunk_by_sentences(self, text: str) -> List[str]:
        return [" ".join(window) for window in self._windows(self.split_sentences(text))]

    def chunk_document(self, document: Dict) -> List[Dict]:
        """
        Chunk a processed document

        Args:
            document: Document dict from DocumentProcessor (filename, text, metadata)

        Returns:
            Chunk dicts. chunk_id is "<collection>:<filename>:<index>", stable
            across re-ingestion.
        """
        text = document.get("text", "")
        if not text:
            return []

        document_metadata = document.get("metadata", {})
        collection = document_metadata.get("collection_name", "default")
        texts = self.chunk_by_sentences(text)

        chunks = [
            {
                "text": chunk_text,
                "chunk_id": f"{collection}:{document['filename']}:{index}",
                "chunk_index": index,
                "source": document["filename"],
                "metadata": {**document_metadata, "chunk_index": index, "total_chunks": len(texts)},
            }
            for index, chunk_text in enumerate(texts)
        ]

        logger.debug(f"{document['filename']}: {len(chunks)} chunks")
        return chunks
