"""
Test Fixtures Module
====================
Reference documents for the taxonomy tests.
"""

from .sample_documents import SAMPLE_DOCUMENTS, get_document_by_id

__all__ = [
    "SAMPLE_DOCUMENTS",
    "get_document_by_id",
]
