"""
Pytest Configuration for the Taxonomy RAG Tests
===============================================
Shared fixtures and configuration for all test modules.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture(scope="session")
def taxonomy():
    """Shared immutable taxonomy"""
    from src.documents.taxonomy import get_taxonomy
    return get_taxonomy()


@pytest.fixture(scope="session")
def document_classifier(taxonomy):
    from src.documents.document_classifier import DocumentClassifier
    return DocumentClassifier(taxonomy)


@pytest.fixture(scope="session")
def query_classifier(taxonomy):
    from src.llm.query_classifier import QueryClassifier
    return QueryClassifier(taxonomy)


@pytest.fixture(scope="session")
def sample_documents():
    """Reference documents with expected classification"""
    from tests.fixtures.sample_documents import SAMPLE_DOCUMENTS
    return SAMPLE_DOCUMENTS


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """Configure pytest markers"""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
