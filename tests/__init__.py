"""
Taxonomy RAG Test Suite
=======================
Test coverage for document tagging and retrieval filtering.

Usage:
    # Run all tests
    pytest tests/ -v

    # Run only unit tests
    pytest tests/ -v -m unit
"""
