"""
=============================================================================
AI & RAG Configuration
=============================================================================
This module contains the retrieval-related configuration settings:
- Vector database settings (ChromaDB)
- Document ingestion settings (supported files, chunking)
- RAG retrieval parameters

Configuration Priority:
1. Environment variables (highest priority)
2. .env file
3. Default values in this file (lowest priority)

Usage:
    from config.ai_settings import CHROMA_COLLECTION_NAME, RAG_TOP_K
=============================================================================
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file if present
load_dotenv()

# Import base settings (DATA_DIR, LOG settings, etc.)
from .settings import *

# =============================================================================
# VECTOR DATABASE CONFIGURATION (ChromaDB)
# =============================================================================
# ChromaDB stores chunk embeddings together with the taxonomy metadata
# (product_category, model_number, specificity, power_type) used for filtering

VECTORDB_DIR = DATA_DIR / "vectordb"
VECTORDB_DIR.mkdir(parents=True, exist_ok=True)

# ChromaDB persistence directory - stores the vector index on disk
CHROMA_PERSIST_DIR = os.getenv("CHROMA_PERSIST_DIR", str(VECTORDB_DIR / "chroma"))

# Default collection name within ChromaDB
CHROMA_COLLECTION_NAME = os.getenv("CHROMA_COLLECTION_NAME", "product_docs")

# =============================================================================
# DOCUMENT INGESTION
# =============================================================================

# File types the document processor can extract text from
SUPPORTED_EXTENSIONS = {".pdf", ".txt", ".md"}

# Documents with less extracted text than this are skipped
MIN_CONTENT_LENGTH = int(os.getenv("MIN_CONTENT_LENGTH", "20"))

# Maximum words per chunk (recommended: 300-500 for technical documents)
CHUNK_SIZE = int(os.getenv("CHUNK_SIZE", "500"))

# Overlap between consecutive chunks in words
CHUNK_OVERLAP = int(os.getenv("CHUNK_OVERLAP", "50"))

# =============================================================================
# RAG (Retrieval Augmented Generation) SETTINGS
# =============================================================================

# Number of most similar chunks to retrieve for context
RAG_TOP_K = int(os.getenv("RAG_TOP_K", "5"))

# Log user queries together with the chosen metadata filter
LOG_QUERIES = os.getenv("LOG_QUERIES", "true").lower() == "true"
