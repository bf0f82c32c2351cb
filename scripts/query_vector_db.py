#!/usr/bin/env python3
"""
Run a filtered query against the vector database and print the results.

Usage:
    python scripts/query_vector_db.py "Vorteile der DTT-2100"
    python scripts/query_vector_db.py "robot maintenance" --top-k 3
"""
import sys
import argparse
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from config.ai_settings import CHROMA_COLLECTION_NAME, RAG_TOP_K
from src.llm.query_classifier import get_query_classifier
from src.llm.retriever import TaxonomyRetriever
from src.vectordb.chroma_client import ChromaDBClient


def main():
    parser = argparse.ArgumentParser(description="Query ChromaDB with the taxonomy filter")
    parser.add_argument("query", help="User query")
    parser.add_argument("--top-k", type=int, default=RAG_TOP_K)
    parser.add_argument("--chroma-collection", default=CHROMA_COLLECTION_NAME)
    args = parser.parse_args()

    classifier = get_query_classifier()
    match = classifier.extract_model_from_query(args.query)
    search_filter = classifier.build_search_filter(args.query)

    print(f"\n🔎 Query: {args.query}")
    print(f"   Model: {match.model_number or 'N/A'}  Category: {match.category.value if match.category else 'N/A'}")
    print(f"   Filter: {search_filter.to_chroma() if search_filter else None}")

    retriever = TaxonomyRetriever(ChromaDBClient(collection_name=args.chroma_collection), classifier)
    results = retriever.retrieve(args.query, top_k=args.top_k)

    print(f"\n✅ Found {len(results)} results:\n")
    for i, doc in enumerate(results, 1):
        meta = doc.metadata
        print(f"--- Result {i} (similarity: {doc.similarity:.3f}) ---")
        print(f"📄 {meta.get('filename', 'Unknown')} [{meta.get('model_number', 'N/A')}] ({meta.get('specificity', 'N/A')})")
        print(f"Content: {doc.text[:300]}...")
        print()


if __name__ == "__main__":
    main()
