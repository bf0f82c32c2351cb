#!/usr/bin/env python3
"""
Ingest a collection folder into the vector database.
Every chunk is stored with the document's taxonomy metadata
(product_category, model_number, specificity, power_type, ...).

Usage:
    python scripts/ingest_documents.py data/uploads/rag/robot-collection
    python scripts/ingest_documents.py ./ope --collection ope-collection --reset
"""
import sys
import argparse
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from config.ai_settings import CHROMA_COLLECTION_NAME
from src.documents.document_processor import DocumentProcessor
from src.vectordb.chroma_client import ChromaDBClient
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


def main():
    """Main ingestion workflow"""
    parser = argparse.ArgumentParser(description="Ingest documents into ChromaDB")
    parser.add_argument("folder", type=Path, help="Folder with PDF / text documents")
    parser.add_argument(
        "--collection",
        help="Collection name used for tagging (default: folder name)"
    )
    parser.add_argument(
        "--chroma-collection",
        default=CHROMA_COLLECTION_NAME,
        help="ChromaDB collection to write to"
    )
    parser.add_argument("--reset", action="store_true", help="Clear the ChromaDB collection first")
    args = parser.parse_args()

    collection_name = args.collection or args.folder.name

    logger.info("=" * 80)
    logger.info(f"📄 Starting Document Ingestion: {args.folder} → {args.chroma_collection}")
    logger.info("=" * 80)

    if not args.folder.is_dir():
        logger.error(f"❌ Directory not found: {args.folder}")
        sys.exit(1)

    processor = DocumentProcessor()
    vectordb = ChromaDBClient(collection_name=args.chroma_collection)

    if args.reset:
        vectordb.clear_collection()

    documents = processor.process_directory(args.folder, collection_name)
    if not documents:
        logger.error("❌ No documents were successfully processed")
        return

    all_chunks = [chunk for doc in documents for chunk in doc["chunks"]]
    logger.info(f"✅ Total documents: {len(documents)}")
    logger.info(f"✅ Total chunks: {len(all_chunks)}")

    vectordb.add_documents(all_chunks)

    logger.info("=" * 80)
    logger.info("✅ INGESTION COMPLETED")
    logger.info(f"   Documents: {len(documents)}")
    logger.info(f"   Chunks: {len(all_chunks)}")
    logger.info(f"   Total in DB: {vectordb.get_count()}")
    logger.info("=" * 80)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
    except Exception as e:
        logger.error(f"\n❌ Error: {e}", exc_info=True)
        sys.exit(1)
