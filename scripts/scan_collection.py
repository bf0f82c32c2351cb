#!/usr/bin/env python3
"""
Collection Classification Scanner
=================================
Classifies every document in a collection folder and prints the taxonomy
tags plus distribution statistics. Nothing is written to the vector store.

Usage:
    python scripts/scan_collection.py data/uploads/rag/ope-collection
    python scripts/scan_collection.py ./manuals --collection robot-collection
"""
import os
import sys
import argparse
from collections import Counter
from pathlib import Path
from tqdm import tqdm

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.documents.document_processor import DocumentProcessor
from src.documents.taxonomy import DocumentSpecificity, PowerType
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

POWER_TYPE_ICONS = {
    PowerType.BATTERY: "🔋",
    PowerType.FUEL: "⛽",
    PowerType.UNKNOWN: "❓",
}

SPECIFICITY_ICONS = {
    DocumentSpecificity.PRODUCT_SPECIFIC: "🎯",
    DocumentSpecificity.CATEGORY_COMMON: "📁",
    DocumentSpecificity.GENERAL: "🌐",
}


def print_document_summary(document, index: int):
    tags = document["tags"]
    print(f"\n{index}. 📄 {document['filename']}")
    print(f"   {'─' * 76}")
    print(f"   Category:    {tags.product_category.value if tags.product_category else '❓ Unknown'}")
    print(f"   Model:       {tags.model_number or '❓ Not detected'}")
    print(f"   Series:      {tags.model_series or 'N/A'}")
    print(f"   Power Type:  {POWER_TYPE_ICONS[tags.power_type]} {tags.power_type.value}")
    print(f"   Specificity: {SPECIFICITY_ICONS[tags.specificity]} {tags.specificity.value}")
    if tags.applicable_models:
        print(f"   Models:      {', '.join(tags.applicable_models)}")
    print(f"   Preview:     {document['text'][:150]}...")


def print_statistics(documents):
    total = len(documents)
    power_types = Counter(doc["tags"].power_type for doc in documents)
    specificities = Counter(doc["tags"].specificity for doc in documents)
    battery_models = sorted({
        doc["tags"].model_number for doc in documents
        if doc["tags"].model_number and doc["tags"].power_type == PowerType.BATTERY
    })
    fuel_models = sorted({
        doc["tags"].model_number for doc in documents
        if doc["tags"].model_number and doc["tags"].power_type == PowerType.FUEL
    })

    print("\n" + "=" * 80)
    print("📊 STATISTICS")
    print("=" * 80)
    print(f"   Total Documents: {total}")

    print("\n   Power Type Distribution:")
    for power_type, count in power_types.most_common():
        print(f"      {POWER_TYPE_ICONS[power_type]} {power_type.value}: {count} ({round(count / total * 100)}%)")

    print("\n   Specificity Distribution:")
    for specificity, count in specificities.most_common():
        print(f"      {SPECIFICITY_ICONS[specificity]} {specificity.value}: {count} ({round(count / total * 100)}%)")

    print(f"\n   🔋 Battery Models ({len(battery_models)}): {', '.join(battery_models) or 'None'}")
    print(f"   ⛽ Fuel Models ({len(fuel_models)}): {', '.join(fuel_models) or 'None'}")


def scan_collection(folder: Path, collection_name: str) -> int:
    """Classify all documents in folder, returns number of documents classified"""
    if not folder.is_dir():
        logger.error(f"❌ Directory not found: {folder}")
        return 0

    processor = DocumentProcessor()
    files = processor.list_documents(folder)
    if not files:
        logger.warning(f"⚠️  No documents found in {folder}")
        return 0

    documents = []
    for file_path in tqdm(files, desc="Classifying documents"):
        document = processor.process_document(file_path, collection_name)
        if document:
            documents.append(document)

    print("=" * 80)
    print(f"📋 CLASSIFICATION RESULTS: {collection_name}")
    print("=" * 80)
    for index, document in enumerate(documents, 1):
        print_document_summary(document, index)

    if documents:
        print_statistics(documents)
    return len(documents)


def main():
    parser = argparse.ArgumentParser(description="Classify documents of a RAG collection folder")
    parser.add_argument("folder", type=Path, help="Folder with PDF / text documents")
    parser.add_argument(
        "--collection",
        help="Collection name used for the tags (default: folder name)"
    )
    args = parser.parse_args()

    scan_collection(args.folder, args.collection or args.folder.name)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
    except Exception as e:
        logger.error(f"\n❌ Error: {e}", exc_info=True)
        sys.exit(1)
