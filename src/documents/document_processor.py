"""
Document Processing Module
Extracts text from PDF and plain-text manuals, tags each document with the
product taxonomy and splits it into metadata-carrying chunks
"""
import re
from pathlib import Path
from typing import Dict, List, Optional

import pdfplumber

from config.ai_settings import MIN_CONTENT_LENGTH, SUPPORTED_EXTENSIONS
from src.documents.chunker import TextChunker
from src.documents.document_classifier import DocumentClassifier, get_document_classifier
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


class DocumentProcessor:
    """Extract, classify and chunk documents for ingestion"""

    def __init__(
        self,
        classifier: Optional[DocumentClassifier] = None,
        chunker: Optional[TextChunker] = None
    ):
        self.classifier = classifier or get_document_classifier()
        self.chunker = chunker or TextChunker()
        logger.info("DocumentProcessor initialized")

    # =========================================================================
    # TEXT EXTRACTION
    # =========================================================================

    def extract_text_pdf(self, pdf_path: Path) -> str:
        """
        Extract text using pdfplumber

        Args:
            pdf_path: Path to PDF file

        Returns:
            Extracted text, pages separated by blank lines
        """
        text_content = []
        with pdfplumber.open(pdf_path) as pdf:
            for page in pdf.pages:
                text = page.extract_text()
                if text and text.strip():
                    text_content.append(text)

        return "\n\n".join(text_content)

    def extract_text(self, file_path: Path) -> Optional[str]:
        """
        Extract text from any supported file

        Args:
            file_path: Path to document file

        Returns:
            Extracted text, or None if the file cannot be read
        """
        file_path = Path(file_path)
        ext = file_path.suffix.lower()

        if ext not in SUPPORTED_EXTENSIONS:
            logger.error(f"❌ Cannot extract text from {ext} files: {file_path.name}")
            return None

        try:
            if ext == ".pdf":
                return self.extract_text_pdf(file_path)
            return file_path.read_text(encoding="utf-8", errors="replace")
        except Exception as e:
            logger.error(f"❌ Text extraction failed for {file_path.name}: {e}")
            return None

    def clean_text(self, text: str) -> str:
        """Drop page footers and NUL bytes, collapse whitespace"""
        text = re.sub(r'Page\s+\d+\s+of\s+\d+', '', text, flags=re.IGNORECASE)
        text = re.sub(r'\x00', '', text)
        text = re.sub(r'\s+', ' ', text)
        return text.strip()

    # =========================================================================
    # CLASSIFICATION AND CHUNKING
    # =========================================================================

    def process_document(self, file_path: Path, collection_name: str) -> Optional[Dict]:
        """
        Extract, classify and chunk one document

        Args:
            file_path: Path to document file
            collection_name: Collection the document is ingested into

        Returns:
            Dictionary with text, taxonomy tags, flattened metadata and chunks
        """
        file_path = Path(file_path)

        if not file_path.exists():
            logger.error(f"❌ No such document: {file_path}")
            return None

        text = self.extract_text(file_path)
        if text is None:
            return None

        text = self.clean_text(text)
        if len(text) < MIN_CONTENT_LENGTH:
            logger.warning(f"⚠️  {file_path.name}: less than {MIN_CONTENT_LENGTH} characters of text, skipped")
            return None

        tags = self.classifier.classify_document(
            file_path.name,
            str(file_path),
            text,
            collection_name
        )

        metadata = {
            "source": file_path.name,
            "filename": file_path.name,
            "collection_name": collection_name,
            "file_extension": file_path.suffix.lower(),
            **tags.to_metadata()
        }

        document = {
            "filename": file_path.name,
            "filepath": str(file_path),
            "text": text,
            "tags": tags,
            "metadata": metadata,
            "word_count": len(text.split()),
        }
        document["chunks"] = self.chunker.chunk_document(document)
        document["chunk_count"] = len(document["chunks"])
        return document

    def list_documents(self, directory: Path) -> List[Path]:
        """Supported files directly inside directory, sorted by name"""
        directory = Path(directory)
        return sorted(
            path for path in directory.iterdir()
            if path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS
        )

    def process_directory(self, directory: Path, collection_name: str) -> List[Dict]:
        """
        Extract, classify and chunk every supported file of a collection folder

        Args:
            directory: Collection folder
            collection_name: Collection the documents are ingested into

        Returns:
            Processed documents; unreadable or empty files are skipped
        """
        files = self.list_documents(directory)
        logger.info(f"📂 {directory}: {len(files)} supported files for '{collection_name}'")

        processed = []
        skipped = []
        for path in files:
            document = self.process_document(path, collection_name)
            if document is None:
                skipped.append(path.name)
                continue
            processed.append(document)
            tags = document["tags"]
            logger.info(
                f"✓ {path.name}: {tags.model_number or '-'} / {tags.specificity.value} "
                f"({document['chunk_count']} chunks)"
            )

        if skipped:
            logger.warning(f"⚠️  Skipped {len(skipped)} files: {', '.join(skipped)}")
        logger.info(f"✅ Processed {len(processed)}/{len(files)} documents")
        return processed
