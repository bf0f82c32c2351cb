"""Documents processing and taxonomy tagging module"""
from .taxonomy import ProductCategory, PowerType, DocumentSpecificity, Taxonomy, get_taxonomy
from .document_classifier import DocumentClassifier, DocumentTags, get_document_classifier
from .document_processor import DocumentProcessor

__all__ = [
    'ProductCategory', 'PowerType', 'DocumentSpecificity', 'Taxonomy', 'get_taxonomy',
    'DocumentClassifier', 'DocumentTags', 'get_document_classifier', 'DocumentProcessor',
]
