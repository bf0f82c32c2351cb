"""Query-time retrieval module"""
from .query_classifier import QueryClassifier, QueryModelMatch, get_query_classifier
from .retriever import TaxonomyRetriever, RetrievedDocument

__all__ = ['QueryClassifier', 'QueryModelMatch', 'get_query_classifier', 'TaxonomyRetriever', 'RetrievedDocument']
