"""
Metadata Search Filters
=======================
Small boolean filter trees over chunk metadata, built at query time and
applied by the vector store before similarity ranking.

Nodes:
- Eq(field, value)       field == value
- In(field, values)      field is one of values
- And(*clauses)          all clauses hold
- Or(*clauses)           at least one clause holds

A tree can be evaluated in memory (matches) or rendered for a store:
ChromaDB `where` dicts (to_chroma) or a Qdrant Filter (to_qdrant_filter).
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Tuple, Union

from qdrant_client.models import FieldCondition, Filter, MatchAny, MatchValue


def _plain(value: Any) -> Any:
    """Enum members are stored as their string values"""
    return value.value if isinstance(value, Enum) else value


@dataclass(frozen=True)
class Eq:
    field: str
    value: Any

    def matches(self, metadata: Mapping[str, Any]) -> bool:
        return _plain(metadata.get(self.field)) == _plain(self.value)

    def to_chroma(self) -> Dict:
        return {self.field: {"$eq": _plain(self.value)}}


@dataclass(frozen=True)
class In:
    field: str
    values: Tuple[Any, ...]

    def __init__(self, field: str, values):
        values = tuple(values)
        if not values:
            raise ValueError(f"In filter on '{field}' needs at least one value")
        object.__setattr__(self, "field", field)
        object.__setattr__(self, "values", values)

    def matches(self, metadata: Mapping[str, Any]) -> bool:
        return _plain(metadata.get(self.field)) in [_plain(v) for v in self.values]

    def to_chroma(self) -> Dict:
        return {self.field: {"$in": [_plain(v) for v in self.values]}}


@dataclass(frozen=True)
class And:
    clauses: Tuple["SearchFilter", ...]

    def __init__(self, *clauses: "SearchFilter"):
        # ChromaDB rejects $and / $or with fewer than two operands
        if len(clauses) < 2:
            raise ValueError("And filter needs at least two clauses")
        object.__setattr__(self, "clauses", tuple(clauses))

    def matches(self, metadata: Mapping[str, Any]) -> bool:
        return all(clause.matches(metadata) for clause in self.clauses)

    def to_chroma(self) -> Dict:
        return {"$and": [clause.to_chroma() for clause in self.clauses]}


@dataclass(frozen=True)
class Or:
    clauses: Tuple["SearchFilter", ...]

    def __init__(self, *clauses: "SearchFilter"):
        if len(clauses) < 2:
            raise ValueError("Or filter needs at least two clauses")
        object.__setattr__(self, "clauses", tuple(clauses))

    def matches(self, metadata: Mapping[str, Any]) -> bool:
        return any(clause.matches(metadata) for clause in self.clauses)

    def to_chroma(self) -> Dict:
        return {"$or": [clause.to_chroma() for clause in self.clauses]}


SearchFilter = Union[Eq, In, And, Or]


def _qdrant_condition(node: SearchFilter):
    if isinstance(node, Eq):
        return FieldCondition(key=node.field, match=MatchValue(value=_plain(node.value)))
    if isinstance(node, In):
        return FieldCondition(key=node.field, match=MatchAny(any=[_plain(v) for v in node.values]))
    return to_qdrant_filter(node)


def to_qdrant_filter(node: SearchFilter) -> Filter:
    """
    Render a filter tree as a Qdrant Filter.

    And maps to `must`, Or to `should`; compound children become nested Filters.
    """
    if isinstance(node, And):
        return Filter(must=[_qdrant_condition(clause) for clause in node.clauses])
    if isinstance(node, Or):
        return Filter(should=[_qdrant_condition(clause) for clause in node.clauses])
    if isinstance(node, (Eq, In)):
        return Filter(must=[_qdrant_condition(node)])
    raise TypeError(f"Unsupported filter node: {type(node).__name__}")
