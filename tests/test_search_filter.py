"""
Tests for metadata search filter trees

Run with:
    pytest tests/test_search_filter.py -v
"""
import pytest
from qdrant_client.models import FieldCondition, Filter, MatchAny, MatchValue

from src.documents.taxonomy import DocumentSpecificity, ProductCategory
from src.vectordb.search_filter import And, Eq, In, Or, to_qdrant_filter


pytestmark = pytest.mark.unit


class TestMatches:

    def test_eq_compares_enum_and_plain_values(self):
        assert Eq("product_category", ProductCategory.OPE).matches({"product_category": "ope"})
        assert Eq("product_category", "ope").matches({"product_category": ProductCategory.OPE})
        assert not Eq("product_category", "ope").matches({"product_category": "robot"})

    def test_missing_field_never_equals_a_value(self):
        assert not Eq("model_number", "TM-850").matches({})

    def test_in(self):
        node = In("specificity", [DocumentSpecificity.GENERAL, DocumentSpecificity.CATEGORY_COMMON])
        assert node.matches({"specificity": "general"})
        assert node.matches({"specificity": "category_common"})
        assert not node.matches({"specificity": "product_specific"})
        assert not node.matches({})

    def test_and_or(self):
        both = And(Eq("a", 1), Eq("b", 2))
        either = Or(Eq("a", 1), Eq("b", 2))

        assert both.matches({"a": 1, "b": 2})
        assert not both.matches({"a": 1, "b": 3})
        assert either.matches({"a": 0, "b": 2})
        assert not either.matches({"a": 0, "b": 0})

    def test_nested(self):
        node = Or(Eq("model_number", "CS-370"), And(Eq("specificity", "category_common"), Eq("product_category", "ope")))
        assert node.matches({"model_number": "CS-370", "specificity": "product_specific"})
        assert node.matches({"specificity": "category_common", "product_category": "ope"})
        assert not node.matches({"specificity": "category_common", "product_category": "erco"})


class TestValidation:

    def test_in_rejects_empty_values(self):
        with pytest.raises(ValueError):
            In("specificity", [])

    @pytest.mark.parametrize("node_type", [And, Or])
    def test_compound_needs_two_clauses(self, node_type):
        with pytest.raises(ValueError):
            node_type()
        with pytest.raises(ValueError):
            node_type(Eq("a", 1))

    def test_nodes_are_immutable_and_hashable(self):
        node = In("specificity", ["general"])
        assert node.values == ("general",)
        assert hash(Or(Eq("a", 1), node)) == hash(Or(Eq("a", 1), In("specificity", ("general",))))
        with pytest.raises(AttributeError):
            node.field = "other"


class TestToChroma:

    def test_eq_uses_enum_value(self):
        assert Eq("power_type", "fuel").to_chroma() == {"power_type": {"$eq": "fuel"}}
        assert Eq("product_category", ProductCategory.ERCO).to_chroma() == {"product_category": {"$eq": "erco"}}

    def test_in(self):
        assert In("model_number", ["TM-850", "TM-2000"]).to_chroma() == {
            "model_number": {"$in": ["TM-850", "TM-2000"]}
        }

    def test_compound(self):
        node = And(Eq("a", 1), Or(Eq("b", 2), Eq("c", 3)))
        assert node.to_chroma() == {
            "$and": [
                {"a": {"$eq": 1}},
                {"$or": [{"b": {"$eq": 2}}, {"c": {"$eq": 3}}]},
            ]
        }


class TestToQdrantFilter:

    def test_single_condition_becomes_must(self):
        qdrant_filter = to_qdrant_filter(Eq("product_category", ProductCategory.ROBOT))

        assert isinstance(qdrant_filter, Filter)
        assert qdrant_filter.must == [
            FieldCondition(key="product_category", match=MatchValue(value="robot"))
        ]

    def test_in_becomes_match_any(self):
        qdrant_filter = to_qdrant_filter(In("specificity", [DocumentSpecificity.GENERAL, "category_common"]))

        condition = qdrant_filter.must[0]
        assert condition.key == "specificity"
        assert isinstance(condition.match, MatchAny)
        assert condition.match.any == ["general", "category_common"]

    def test_model_tier_tree(self):
        node = Or(
            Eq("model_number", "DTT-2100"),
            And(Eq("specificity", "category_common"), Eq("product_category", "ope")),
        )
        qdrant_filter = to_qdrant_filter(node)

        assert qdrant_filter.must is None
        assert len(qdrant_filter.should) == 2
        assert qdrant_filter.should[0].key == "model_number"
        assert qdrant_filter.should[0].match.value == "DTT-2100"

        nested = qdrant_filter.should[1]
        assert isinstance(nested, Filter)
        assert [condition.key for condition in nested.must] == ["specificity", "product_category"]

    def test_unknown_node(self):
        with pytest.raises(TypeError):
            to_qdrant_filter({"specificity": "general"})
