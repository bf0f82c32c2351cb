"""
Tests for the ChromaDB client wrapper (mocked, plus an on-disk re-ingestion check)

Run with:
    pytest tests/test_chroma_client.py -v
"""
from unittest.mock import MagicMock, patch

import pytest

from src.documents.chunker import TextChunker
from src.vectordb.chroma_client import ChromaDBClient, sanitize_metadata, sanitize_value
from src.vectordb.search_filter import Eq, In, Or


pytestmark = pytest.mark.unit


@pytest.fixture
def collection():
    mock_collection = MagicMock()
    mock_collection.count.return_value = 0
    mock_collection.query.return_value = {
        "ids": [["robot-collection:TM-850-manual.pdf:0"]],
        "documents": [["The TM-850 robotic mower"]],
        "metadatas": [[{"model_number": "TM-850"}]],
        "distances": [[0.2]],
    }
    return mock_collection


@pytest.fixture
def client(collection):
    with patch("src.vectordb.chroma_client.chromadb.PersistentClient") as persistent_client:
        persistent_client.return_value.get_or_create_collection.return_value = collection
        yield ChromaDBClient(persist_directory="/tmp/chroma-test", collection_name="product_docs")


class TestSanitize:

    @pytest.mark.parametrize("value,expected", [
        ("robot", "robot"),
        (3, 3),
        (0.5, 0.5),
        (True, True),
        (["TM-850", "TM-2000"], "TM-850, TM-2000"),
        (("a", "b"), "a, b"),
    ])
    def test_value(self, value, expected):
        assert sanitize_value(value) == expected

    def test_other_objects_become_strings(self):
        assert sanitize_value({"x": 1}) == "{'x': 1}"

    def test_metadata_drops_none(self):
        metadata = sanitize_metadata({
            "product_category": "robot",
            "model_number": None,
            "applicable_models": ["TM-850", "TM-2000"],
            "chunk_index": 0,
        })
        assert metadata == {
            "product_category": "robot",
            "applicable_models": "TM-850, TM-2000",
            "chunk_index": 0,
        }


class TestChromaDBClient:

    def test_connect(self, client, collection):
        assert client.collection is collection
        assert client.collection_name == "product_docs"

    def test_add_documents_without_embeddings(self, client, collection):
        chunks = [
            {"chunk_id": "c:a.pdf:0", "text": "first", "metadata": {"model_number": None, "specificity": "general"}},
            {"chunk_id": "c:a.pdf:1", "text": "second", "metadata": {"specificity": "general"}},
        ]

        assert client.add_documents(chunks) == 2
        collection.upsert.assert_called_once_with(
            ids=["c:a.pdf:0", "c:a.pdf:1"],
            documents=["first", "second"],
            metadatas=[{"specificity": "general"}, {"specificity": "general"}],
        )

    def test_add_documents_with_embeddings(self, client, collection):
        chunks = [{"chunk_id": "c:a.pdf:0", "text": "first", "metadata": {}}]

        client.add_documents(chunks, embeddings=[[0.1, 0.2]])

        assert collection.upsert.call_args.kwargs["embeddings"] == [[0.1, 0.2]]

    def test_add_documents_length_mismatch(self, client):
        with pytest.raises(ValueError):
            client.add_documents([{"chunk_id": "x", "text": "t"}], embeddings=[])

    def test_add_no_chunks(self, client, collection):
        assert client.add_documents([]) == 0
        collection.upsert.assert_not_called()

    def test_add_error_is_raised(self, client, collection):
        collection.upsert.side_effect = RuntimeError("disk full")
        with pytest.raises(RuntimeError):
            client.add_documents([{"chunk_id": "x", "text": "t", "metadata": {}}])

    def test_query_passes_rendered_filter(self, client, collection):
        search_filter = Or(Eq("model_number", "TM-850"), In("specificity", ["general"]))

        results = client.query("TM-850 blades", n_results=3, search_filter=search_filter)

        assert results["ids"][0] == ["robot-collection:TM-850-manual.pdf:0"]
        collection.query.assert_called_once_with(
            query_texts=["TM-850 blades"],
            n_results=3,
            where={"$or": [{"model_number": {"$eq": "TM-850"}}, {"specificity": {"$in": ["general"]}}]},
            include=["documents", "metadatas", "distances"],
        )

    def test_query_without_filter(self, client, collection):
        client.query("anything")
        assert collection.query.call_args.kwargs["where"] is None

    def test_query_with_embedding(self, client, collection):
        client.query("anything", query_embedding=[0.3, 0.4])

        kwargs = collection.query.call_args.kwargs
        assert kwargs["query_embeddings"] == [[0.3, 0.4]]
        assert "query_texts" not in kwargs

    def test_clear_collection(self, client, collection):
        client.clear_collection()

        client.client.delete_collection.assert_called_once_with(name="product_docs")
        assert client.client.get_or_create_collection.call_count == 2
        assert client.collection is collection

    def test_delete_by_source_is_scoped_to_collection(self, client, collection):
        client.delete_by_source("manual.pdf", "robot-collection")
        collection.delete.assert_called_once_with(where={
            "$and": [
                {"source": {"$eq": "manual.pdf"}},
                {"collection_name": {"$eq": "robot-collection"}},
            ]
        })

    def test_add_documents_replaces_previous_version_first(self, client, collection):
        chunks = [
            {"chunk_id": f"ope-collection:CS-370.pdf:{i}", "text": "t",
             "metadata": {"source": "CS-370.pdf", "collection_name": "ope-collection"}}
            for i in range(2)
        ]

        client.add_documents(chunks)

        collection.delete.assert_called_once_with(where={
            "$and": [
                {"source": {"$eq": "CS-370.pdf"}},
                {"collection_name": {"$eq": "ope-collection"}},
            ]
        })
        calls = [name for name, _, _ in collection.method_calls]
        assert calls.index("delete") < calls.index("upsert")

    def test_chunks_without_source_are_not_deleted(self, client, collection):
        client.add_documents([{"chunk_id": "x", "text": "t", "metadata": {"specificity": "general"}}])
        collection.delete.assert_not_called()

    def test_get_matching(self, client, collection):
        client.get_matching(Eq("model_number", "TM-850"), limit=10)
        collection.get.assert_called_once_with(
            where={"model_number": {"$eq": "TM-850"}},
            limit=10,
            include=["documents", "metadatas"],
        )

    def test_get_count(self, client, collection):
        collection.count.return_value = 42
        assert client.get_count() == 42


@pytest.mark.integration
class TestReingestion:
    """Runs against a real on-disk ChromaDB with precomputed embeddings"""

    @pytest.fixture
    def store(self, tmp_path):
        return ChromaDBClient(persist_directory=str(tmp_path / "chroma"), collection_name="reingest")

    @staticmethod
    def store_document(store, filename, collection_name, text):
        document = {
            "filename": filename,
            "text": text,
            "metadata": {
                "source": filename,
                "filename": filename,
                "collection_name": collection_name,
                "model_number": "TM-850",
            },
        }
        chunks = TextChunker(chunk_size=20, chunk_overlap=0).chunk_document(document)
        embeddings = [[float(i), 1.0, 0.5] for i in range(len(chunks))]
        return store.add_documents(chunks, embeddings=embeddings)

    @staticmethod
    def long_text(sentences):
        return " ".join(f"The TM-850 mower sentence number {i} has eight words." for i in range(sentences))

    def test_shorter_reingest_leaves_no_stale_chunks(self, store):
        first = self.store_document(store, "TM-850-manual.txt", "mower-docs", self.long_text(40))
        second = self.store_document(store, "TM-850-manual.txt", "mower-docs", "The TM-850 was replaced.")

        assert first > second == 1
        assert store.get_count() == second
        stored = store.get_matching(Eq("model_number", "TM-850"))
        assert stored["documents"] == ["The TM-850 was replaced."]

    def test_same_filename_in_other_collection_survives(self, store):
        kept = self.store_document(store, "manual.txt", "ope-docs", self.long_text(6))
        self.store_document(store, "manual.txt", "mower-docs", self.long_text(6))

        rewritten = self.store_document(store, "manual.txt", "mower-docs", "Short replacement text.")

        assert store.get_count() == kept + rewritten
        assert len(store.get_matching(Eq("collection_name", "ope-docs"))["ids"]) == kept
