"""Tests for the in-process vector store."""

import json
import threading
from pathlib import Path

import pytest

from navigator.boundary.vdb.local_vector_store import LocalVectorStore
from navigator.core.document_processing.tasks.chunking_task import ChunkingTask
from navigator.core.exceptions import DimensionMismatchError, EmbeddingError, PersistenceError


class FixedVectorProvider:
    """Returns queued vectors in order, ignoring the text."""

    def __init__(self, vectors: list[list[float]]) -> None:
        self._vectors = list(vectors)

    def embed(self, text: str, credential: str | None = None) -> list[float]:
        return self._vectors.pop(0)


class TestAddDocument:
    """Test ingestion into the local store."""

    def test_scenario_a_two_short_documents_should_store_two_fragments(
        self, local_store, embedding_provider
    ) -> None:
        # Act
        first = local_store.add_document("cats are mammals", {"filename": "a.txt"}, embedding_provider)
        second = local_store.add_document("dogs are mammals too", {"filename": "b.txt"}, embedding_provider)

        # Assert
        assert (first, second) == (1, 1)
        assert local_store.count() == 2

    def test_chunk_index_should_follow_corpus_position(self, index_file, embedding_provider) -> None:
        store = LocalVectorStore(index_file=index_file, chunker=ChunkingTask(chunk_size=10, chunk_overlap=0))

        store.add_document("aaaa\nbbbb\ncccc", {"source": "one"}, embedding_provider)
        store.add_document("dddd", {"source": "two"}, embedding_provider)

        fragments = store.get_fragments()
        assert [f.metadata["chunk_index"] for f in fragments] == [0, 1, 2]
        assert [f.metadata["source"] for f in fragments] == ["one", "one", "two"]

    def test_caller_metadata_should_be_copied(self, local_store, embedding_provider) -> None:
        metadata = {"filename": "a.txt"}

        local_store.add_document("cats are mammals", metadata, embedding_provider)

        assert metadata == {"filename": "a.txt"}

    def test_empty_text_should_add_nothing(self, local_store, embedding_provider) -> None:
        assert local_store.add_document("", {}, embedding_provider) == 0
        assert embedding_provider.calls == []

    def test_embedding_failure_should_store_nothing(self, index_file, failing_provider) -> None:
        store = LocalVectorStore(index_file=index_file, chunker=ChunkingTask(chunk_size=10, chunk_overlap=0))
        provider = failing_provider("bbbb")

        with pytest.raises(EmbeddingError):
            store.add_document("aaaa\nbbbb\ncccc", {}, provider)

        assert store.count() == 0

    def test_wrong_dimension_should_be_rejected(self, index_file) -> None:
        store = LocalVectorStore(index_file=index_file, dimension=3)

        with pytest.raises(DimensionMismatchError):
            store.add_document("text", {}, FixedVectorProvider([[1.0, 2.0]]))

        assert store.count() == 0

    def test_dimension_should_be_inferred_from_first_fragment(self, index_file) -> None:
        store = LocalVectorStore(index_file=index_file)
        store.add_document("first", {}, FixedVectorProvider([[1.0, 0.0]]))

        with pytest.raises(DimensionMismatchError):
            store.add_document("second", {}, FixedVectorProvider([[1.0, 0.0, 0.0]]))

    def test_concurrent_ingestion_should_keep_chunk_indexes_contiguous(
        self, index_file, embedding_provider
    ) -> None:
        store = LocalVectorStore(index_file=index_file, chunker=ChunkingTask(chunk_size=10, chunk_overlap=0))
        texts = [f"doc{i}aa\ndoc{i}bb\ndoc{i}cc" for i in range(8)]

        threads = [
            threading.Thread(target=store.add_document, args=(text, {"doc": i}, embedding_provider))
            for i, text in enumerate(texts)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        fragments = store.get_fragments()
        assert [f.metadata["chunk_index"] for f in fragments] == list(range(len(fragments)))
        for doc in range(8):
            positions = [i for i, f in enumerate(fragments) if f.metadata["doc"] == doc]
            assert positions == list(range(positions[0], positions[0] + len(positions)))


class TestSearch:
    """Test exhaustive similarity search."""

    def test_query_on_empty_store_should_return_none_without_embedding(
        self, local_store, embedding_provider
    ) -> None:
        assert local_store.query("What are cats?", embedding_provider, k=3) is None
        assert embedding_provider.calls == []

    def test_scenario_b_cats_fragment_should_rank_first(self, local_store, embedding_provider) -> None:
        local_store.add_document("cats are mammals", {}, embedding_provider)
        local_store.add_document("dogs are mammals too", {}, embedding_provider)

        results = local_store.query("What are cats?", embedding_provider, k=1)

        assert len(results) == 1
        assert results[0].text == "cats are mammals"

    def test_result_length_should_be_min_of_k_and_count(self, local_store, embedding_provider) -> None:
        for text in ("cats", "dogs", "fish"):
            local_store.add_document(text, {}, embedding_provider)

        assert len(local_store.query("cats", embedding_provider, k=2)) == 2
        assert len(local_store.query("cats", embedding_provider, k=10)) == 3

    def test_scores_should_be_non_increasing(self, local_store, embedding_provider) -> None:
        for text in ("cat cat mammal", "dog", "cat fish", "plant water sun"):
            local_store.add_document(text, {}, embedding_provider)

        results = local_store.query("cat mammal", embedding_provider, k=4)

        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)

    def test_ties_should_keep_insertion_order(self, index_file) -> None:
        store = LocalVectorStore(index_file=index_file)
        store.add_document("first", {}, FixedVectorProvider([[1.0, 0.0]]))
        store.add_document("second", {}, FixedVectorProvider([[0.0, 1.0]]))
        store.add_document("third", {}, FixedVectorProvider([[2.0, 0.0]]))

        results = store.search_by_vector([1.0, 0.0], k=3)

        assert [r.text for r in results] == ["first", "third", "second"]

    def test_non_positive_k_should_return_empty(self, local_store, embedding_provider) -> None:
        local_store.add_document("cats", {}, embedding_provider)

        assert local_store.search_by_vector([1.0] * 9, k=0) == []

    def test_query_vector_dimension_mismatch_should_propagate(self, local_store, embedding_provider) -> None:
        local_store.add_document("cats", {}, embedding_provider)

        with pytest.raises(DimensionMismatchError):
            local_store.search_by_vector([1.0, 2.0], k=1)

    def test_returned_metadata_should_not_alias_store(self, local_store, embedding_provider) -> None:
        local_store.add_document("cats", {"filename": "a.txt"}, embedding_provider)

        result = local_store.query("cats", embedding_provider, k=1)[0]
        result.metadata["filename"] = "changed"

        assert local_store.get_fragments()[0].metadata["filename"] == "a.txt"


class TestPersistence:
    """Test JSON snapshot save and load."""

    def test_empty_store_should_round_trip(self, local_store, index_file) -> None:
        local_store.save()

        restored = LocalVectorStore(index_file=index_file)
        assert restored.load() is True
        assert restored.count() == 0

    def test_fragments_should_round_trip(self, local_store, index_file, embedding_provider) -> None:
        # Arrange
        local_store.add_document("cats are mammals", {"filename": "a.txt", "pages": 2}, embedding_provider)
        local_store.add_document("dogs are mammals too", {"filename": "b.txt", "ok": True}, embedding_provider)
        original = local_store.get_fragments()

        # Act
        local_store.save()
        restored = LocalVectorStore(index_file=index_file)
        loaded = restored.load()

        # Assert
        assert loaded is True
        fragments = restored.get_fragments()
        assert len(fragments) == 2
        for before, after in zip(original, fragments):
            assert after.text == before.text
            assert after.metadata == before.metadata
            assert after.embedding == pytest.approx(before.embedding)

    def test_snapshot_should_have_documented_shape(self, local_store, index_file, embedding_provider) -> None:
        local_store.add_document("cats", {}, embedding_provider)

        local_store.save()

        state = json.loads(index_file.read_text(encoding="utf-8"))
        assert state["document_count"] == 1
        assert "saved_at" in state
        assert set(state["documents"][0]) == {"text", "embedding", "metadata"}
        assert not index_file.with_name(index_file.name + ".tmp").exists()

    def test_load_should_replace_not_merge(self, local_store, index_file, embedding_provider) -> None:
        local_store.add_document("cats", {}, embedding_provider)
        local_store.save()
        local_store.add_document("dogs", {}, embedding_provider)

        assert local_store.load() is True
        assert local_store.count() == 1

    def test_missing_snapshot_should_empty_store_and_return_false(
        self, local_store, embedding_provider
    ) -> None:
        local_store.add_document("cats", {}, embedding_provider)

        assert local_store.load() is False
        assert local_store.count() == 0

    def test_load_should_accept_documents_key_only(self, index_file) -> None:
        index_file.write_text(
            json.dumps({"documents": [{"text": "cats", "embedding": [1.0, 0.0], "metadata": {}}]}),
            encoding="utf-8",
        )
        store = LocalVectorStore(index_file=index_file)

        assert store.load() is True
        assert store.count() == 1

    def test_corrupt_snapshot_should_raise_and_keep_memory(
        self, local_store, index_file, embedding_provider
    ) -> None:
        local_store.add_document("cats", {}, embedding_provider)
        index_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(PersistenceError):
            local_store.load()

        assert local_store.count() == 1

    def test_snapshot_with_inconsistent_dimensions_should_raise(self, index_file) -> None:
        index_file.write_text(
            json.dumps({"documents": [
                {"text": "a", "embedding": [1.0, 0.0], "metadata": {}},
                {"text": "b", "embedding": [1.0], "metadata": {}},
            ]}),
            encoding="utf-8",
        )

        with pytest.raises(PersistenceError):
            LocalVectorStore(index_file=index_file).load()

    def test_unwritable_path_should_raise_persistence_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory", encoding="utf-8")
        store = LocalVectorStore(index_file=blocker / "rag_index.json")

        with pytest.raises(PersistenceError):
            store.save()

    def test_clear_should_empty_store(self, local_store, embedding_provider) -> None:
        local_store.add_document("cats", {}, embedding_provider)

        local_store.clear()

        assert local_store.count() == 0
