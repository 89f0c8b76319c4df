"""Unit tests for document store mutations on InMemorySearcher."""

from __future__ import annotations

import pytest

from searchx.domain.model import Document
from searchx.domain.search import with_limit
from searchx.errors import ErrorCode, MalformedDocumentError


def _doc(doc_id: str, **fields) -> Document:
    return Document(id=doc_id, fields=fields)


def _all_ids(searcher) -> list[str]:
    return searcher.search("", with_limit(100)).ids


class TestAddDocument:
    def test_new_documents_are_appended(self, searcher):
        searcher.add_document(_doc("a", n=1))
        searcher.add_document(_doc("b", n=2))

        assert searcher.size() == 2
        assert len(searcher) == 2
        assert _all_ids(searcher) == ["a", "b"]

    def test_upsert_replaces_in_place(self, searcher):
        searcher.add_document(_doc("a", title="old"))
        searcher.add_document(_doc("b", title="other"))
        searcher.add_document(_doc("a", title="new"))

        assert searcher.size() == 2
        assert searcher.get_document("a").fields == {"title": "new"}
        assert _all_ids(searcher) == ["a", "b"]

    def test_identical_upsert_is_idempotent(self, searcher):
        doc = _doc("a", title="same", tags=["x"])
        searcher.add_document(doc)
        before = searcher.get_document("a")

        searcher.add_document(_doc("a", title="same", tags=["x"]))

        assert searcher.size() == 1
        assert searcher.get_document("a") == before

    def test_replacement_drops_old_fields(self, searcher):
        searcher.add_document(_doc("a", title="t", extra=1))
        searcher.add_document(_doc("a", title="t"))

        assert "extra" not in searcher.get_document("a").fields

    def test_empty_id_is_rejected_by_the_model(self):
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            Document(id="", fields={})


class TestRemoveDocument:
    def test_remove_returns_true_exactly_once(self, searcher):
        searcher.add_document(_doc("a"))

        assert searcher.remove_document("a") is True
        assert searcher.remove_document("a") is False
        assert searcher.size() == 0

    def test_remove_unknown_id(self, searcher):
        searcher.add_document(_doc("a"))

        assert searcher.remove_document("missing") is False
        assert searcher.size() == 1

    def test_remove_from_middle_preserves_order_and_index(self, searcher):
        for doc_id in "abcde":
            searcher.add_document(_doc(doc_id, letter=doc_id))

        assert searcher.remove_document("b") is True

        assert searcher.size() == 4
        assert _all_ids(searcher) == ["a", "c", "d", "e"]
        for doc_id in "acde":
            assert searcher.get_document(doc_id).fields == {"letter": doc_id}

        # Positions were reindexed: updating a shifted document replaces it in place.
        searcher.add_document(_doc("d", letter="D"))
        assert _all_ids(searcher) == ["a", "c", "d", "e"]
        assert searcher.get_document("d").fields == {"letter": "D"}

        assert searcher.remove_document("e") is True
        assert searcher.remove_document("a") is True
        assert _all_ids(searcher) == ["c", "d"]

    def test_remove_leaves_other_documents_untouched(self, searcher):
        searcher.add_document(_doc("a", v=1))
        searcher.add_document(_doc("b", v=2))
        other_before = searcher.get_document("b")

        searcher.remove_document("a")

        assert searcher.get_document("b") == other_before
        assert searcher.get_document("a") is None


def test_clear_empties_the_store(searcher):
    for i in range(5):
        searcher.add_document(_doc(str(i)))

    searcher.clear()

    assert searcher.size() == 0
    assert searcher.get_document("0") is None
    assert searcher.remove_document("0") is False
    searcher.add_document(_doc("0"))
    assert searcher.size() == 1


class TestAddJson:
    def test_decodes_json_object(self, searcher):
        document = searcher.add_json("doc-1", b'{"title": "Go", "year": 2023, "tags": ["a"], "meta": {"x": null}}')

        assert document.id == "doc-1"
        assert searcher.get_document("doc-1").fields == {
            "title": "Go",
            "year": 2023,
            "tags": ["a"],
            "meta": {"x": None},
        }

    def test_accepts_text_payload(self, searcher):
        searcher.add_json("doc-1", '{"title": "text"}')

        assert searcher.get_document("doc-1").fields["title"] == "text"

    def test_upserts_like_add_document(self, searcher):
        searcher.add_json("doc-1", b'{"v": 1}')
        searcher.add_json("doc-1", b'{"v": 2}')

        assert searcher.size() == 1
        assert searcher.get_document("doc-1").fields == {"v": 2}

    @pytest.mark.parametrize("payload", [b"{not json", b"", b'["a", "b"]', b'"string"', b"42", b"null"])
    def test_malformed_payload_leaves_store_unchanged(self, searcher, payload):
        searcher.add_json("keep", b'{"v": 1}')

        with pytest.raises(MalformedDocumentError) as excinfo:
            searcher.add_json("bad", payload)

        assert excinfo.value.code is ErrorCode.MALFORMED_DOCUMENT
        assert excinfo.value.document_id == "bad"
        assert isinstance(excinfo.value, ValueError)
        assert searcher.size() == 1
        assert searcher.get_document("bad") is None

    def test_empty_id_is_malformed(self, searcher):
        with pytest.raises(MalformedDocumentError):
            searcher.add_json("", b'{"v": 1}')

        assert searcher.size() == 0
