"""Tests for mockingbird.http.query: immutable QueryParams."""

import pytest

from mockingbird.http.query import QueryParams


class TestQueryParams:
    def test_getitem(self) -> None:
        q = QueryParams(b"q=hello&page=2")
        assert q["q"] == "hello"
        assert q["page"] == "2"

    def test_missing_key_raises(self) -> None:
        q = QueryParams(b"q=hello")
        with pytest.raises(KeyError):
            q["missing"]

    def test_contains_and_len(self) -> None:
        q = QueryParams(b"a=1&b=2&c=3")
        assert "a" in q
        assert "missing" not in q
        assert len(q) == 3

    def test_get_with_default(self) -> None:
        q = QueryParams(b"q=hello")
        assert q.get("missing") is None
        assert q.get("missing", "fallback") == "fallback"

    def test_get_list(self) -> None:
        q = QueryParams(b"tag=python&tag=rust&q=hello")
        assert q.get_list("tag") == ["python", "rust"]
        assert q.get_list("missing") == []

    def test_blank_values_kept(self) -> None:
        assert QueryParams(b"flag=")["flag"] == ""

    def test_to_dict(self) -> None:
        q = QueryParams(b"tag=python&tag=rust&q=hello%20world")
        assert q.to_dict() == {"tag": ["python", "rust"], "q": "hello world"}

    def test_raw(self) -> None:
        assert QueryParams(b"a=1").raw == b"a=1"

    def test_empty(self) -> None:
        q = QueryParams()
        assert len(q) == 0
        assert q.to_dict() == {}
