from __future__ import annotations

import pytest

from feed_service.app.exceptions import FailedPreconditionError
from feed_service.app.services.hashtag_service import extract_tags, parse_tag_query


def test_extract_tags_keeps_order_and_removes_duplicates() -> None:
    text = "Studying #cs4370 with #python today #cs4370 again"

    assert extract_tags(text) == ["#cs4370", "#python"]


def test_extract_tags_is_case_sensitive() -> None:
    assert extract_tags("#Python and #python") == ["#Python", "#python"]


def test_extract_tags_keeps_bare_marker_and_ignores_inner_hash() -> None:
    # 토큰이 "#" 으로 시작하기만 하면 태그다. "#" 하나뿐인 토큰도 포함된다.
    assert extract_tags("a # b #x") == ["#", "#x"]
    assert extract_tags("issue a#b plus #ok") == ["#ok"]


def test_extract_tags_keeps_trailing_punctuation() -> None:
    assert extract_tags("hello #world!") == ["#world!"]


def test_extract_tags_without_tags_returns_empty() -> None:
    assert extract_tags("no tags here") == []
    assert extract_tags("") == []


def test_parse_tag_query_accepts_string_or_list() -> None:
    assert parse_tag_query("#a  #b #a") == ["#a", "#b"]
    assert parse_tag_query(["#a #b", "#c"]) == ["#a", "#b", "#c"]
    assert parse_tag_query("   ") == []


def test_index_and_search_returns_union(engine) -> None:
    p1 = engine.post("alice", "learning #python")
    p2 = engine.post("bob", "reading #rust")
    engine.post("carol", "nothing tagged")

    found = engine.hashtags.search("#python #rust")

    assert set(found) == {p1, p2}


def test_search_for_unknown_tag_returns_empty(engine) -> None:
    engine.post("alice", "learning #python")

    assert engine.hashtags.search("#golang") == []
    assert engine.hashtags.search("") == []


def test_index_requires_existing_post(engine) -> None:
    with pytest.raises(FailedPreconditionError):
        engine.hashtags.index("post-9999", ["#ghost"])

    assert engine.hashtag_repo.rows == {}


def test_index_without_tags_writes_nothing(engine) -> None:
    post_id = engine.post("alice", "plain text")

    engine.hashtags.index(post_id, [])

    assert post_id not in engine.hashtag_repo.rows
