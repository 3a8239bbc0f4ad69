from __future__ import annotations

import pytest
from pymongo.errors import OperationFailure

from feed_service.app.exceptions import NotFoundError, TransientStorageError, ValidationError
from feed_service.app.services.content_service import get_hashtag_index


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_create_post_rejects_blank_text(engine, text: str) -> None:
    with pytest.raises(ValidationError):
        engine.content.create_post("alice", text)

    assert engine.post_repo.posts == {}
    assert engine.hashtag_repo.rows == {}


def test_create_post_stores_text_and_indexes_tags(engine) -> None:
    created = engine.content.create_post("alice", "Hello #cs4370 #db")

    assert created.tags == ["#cs4370", "#db"]
    assert created.tags_indexed is True
    assert created.post.text == "Hello #cs4370 #db"
    assert created.post.created_at.tzinfo is not None
    assert engine.hashtag_repo.rows[created.post.id] == ["#cs4370", "#db"]


def test_create_post_reports_partial_failure_when_indexing_fails(engine) -> None:
    engine.hashtag_repo.fail_with = OperationFailure("disk full")

    created = engine.content.create_post("alice", "Hello #cs4370")

    # 게시글은 남고, 태그 인덱싱 실패만 표시된다.
    assert created.tags_indexed is False
    assert created.tags == ["#cs4370"]
    assert engine.content.get_post(created.post.id) is not None
    assert engine.hashtags.search("#cs4370") == []


def test_create_post_reports_partial_failure_on_transient_error(engine) -> None:
    engine.hashtag_repo.fail_with = TransientStorageError()

    created = engine.content.create_post("alice", "Hello #retry")

    assert created.tags_indexed is False


def test_create_post_without_tags_is_fully_indexed(engine) -> None:
    created = engine.content.create_post("alice", "no tags")

    assert created.tags == []
    assert created.tags_indexed is True


def test_get_post_returns_none_for_unknown_id(engine) -> None:
    assert engine.content.get_post("post-9999") is None


def test_list_all_posts_newest_first(engine) -> None:
    first = engine.post("alice", "first")
    second = engine.post("bob", "second")
    third = engine.post("alice", "third")

    assert [p.id for p in engine.content.list_all_posts()] == [third, second, first]
    assert [p.id for p in engine.content.list_posts_by_author("alice")] == [third, first]


def test_add_comment_to_missing_post_raises_not_found(engine) -> None:
    with pytest.raises(NotFoundError) as excinfo:
        engine.content.add_comment("post-9999", "bob", "nice")

    assert excinfo.value.kind == "post"
    assert engine.comment_repo.comments == []


def test_add_comment_rejects_blank_text(engine) -> None:
    post_id = engine.post("alice", "hello")

    with pytest.raises(ValidationError):
        engine.content.add_comment(post_id, "bob", "  ")

    assert engine.content.comment_count(post_id) == 0


def test_comments_are_listed_oldest_first(engine) -> None:
    post_id = engine.post("alice", "hello")
    c1 = engine.content.add_comment(post_id, "bob", "first!")
    c2 = engine.content.add_comment(post_id, "carol", "second")
    c3 = engine.content.add_comment(post_id, "bob", "third")

    listed = engine.content.list_comments(post_id)

    assert [c.id for c in listed] == [c1.id, c2.id, c3.id]
    assert engine.content.comment_count(post_id) == 3


def test_comment_counts_fill_zero_for_posts_without_comments(engine) -> None:
    p1 = engine.post("alice", "one")
    p2 = engine.post("alice", "two")
    engine.content.add_comment(p1, "bob", "hey")

    assert engine.content.comment_counts([p1, p2]) == {p1: 1, p2: 0}


def test_search_text_is_case_insensitive_substring(engine) -> None:
    match = engine.post("alice", "Databases are FUN")
    engine.post("bob", "something else")

    assert [p.id for p in engine.content.search_text("fun")] == [match]


def test_search_text_does_not_trim_query(engine) -> None:
    match = engine.post("alice", "Databases are FUN")
    other = engine.post("bob", "something else")

    assert [p.id for p in engine.content.search_text(" are ")] == [match]
    assert engine.content.search_text(" FUN ") == []
    assert [p.id for p in engine.content.search_text("")] == [other, match]


def test_hashtag_index_factory_shares_post_repository(engine) -> None:
    index = get_hashtag_index(hashtag_repo=engine.hashtag_repo, post_repo=engine.post_repo)
    post_id = engine.post("alice", "plain")

    index.index(post_id, ["#late"])

    assert index.search("#late") == [post_id]
