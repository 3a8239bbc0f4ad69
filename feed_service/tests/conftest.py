from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from common.models.user import User
from feed_service.app.models.comment import Comment
from feed_service.app.models.post import Post
from feed_service.app.services.content_service import ContentStore
from feed_service.app.services.feed_service import FeedAssembler
from feed_service.app.services.hashtag_service import HashtagIndex
from feed_service.app.services.identity_service import IdentityDirectory
from feed_service.app.services.reactions_service import ReactionLedger
from feed_service.app.services.social_graph_service import SocialGraph


BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def make_clock(start: datetime = BASE_TIME, step: timedelta = timedelta(seconds=1)) -> Callable[[], datetime]:
    """호출할 때마다 step 만큼 증가하는 시계."""

    state = {"now": start - step}

    def _clock() -> datetime:
        state["now"] = state["now"] + step
        return state["now"]

    return _clock


def _newest_first(posts: list[Post]) -> list[Post]:
    return sorted(posts, key=lambda p: (p.created_at, p.id or ""), reverse=True)


class FakeUserRepository:
    def __init__(self, users: list[User] | None = None) -> None:
        self.users: dict[str, User] = {u.user_id: u for u in users or []}

    def find_by_id(self, user_id: str) -> User | None:
        return self.users.get(user_id)

    def find_many(self, user_ids: list[str]) -> dict[str, User]:
        return {uid: self.users[uid] for uid in user_ids if uid in self.users}

    def list_all(self, exclude_user_id: str | None = None) -> list[User]:
        users = [u for u in self.users.values() if u.user_id != exclude_user_id]
        return sorted(users, key=lambda u: (u.last_name, u.first_name, u.user_id))


class FakePostRepository:
    def __init__(self) -> None:
        self.posts: dict[str, Post] = {}
        self.insert_calls = 0

    def insert(self, post: Post) -> Post:
        self.insert_calls += 1
        stored = post.model_copy(update={"id": f"post-{self.insert_calls:04d}"})
        self.posts[stored.id] = stored
        return stored

    def find_by_id(self, post_id: str) -> Post | None:
        return self.posts.get(post_id)

    def exists(self, post_id: str) -> bool:
        return post_id in self.posts

    def list_all(self) -> list[Post]:
        return _newest_first(list(self.posts.values()))

    def list_by_author(self, author_id: str) -> list[Post]:
        return [p for p in self.list_all() if p.author_id == author_id]

    def list_by_authors(self, author_ids: list[str]) -> list[Post]:
        wanted = set(author_ids)
        return [p for p in self.list_all() if p.author_id in wanted]

    def list_by_ids(self, post_ids: list[str]) -> list[Post]:
        wanted = set(post_ids)
        return [p for p in self.list_all() if p.id in wanted]

    def search_text(self, substring: str) -> list[Post]:
        needle = substring.lower()
        return [p for p in self.list_all() if needle in p.text.lower()]

    def find_latest_by_author(self, author_id: str) -> Post | None:
        posts = self.list_by_author(author_id)
        return posts[0] if posts else None


class FakeCommentRepository:
    def __init__(self) -> None:
        self.comments: list[Comment] = []

    def insert(self, comment: Comment) -> Comment:
        stored = comment.model_copy(update={"id": f"comment-{len(self.comments) + 1:04d}"})
        self.comments.append(stored)
        return stored

    def list_by_post(self, post_id: str) -> list[Comment]:
        found = [c for c in self.comments if c.post_id == post_id]
        return sorted(found, key=lambda c: (c.created_at, c.id or ""))

    def count_by_post(self, post_id: str) -> int:
        return len(self.list_by_post(post_id))

    def count_by_posts(self, post_ids: list[str]) -> dict[str, int]:
        counts: dict[str, int] = {}
        for comment in self.comments:
            if comment.post_id in post_ids:
                counts[comment.post_id] = counts.get(comment.post_id, 0) + 1
        return counts


class FakeMembershipRepository:
    def __init__(self) -> None:
        self.members: set[tuple[str, str]] = set()

    def exists(self, post_id: str, user_id: str) -> bool:
        return (post_id, user_id) in self.members

    def add(self, post_id: str, user_id: str) -> bool:
        if (post_id, user_id) in self.members:
            return False
        self.members.add((post_id, user_id))
        return True

    def remove(self, post_id: str, user_id: str) -> bool:
        if (post_id, user_id) not in self.members:
            return False
        self.members.discard((post_id, user_id))
        return True

    def count(self, post_id: str) -> int:
        return sum(1 for pid, _ in self.members if pid == post_id)

    def count_many(self, post_ids: list[str]) -> dict[str, int]:
        counts: dict[str, int] = {}
        for pid, _ in self.members:
            if pid in post_ids:
                counts[pid] = counts.get(pid, 0) + 1
        return counts

    def list_post_ids_for_user(self, user_id: str, post_ids: list[str]) -> list[str]:
        return [pid for pid in post_ids if (pid, user_id) in self.members]


class FakeFollowRepository:
    def __init__(self) -> None:
        self.edges: set[tuple[str, str]] = set()

    def exists(self, follower_id: str, followee_id: str) -> bool:
        return (follower_id, followee_id) in self.edges

    def insert(self, follower_id: str, followee_id: str) -> bool:
        if (follower_id, followee_id) in self.edges:
            return False
        self.edges.add((follower_id, followee_id))
        return True

    def delete(self, follower_id: str, followee_id: str) -> bool:
        if (follower_id, followee_id) not in self.edges:
            return False
        self.edges.discard((follower_id, followee_id))
        return True

    def list_followee_ids(self, follower_id: str) -> list[str]:
        return [b for a, b in self.edges if a == follower_id]

    def list_follower_ids(self, followee_id: str) -> list[str]:
        return [a for a, b in self.edges if b == followee_id]


class FakeHashtagRepository:
    def __init__(self) -> None:
        self.rows: dict[str, list[str]] = {}
        self.fail_with: Exception | None = None

    def insert(self, post_id: str, tags: list[str]) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.rows[post_id] = list(tags)

    def find_post_ids(self, tags: list[str]) -> list[str]:
        return [pid for pid, row in self.rows.items() if set(row) & set(tags)]


USERS = [
    User(user_id="alice", first_name="Alice", last_name="Kim"),
    User(user_id="bob", first_name="Bob", last_name="Lee"),
    User(user_id="carol", first_name="Carol", last_name="Park"),
]


class Engine:
    """테스트용으로 모든 컴포넌트를 fake 저장소 위에 조립한 묶음."""

    def __init__(self, users: list[User] | None = None, allow_self_follow: bool = True) -> None:
        self.user_repo = FakeUserRepository(USERS if users is None else users)
        self.post_repo = FakePostRepository()
        self.comment_repo = FakeCommentRepository()
        self.heart_repo = FakeMembershipRepository()
        self.bookmark_repo = FakeMembershipRepository()
        self.follow_repo = FakeFollowRepository()
        self.hashtag_repo = FakeHashtagRepository()

        self.identity = IdentityDirectory(self.user_repo)
        self.hashtags = HashtagIndex(self.hashtag_repo, self.post_repo)
        self.content = ContentStore(
            self.post_repo, self.comment_repo, self.hashtags, clock=make_clock()
        )
        self.hearts = ReactionLedger(self.heart_repo, self.post_repo, kind="heart")
        self.bookmarks = ReactionLedger(self.bookmark_repo, self.post_repo, kind="bookmark")
        self.social = SocialGraph(
            self.follow_repo,
            self.post_repo,
            self.identity,
            allow_self_follow=allow_self_follow,
        )
        self.feed = FeedAssembler(
            content=self.content,
            hearts=self.hearts,
            bookmarks=self.bookmarks,
            social=self.social,
            identity=self.identity,
            hashtags=self.hashtags,
        )

    def post(self, author_id: str, text: str) -> str:
        created = self.content.create_post(author_id, text)
        assert created.post.id is not None
        return created.post.id


@pytest.fixture
def engine() -> Engine:
    return Engine()


@pytest.fixture
def make_engine() -> Callable[..., Engine]:
    return Engine
