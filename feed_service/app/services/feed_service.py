"""피드 조립기.

ContentStore / ReactionLedger / SocialGraph / IdentityDirectory / HashtagIndex 를 조합해
뷰어 기준 읽기 뷰를 만든다. 모든 뷰는 같은 enrich 경로를 거치므로
하트/북마크 플래그와 개수가 뷰마다 달라지지 않는다.
"""

from __future__ import annotations

from typing import Iterable

from fastapi import Depends

from ..models.comment import Comment
from ..models.feed import CommentView, FeedPost, FeedResult, PostDetail
from ..models.post import Post
from .content_service import ContentStore, get_content_store, get_hashtag_index
from .hashtag_service import HashtagIndex
from .identity_service import IdentityDirectory, get_identity_directory
from .reactions_service import ReactionLedger, get_bookmark_ledger, get_heart_ledger
from .social_graph_service import SocialGraph, get_social_graph


def _newest_first(posts: Iterable[Post]) -> list[Post]:
    return sorted(posts, key=lambda p: (p.created_at, p.id or ""), reverse=True)


class FeedAssembler:
    def __init__(
        self,
        content: ContentStore,
        hearts: ReactionLedger,
        bookmarks: ReactionLedger,
        social: SocialGraph,
        identity: IdentityDirectory,
        hashtags: HashtagIndex,
    ) -> None:
        self._content = content
        self._hearts = hearts
        self._bookmarks = bookmarks
        self._social = social
        self._identity = identity
        self._hashtags = hashtags

    # --- enrichment --------------------------------------------------------------
    def enrich_many(self, posts: list[Post], viewer_id: str) -> list[FeedPost]:
        """게시글 목록에 작성자/집계/뷰어 관계를 붙인다.

        관계별로 한 번씩만 조회하고, 입력 순서를 그대로 유지한다.
        """

        if not posts:
            return []

        post_ids = [p.id for p in posts if p.id is not None]
        authors = self._identity.resolve_many(list({p.author_id for p in posts}))
        heart_counts = self._hearts.count_many(post_ids)
        comment_counts = self._content.comment_counts(post_ids)
        hearted = self._hearts.members_among(viewer_id, post_ids)
        bookmarked = self._bookmarks.members_among(viewer_id, post_ids)

        items: list[FeedPost] = []
        for post in posts:
            assert post.id is not None
            items.append(
                FeedPost(
                    post_id=post.id,
                    text=post.text,
                    created_at=post.created_at,
                    author=authors[post.author_id],
                    heart_count=heart_counts.get(post.id, 0),
                    comment_count=comment_counts.get(post.id, 0),
                    viewer_has_hearted=post.id in hearted,
                    viewer_has_bookmarked=post.id in bookmarked,
                )
            )
        return items

    def enrich(self, post: Post, viewer_id: str) -> FeedPost:
        return self.enrich_many([post], viewer_id)[0]

    def _feed(self, posts: list[Post], viewer_id: str) -> FeedResult:
        return FeedResult(items=self.enrich_many(posts, viewer_id))

    # --- views -------------------------------------------------------------------
    def global_feed(self, viewer_id: str) -> FeedResult:
        return self._feed(self._content.list_all_posts(), viewer_id)

    def following_feed(self, viewer_id: str) -> FeedResult:
        followees = self._social.followees_of(viewer_id)
        if not followees:
            return FeedResult(items=[])
        posts = self._content.list_posts_by_authors(sorted(followees))
        return self._feed(posts, viewer_id)

    def bookmarked_feed(self, viewer_id: str) -> FeedResult:
        """전체 피드 중 뷰어가 북마크한 것만. 북마크 멤버십에서 바로 계산한다."""

        posts = self._bookmarks.subset_for_user(self._content.list_all_posts(), viewer_id)
        return self._feed(posts, viewer_id)

    def author_feed(self, author_id: str, viewer_id: str) -> FeedResult:
        return self._feed(self._content.list_posts_by_author(author_id), viewer_id)

    def post_detail(self, post_id: str, viewer_id: str) -> PostDetail | None:
        post = self._content.get_post(post_id)
        if post is None:
            return None

        comments = self._content.list_comments(post_id)
        return PostDetail(
            post=self.enrich(post, viewer_id),
            comments=self._comment_views(comments),
        )

    def search_by_hashtags(self, tag_query: str, viewer_id: str) -> FeedResult:
        post_ids = self._hashtags.search(tag_query)
        if not post_ids:
            return FeedResult(items=[])
        posts = _newest_first(self._content.list_posts_by_ids(post_ids))
        return self._feed(posts, viewer_id)

    def search_by_text(self, substring: str, viewer_id: str) -> FeedResult:
        return self._feed(self._content.search_text(substring), viewer_id)

    def _comment_views(self, comments: list[Comment]) -> list[CommentView]:
        if not comments:
            return []

        authors = self._identity.resolve_many(list({c.author_id for c in comments}))
        views: list[CommentView] = []
        for comment in comments:
            assert comment.id is not None
            views.append(
                CommentView(
                    comment_id=comment.id,
                    post_id=comment.post_id,
                    text=comment.text,
                    created_at=comment.created_at,
                    author=authors[comment.author_id],
                )
            )
        return views


def get_feed_assembler(
    content: ContentStore = Depends(get_content_store),
    hearts: ReactionLedger = Depends(get_heart_ledger),
    bookmarks: ReactionLedger = Depends(get_bookmark_ledger),
    social: SocialGraph = Depends(get_social_graph),
    identity: IdentityDirectory = Depends(get_identity_directory),
    hashtags: HashtagIndex = Depends(get_hashtag_index),
) -> FeedAssembler:
    """FastAPI DI용 FeedAssembler 팩토리."""

    return FeedAssembler(
        content=content,
        hearts=hearts,
        bookmarks=bookmarks,
        social=social,
        identity=identity,
        hashtags=hashtags,
    )
