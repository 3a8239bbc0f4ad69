from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..schemas.feed import PostDetailResponse
from ..schemas.posts import (
    CommentCreateRequest,
    CommentCreateResponse,
    PostCreateRequest,
    PostCreateResponse,
    ReactionRequest,
    ReactionResponse,
)
from ...services.content_service import ContentStore, get_content_store
from ...services.feed_service import FeedAssembler, get_feed_assembler
from ...services.reactions_service import (
    ReactionLedger,
    get_bookmark_ledger,
    get_heart_ledger,
)


router = APIRouter()


@router.post(
    "",
    response_model=PostCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="게시글 작성",
)
def create_post(
    body: PostCreateRequest,
    content: ContentStore = Depends(get_content_store),
) -> PostCreateResponse:
    created = content.create_post(author_id=body.author_id, text=body.text)
    post = created.post
    assert post.id is not None
    return PostCreateResponse(
        post_id=post.id,
        author_id=post.author_id,
        text=post.text,
        created_at=post.created_at,
        tags=created.tags,
        tags_indexed=created.tags_indexed,
    )


@router.get("/{post_id}", response_model=PostDetailResponse, summary="게시글 상세 (댓글 포함)")
def get_post_detail(
    post_id: str,
    viewer_id: str = Query(..., description="조회하는 유저 ID"),
    assembler: FeedAssembler = Depends(get_feed_assembler),
) -> PostDetailResponse:
    detail = assembler.post_detail(post_id, viewer_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="post not found")
    return PostDetailResponse.from_domain(detail)


@router.post(
    "/{post_id}/comments",
    response_model=CommentCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="댓글 작성",
)
def add_comment(
    post_id: str,
    body: CommentCreateRequest,
    content: ContentStore = Depends(get_content_store),
) -> CommentCreateResponse:
    comment = content.add_comment(post_id=post_id, author_id=body.author_id, text=body.text)
    assert comment.id is not None
    return CommentCreateResponse(
        comment_id=comment.id,
        post_id=comment.post_id,
        author_id=comment.author_id,
        text=comment.text,
        created_at=comment.created_at,
    )


def _set_reaction(ledger: ReactionLedger, post_id: str, body: ReactionRequest) -> ReactionResponse:
    result = ledger.set(post_id, body.user_id, body.present)
    return ReactionResponse(
        post_id=post_id,
        user_id=body.user_id,
        result=result,
        present=ledger.has(post_id, body.user_id),
        count=ledger.count(post_id),
    )


@router.put("/{post_id}/heart", response_model=ReactionResponse, summary="하트 설정/해제")
def set_heart(
    post_id: str,
    body: ReactionRequest,
    hearts: ReactionLedger = Depends(get_heart_ledger),
) -> ReactionResponse:
    return _set_reaction(hearts, post_id, body)


@router.put("/{post_id}/bookmark", response_model=ReactionResponse, summary="북마크 설정/해제")
def set_bookmark(
    post_id: str,
    body: ReactionRequest,
    bookmarks: ReactionLedger = Depends(get_bookmark_ledger),
) -> ReactionResponse:
    return _set_reaction(bookmarks, post_id, body)
