from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..schemas.feed import FeedResponse
from ...services.feed_service import FeedAssembler, get_feed_assembler


router = APIRouter()

# 스토리지 I/O 가 블로킹이므로 핸들러는 동기 함수로 두고 스레드풀에서 실행되게 한다.


@router.get("/global", response_model=FeedResponse, summary="전체 피드")
def get_global_feed(
    viewer_id: str = Query(..., description="조회하는 유저 ID"),
    assembler: FeedAssembler = Depends(get_feed_assembler),
) -> FeedResponse:
    return FeedResponse.from_domain(assembler.global_feed(viewer_id))


@router.get("/following", response_model=FeedResponse, summary="팔로잉 피드")
def get_following_feed(
    viewer_id: str = Query(..., description="조회하는 유저 ID"),
    assembler: FeedAssembler = Depends(get_feed_assembler),
) -> FeedResponse:
    return FeedResponse.from_domain(assembler.following_feed(viewer_id))


@router.get("/bookmarks", response_model=FeedResponse, summary="북마크 피드")
def get_bookmarked_feed(
    viewer_id: str = Query(..., description="조회하는 유저 ID"),
    assembler: FeedAssembler = Depends(get_feed_assembler),
) -> FeedResponse:
    return FeedResponse.from_domain(assembler.bookmarked_feed(viewer_id))


@router.get("/authors/{author_id}", response_model=FeedResponse, summary="작성자별 피드")
def get_author_feed(
    author_id: str,
    viewer_id: str = Query(..., description="조회하는 유저 ID"),
    assembler: FeedAssembler = Depends(get_feed_assembler),
) -> FeedResponse:
    return FeedResponse.from_domain(assembler.author_feed(author_id, viewer_id))


@router.get("/search/hashtags", response_model=FeedResponse, summary="해시태그 검색")
def search_by_hashtags(
    q: str = Query(..., description="공백으로 구분한 해시태그 (예: '#python #fastapi')"),
    viewer_id: str = Query(..., description="조회하는 유저 ID"),
    assembler: FeedAssembler = Depends(get_feed_assembler),
) -> FeedResponse:
    return FeedResponse.from_domain(assembler.search_by_hashtags(q, viewer_id))


@router.get("/search/text", response_model=FeedResponse, summary="본문 부분 문자열 검색")
def search_by_text(
    q: str = Query(..., description="본문에 포함될 문자열"),
    viewer_id: str = Query(..., description="조회하는 유저 ID"),
    assembler: FeedAssembler = Depends(get_feed_assembler),
) -> FeedResponse:
    return FeedResponse.from_domain(assembler.search_by_text(q, viewer_id))
