from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from ..schemas.people import (
    FollowRequest,
    FollowResponse,
    FollowableUserItem,
    ListFollowableUsersResponse,
    UserIdsResponse,
    UserProfileResponse,
)
from ...services.identity_service import IdentityDirectory, get_identity_directory
from ...services.social_graph_service import SocialGraph, get_social_graph


router = APIRouter()


@router.get("", response_model=ListFollowableUsersResponse, summary="팔로우 후보 목록")
def list_followable_users(
    viewer_id: str = Query(..., description="조회하는 유저 ID"),
    social: SocialGraph = Depends(get_social_graph),
) -> ListFollowableUsersResponse:
    items = social.list_followable_users(viewer_id)
    return ListFollowableUsersResponse(
        items=[FollowableUserItem.from_domain(i) for i in items]
    )


@router.get("/{user_id}", response_model=UserProfileResponse, summary="유저 프로필 조회")
def get_user_profile(
    user_id: str,
    identity: IdentityDirectory = Depends(get_identity_directory),
    social: SocialGraph = Depends(get_social_graph),
) -> UserProfileResponse:
    user = identity.resolve(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="user not found")
    return UserProfileResponse.from_domain(user, social.last_active_at(user_id))


@router.put("/{user_id}/follow", response_model=FollowResponse, summary="팔로우/언팔로우")
def set_follow(
    user_id: str,
    body: FollowRequest,
    social: SocialGraph = Depends(get_social_graph),
) -> FollowResponse:
    result = social.set_follow(body.follower_id, user_id, body.following)
    return FollowResponse(
        follower_id=body.follower_id,
        followee_id=user_id,
        result=result,
        following=social.is_following(body.follower_id, user_id),
    )


@router.get("/{user_id}/followers", response_model=UserIdsResponse, summary="팔로워 목록")
def list_followers(
    user_id: str,
    social: SocialGraph = Depends(get_social_graph),
) -> UserIdsResponse:
    return UserIdsResponse(user_id=user_id, user_ids=sorted(social.followers_of(user_id)))


@router.get("/{user_id}/following", response_model=UserIdsResponse, summary="팔로잉 목록")
def list_following(
    user_id: str,
    social: SocialGraph = Depends(get_social_graph),
) -> UserIdsResponse:
    return UserIdsResponse(user_id=user_id, user_ids=sorted(social.followees_of(user_id)))
