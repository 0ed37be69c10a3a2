"""
Subscription Handler

Subscription toggles and the two directions of the subscription graph.
"""

from fastapi import APIRouter, Depends

from vidshare.api.dependencies import CurrentUser, Pagination
from vidshare.api.dependencies.services import get_engagement_service
from vidshare.shared.schemas.common import Page, ToggleResponse
from vidshare.shared.schemas.user import UserCard
from vidshare.shared.services.engagement_service import EngagementService
from vidshare.shared.utils.identifiers import parse_identifier


router = APIRouter()


@router.post("/c/{channel_id}", response_model=ToggleResponse)
async def toggle_subscription(
    channel_id: str,
    current_user: CurrentUser,
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    """
    Subscribe to a channel, or unsubscribe if already subscribed.

    Raises:
        400: Subscribing to yourself while the policy forbids it
        404: No such channel
    """
    active = await engagement_service.toggle_subscription(
        parse_identifier(channel_id, "channel"), current_user.id
    )
    return ToggleResponse(active=active)


@router.get("/c/{channel_id}/subscribers", response_model=Page[UserCard])
async def list_subscribers(
    channel_id: str,
    pagination: Pagination,
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    return await engagement_service.list_subscribers(
        parse_identifier(channel_id, "channel"), pagination.page, pagination.limit
    )


@router.get("/u/{subscriber_id}/channels", response_model=Page[UserCard])
async def list_subscribed_channels(
    subscriber_id: str,
    pagination: Pagination,
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    return await engagement_service.list_subscriptions(
        parse_identifier(subscriber_id, "user"), pagination.page, pagination.limit
    )
