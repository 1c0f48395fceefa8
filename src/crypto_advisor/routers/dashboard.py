"""Personalised dashboard route."""
from dependency_injector.wiring import inject
from fastapi import APIRouter

from crypto_advisor.container import DashboardServiceDep
from crypto_advisor.deps import CurrentIdentity
from crypto_advisor.schemas import DashboardResponse

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
@inject
async def get_dashboard(identity: CurrentIdentity, service: DashboardServiceDep) -> DashboardResponse:
    """Coin prices, news, an AI insight and a meme for the caller.

    Upstream failures are absorbed by provider fallbacks, so this always
    returns a complete dashboard.
    """
    return await service.get_dashboard(identity.user_id)
