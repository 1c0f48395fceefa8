"""Onboarding questionnaire: save, read and check completion of preferences."""
from dependency_injector.wiring import inject
from fastapi import APIRouter, HTTPException, status

from crypto_advisor.container import PreferenceStoreDep
from crypto_advisor.deps import CurrentIdentity
from crypto_advisor.schemas import (OnboardingRequest, OnboardingStatus,
                                    PreferencesOut, PreferencesResponse,
                                    SavedPreferencesResponse)

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


@router.post("", response_model=SavedPreferencesResponse)
@inject
def save_preferences(
    body: OnboardingRequest,
    identity: CurrentIdentity,
    store: PreferenceStoreDep,
) -> SavedPreferencesResponse:
    """Create or replace the caller's preferences."""
    prefs = store.save_preferences(
        identity.user_id,
        interested_assets=body.interested_assets,
        investor_type=body.investor_type,
        content_preferences=body.content_preferences,
    )
    return SavedPreferencesResponse(preferences=PreferencesOut.from_model(prefs))


@router.get("", response_model=PreferencesResponse)
@inject
def get_preferences(identity: CurrentIdentity, store: PreferenceStoreDep) -> PreferencesResponse:
    prefs = store.get_preferences(identity.user_id)
    if prefs is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Preferences not found")
    return PreferencesResponse(preferences=PreferencesOut.from_model(prefs))


@router.get("/status", response_model=OnboardingStatus)
@inject
def get_status(identity: CurrentIdentity, store: PreferenceStoreDep) -> OnboardingStatus:
    return OnboardingStatus(completed=store.has_completed_onboarding(identity.user_id))
