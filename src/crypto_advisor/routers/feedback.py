"""Thumbs up/down votes on dashboard items."""
from dependency_injector.wiring import inject
from fastapi import APIRouter, HTTPException, status

from crypto_advisor.container import FeedbackStoreDep
from crypto_advisor.db import FeedbackType
from crypto_advisor.deps import CurrentIdentity
from crypto_advisor.schemas import (FeedbackOut, FeedbackRequest,
                                    FeedbackResponse,
                                    SubmittedFeedbackResponse)

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("", response_model=SubmittedFeedbackResponse)
@inject
def submit_feedback(
    body: FeedbackRequest,
    identity: CurrentIdentity,
    store: FeedbackStoreDep,
) -> SubmittedFeedbackResponse:
    """Record a vote; voting again on the same item replaces the previous vote."""
    feedback = store.submit_feedback(identity.user_id, body.feedback_type, body.item_id, body.vote)
    return SubmittedFeedbackResponse(feedback=FeedbackOut.from_model(feedback))


@router.get("/{feedback_type}/{item_id}", response_model=FeedbackResponse)
@inject
def get_feedback(
    feedback_type: str,
    item_id: str,
    identity: CurrentIdentity,
    store: FeedbackStoreDep,
) -> FeedbackResponse:
    try:
        kind = FeedbackType(feedback_type)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid feedback type") from exc
    feedback = store.get_feedback(identity.user_id, kind, item_id)
    if feedback is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Feedback not found")
    return FeedbackResponse(feedback=FeedbackOut.from_model(feedback))
