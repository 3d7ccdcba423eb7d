"""
Guest endpoints: bets, answers and the public winners list
"""
from fastapi import APIRouter, Depends

from wedding_wagers import state
from wedding_wagers.api.deps import current_session
from wedding_wagers.models import AnswersRequest, SessionContext
from wedding_wagers.services.bets import list_bets
from wedding_wagers.services.submissions import list_user_submissions, submit_answers
from wedding_wagers.services.winners import list_published_winners


router = APIRouter(tags=["bets"])


@router.get("/bets")
async def get_bets(context: SessionContext = Depends(current_session)):
    """List all bets in creation order"""
    bets = list_bets(state.STORE)
    return {"bets": [b.model_dump(by_alias=True) for b in bets]}


@router.post("/answers")
async def post_answers(request: AnswersRequest, context: SessionContext = Depends(current_session)):
    """
    Submit one answer per bet

    Request:
        {"answers": {"<betId>": "Bride", "<betId>": "Yes"}}

    Every submission is kept; scoring uses each user's best one.
    """
    submission = submit_answers(state.STORE, context, request.answers)
    return {
        "success": True,
        "submission": submission.model_dump(by_alias=True),
        "message": "Your bets have been placed!"
    }


@router.get("/answers/me")
async def my_answers(context: SessionContext = Depends(current_session)):
    submissions = list_user_submissions(state.STORE, context.user_id)
    return {"submissions": [s.model_dump(by_alias=True) for s in submissions]}


@router.get("/winners")
async def get_winners():
    """Published homepage winners (public)"""
    winners = list_published_winners(state.STORE)
    return {"winners": [w.model_dump(by_alias=True) for w in winners]}
