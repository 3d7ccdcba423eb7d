"""
Admin endpoints: bets, answer key, winner computation and publishing
"""
from fastapi import APIRouter, Depends
import logging

from wedding_wagers import state
from wedding_wagers.api.deps import admin_session
from wedding_wagers.models import (
    AnswerKeyRequest, CreateBetRequest, PublishWinnersRequest, ResolveStatus, SessionContext
)
from wedding_wagers.services.answer_keys import get_active_answer_key, submit_answer_key
from wedding_wagers.services.bets import create_bet, delete_bet, list_bets
from wedding_wagers.services.winners import find_winners, publish_winners


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/bets")
async def admin_list_bets(context: SessionContext = Depends(admin_session)):
    return {"bets": [b.model_dump(by_alias=True) for b in list_bets(state.STORE)]}


@router.post("/bets")
async def admin_create_bet(request: CreateBetRequest, context: SessionContext = Depends(admin_session)):
    """
    Admin: Create a bet

    Request:
        {
            "questionText": "Who will cry first?",
            "kind": "multiple-choice",       # or "open-ended"
            "options": ["Bride", "Groom"]    # ignored for open-ended
        }
    """
    bet = create_bet(state.STORE, request.question_text, request.kind, request.options)
    return {
        "success": True,
        "bet": bet.model_dump(by_alias=True),
        "message": "Bet created successfully!"
    }


@router.delete("/bets/{bet_id}")
async def admin_delete_bet(bet_id: str, context: SessionContext = Depends(admin_session)):
    delete_bet(state.STORE, bet_id)
    return {"success": True, "message": "Bet deleted successfully!"}


@router.get("/answer-key")
async def admin_get_answer_key(context: SessionContext = Depends(admin_session)):
    key = get_active_answer_key(state.STORE)
    return key.model_dump(by_alias=True)


@router.post("/answer-key")
async def admin_submit_answer_key(request: AnswerKeyRequest, context: SessionContext = Depends(admin_session)):
    """
    Admin: Submit the answer key

    Request:
        {
            "answers": {"<betId>": "Bride", ...},   # one per bet
            "replace": false                         # true to overwrite the current key
        }
    """
    key = submit_answer_key(state.STORE, context, request.answers, request.replace)
    return {
        "success": True,
        "answerKey": key.model_dump(by_alias=True),
        "message": "The answer key has been submitted successfully!"
    }


@router.post("/find-winner")
async def admin_find_winner(context: SessionContext = Depends(admin_session)):
    """
    Admin: Score every participant and report the winner(s)

    Response:
        {
            "ranked": [{"userId": ..., "userName": ..., "score": 2, "answers": {...}}],
            "winners": [...],
            "maxScore": 2,
            "status": "ok" | "no-submissions",
            "message": "Winner(s) found! Highest score: 2"
        }
    """
    result = find_winners(state.STORE)

    if result.status == ResolveStatus.NO_SUBMISSIONS:
        message = "No user answers found yet."
    elif result.winners:
        message = f"Winner(s) found! Highest score: {result.max_score}"
    else:
        message = "No winners found yet (or no correct answers)."

    logger.info(f"{context.email} ran find-winner: {message}")

    response = result.model_dump(by_alias=True)
    response["message"] = message
    return response


@router.post("/publish-winners")
async def admin_publish_winners(request: PublishWinnersRequest, context: SessionContext = Depends(admin_session)):
    """
    Admin: Replace the homepage winners

    Request:
        {"userIds": ["<uid>", ...]}   # empty list clears the homepage
    """
    winners = publish_winners(state.STORE, request.user_ids)
    return {
        "success": True,
        "winners": [w.model_dump(by_alias=True) for w in winners],
        "message": f"Published {len(winners)} winner(s) to the homepage."
    }
