"""
Health check and system status endpoints
"""
from fastapi import APIRouter
from wedding_wagers import state
from wedding_wagers.store import ANSWERS, BETS, HOMEPAGE_WINNERS, KEYS


router = APIRouter(tags=["health"])


@router.get("/")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "message": "Wedding Wagers",
        "version": "1.0.0",
        "total_bets": state.STORE.count(BETS),
        "total_submissions": state.STORE.count(ANSWERS),
        "has_answer_key": state.STORE.count(KEYS) > 0,
        "published_winners": state.STORE.count(HOMEPAGE_WINNERS),
        "total_users": state.IDENTITY.user_count()
    }
