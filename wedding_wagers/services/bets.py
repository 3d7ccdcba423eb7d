"""Bet management and answer-sheet validation"""
import logging
from typing import Dict, List

from wedding_wagers.errors import InvalidArgument, NotFound
from wedding_wagers.models import Bet, BetKind
from wedding_wagers.store import BETS, DocumentStore


logger = logging.getLogger(__name__)


def create_bet(store: DocumentStore, question_text: str, kind: BetKind, options: List[str]) -> Bet:
    question_text = (question_text or "").strip()
    if not question_text:
        raise InvalidArgument("Please fill out all fields.")

    if kind == BetKind.MULTIPLE_CHOICE:
        if not options or any(not o.strip() for o in options):
            raise InvalidArgument("Please fill out all fields.")
        options = [o.strip() for o in options]
    else:
        options = []

    bet = Bet(question_text=question_text, kind=kind, options=options)
    bet.id = store.insert(BETS, bet.to_document())
    logger.info(f"Created bet {bet.id}: {question_text!r} ({kind.value})")
    return bet


def delete_bet(store: DocumentStore, bet_id: str) -> None:
    if not store.delete(BETS, bet_id):
        raise NotFound(f"Bet {bet_id} not found")
    logger.info(f"Deleted bet {bet_id}")


def list_bets(store: DocumentStore) -> List[Bet]:
    return [Bet(**doc) for doc in store.scan(BETS)]


def check_answer_sheet(bets: List[Bet], answers: Dict[str, str], incomplete_message: str) -> Dict[str, str]:
    """
    Validate one answer per bet

    Every bet must be answered with a non-blank value, no unknown bet
    ids are allowed, and multiple-choice answers must be one of the
    bet's options. Answers are stored exactly as given.

    Returns:
        The answers restricted to known bets

    Raises:
        InvalidArgument: on any violation
    """
    if not bets:
        raise InvalidArgument("There are no bets yet.")

    by_id = {bet.id: bet for bet in bets}

    unknown = sorted(set(answers) - set(by_id))
    if unknown:
        raise InvalidArgument(f"Unknown bet id(s): {', '.join(unknown)}")

    for bet_id, bet in by_id.items():
        answer = answers.get(bet_id)
        if answer is None or not answer.strip():
            raise InvalidArgument(incomplete_message)
        if bet.kind == BetKind.MULTIPLE_CHOICE and answer not in bet.options:
            raise InvalidArgument(f"'{answer}' is not an option for: {bet.question_text}")

    return {bet_id: answers[bet_id] for bet_id in by_id}
