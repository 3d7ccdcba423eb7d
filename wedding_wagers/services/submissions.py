"""User answer submissions (append-only)"""
import logging
from typing import Dict, List

from wedding_wagers.models import SessionContext, Submission
from wedding_wagers.services.bets import check_answer_sheet, list_bets
from wedding_wagers.store import ANSWERS, DocumentStore


logger = logging.getLogger(__name__)


def submit_answers(store: DocumentStore, context: SessionContext, answers: Dict[str, str]) -> Submission:
    """Append a new submission for the signed-in user"""
    answers = check_answer_sheet(list_bets(store), answers, "Please answer all bets before submitting.")

    submission = Submission(
        user_id=context.user_id,
        user_name=context.display_name,
        answers=answers
    )
    submission.id = store.insert(ANSWERS, submission.to_document())
    logger.info(f"Submission {submission.id} from {context.email}")
    return submission


def load_submissions(store: DocumentStore) -> List[Submission]:
    return [Submission(**doc) for doc in store.scan(ANSWERS)]


def list_user_submissions(store: DocumentStore, user_id: str) -> List[Submission]:
    return [s for s in load_submissions(store) if s.user_id == user_id]
