"""
Answer key service

Exactly one answer key is active at a time. A second key is rejected
unless the admin asks to replace the current one, which removes the old
key before inserting the new one.
"""
import logging
from typing import Dict

from wedding_wagers.errors import AmbiguousAnswerKey, Conflict, MissingAnswerKey
from wedding_wagers.models import AnswerKey, SessionContext
from wedding_wagers.services.bets import check_answer_sheet, list_bets
from wedding_wagers.store import KEYS, DocumentStore


logger = logging.getLogger(__name__)


def submit_answer_key(
    store: DocumentStore,
    context: SessionContext,
    answers: Dict[str, str],
    replace: bool = False
) -> AnswerKey:
    """
    Store the answer key

    Args:
        store: Document store
        context: Session of the submitting admin
        answers: bet id -> correct answer, one per bet
        replace: Drop the existing key instead of rejecting the request

    Raises:
        InvalidArgument: if the key does not answer every bet
        Conflict: if a key exists and replace is False
    """
    answers = check_answer_sheet(
        list_bets(store), answers,
        "Please provide an answer for all questions before submitting."
    )

    existing = store.scan(KEYS)
    if existing and not replace:
        raise Conflict("An answer key already exists. Submit with replace to overwrite it.")
    for doc in existing:
        store.delete(KEYS, doc["id"])

    key = AnswerKey(submitted_by=context.user_id, answers=answers)
    key.id = store.insert(KEYS, key.to_document())
    logger.info(f"Answer key {key.id} submitted by {context.email} ({len(answers)} answers, replaced={len(existing)})")
    return key


def get_active_answer_key(store: DocumentStore) -> AnswerKey:
    """
    The single authoritative answer key

    Raises:
        MissingAnswerKey: if no key was submitted
        AmbiguousAnswerKey: if the store holds more than one key
    """
    docs = store.scan(KEYS)
    if not docs:
        raise MissingAnswerKey("No answer key found. Please ensure an admin has submitted one.")
    if len(docs) > 1:
        raise AmbiguousAnswerKey(f"Found {len(docs)} answer keys; exactly one must be active.")
    return AnswerKey(**docs[0])
