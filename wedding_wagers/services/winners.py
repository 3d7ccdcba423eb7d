"""
Winner service - run the resolver on a store snapshot and publish results
"""
import logging
from typing import List

from wedding_wagers.errors import InvalidArgument
from wedding_wagers.models import PublishedWinner, ResolveResult, utc_now
from wedding_wagers.scoring import resolve_winners
from wedding_wagers.services.answer_keys import get_active_answer_key
from wedding_wagers.services.submissions import load_submissions
from wedding_wagers.store import HOMEPAGE_WINNERS, DocumentStore


logger = logging.getLogger(__name__)


def find_winners(store: DocumentStore) -> ResolveResult:
    """
    Score all submissions against the active answer key

    Reads a one-shot snapshot of keys and answers; writes nothing.
    """
    key = get_active_answer_key(store)
    submissions = load_submissions(store)
    return resolve_winners(key.answers, submissions)


def publish_winners(store: DocumentStore, user_ids: List[str]) -> List[PublishedWinner]:
    """
    Replace the homepage winners with the chosen users

    Scores are recomputed from the store, so only users who actually
    submitted can be published. An empty list clears the homepage.

    Raises:
        MissingAnswerKey: if no key was submitted (not raised when clearing)
        InvalidArgument: if a user id has no submission
    """
    chosen = list(dict.fromkeys(user_ids))
    if not chosen:
        store.replace_all(HOMEPAGE_WINNERS, [])
        logger.info("Cleared homepage winners")
        return []

    scored = {u.user_id: u for u in find_winners(store).ranked}

    unknown = [uid for uid in chosen if uid not in scored]
    if unknown:
        raise InvalidArgument(f"No submissions for user(s): {', '.join(unknown)}")

    displayed_at = utc_now()
    winners = [
        PublishedWinner(
            user_id=uid,
            user_name=scored[uid].user_name,
            score=scored[uid].score,
            displayed_at=displayed_at
        )
        for uid in chosen
    ]

    ids = store.replace_all(HOMEPAGE_WINNERS, [w.to_document() for w in winners])
    for winner, doc_id in zip(winners, ids):
        winner.id = doc_id

    logger.info(f"Published {len(winners)} homepage winner(s)")
    return winners


def list_published_winners(store: DocumentStore) -> List[PublishedWinner]:
    return [PublishedWinner(**doc) for doc in store.scan(HOMEPAGE_WINNERS)]
