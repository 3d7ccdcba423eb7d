"""
Wedding Wagers Scoring Engine

Rules:
  - One point per bet where the submitted answer equals the key's answer
    (exact, case-sensitive string match, no trimming)
  - Bets present on only one side score nothing
  - A user with several submissions keeps the HIGHEST-scoring one,
    not the most recent
  - Winners are every user tied at the maximum score, provided the
    maximum is above zero
"""
import logging
from typing import Dict, Mapping, Optional, Sequence

from wedding_wagers.errors import MissingAnswerKey
from wedding_wagers.models import ResolveResult, ResolveStatus, ScoredUser, Submission


logger = logging.getLogger(__name__)


def score_submission(answer_key: Mapping[str, str], answers: Mapping[str, str]) -> int:
    """
    Count correct answers in one submission

    Args:
        answer_key: bet id -> correct answer
        answers: bet id -> submitted answer

    Returns:
        Number of bet ids answered identically on both sides
    """
    return sum(
        1 for bet_id, answer in answers.items()
        if bet_id in answer_key and answer == answer_key[bet_id]
    )


def best_per_user(answer_key: Mapping[str, str], submissions: Sequence[Submission]) -> Dict[str, ScoredUser]:
    """
    Reduce submissions to one ScoredUser per user id

    Keeps the highest-scoring submission; on a tie the first one seen
    stays. The returned dict preserves first-encounter order of users.
    """
    best: Dict[str, ScoredUser] = {}
    for submission in submissions:
        score = score_submission(answer_key, submission.answers)
        current = best.get(submission.user_id)
        if current is None or score > current.score:
            best[submission.user_id] = ScoredUser(
                user_id=submission.user_id,
                user_name=submission.user_name,
                score=score,
                answers=dict(submission.answers),
            )
    return best


def resolve_winners(
    answer_key: Optional[Mapping[str, str]],
    submissions: Sequence[Submission],
) -> ResolveResult:
    """
    Score every user against the answer key and pick the winners

    Args:
        answer_key: bet id -> correct answer; must be non-empty
        submissions: all submissions, possibly several per user

    Returns:
        ResolveResult with the ranked list (descending score, stable by
        first encounter), the winners tied at max_score, and max_score.
        With no submissions the status is NO_SUBMISSIONS and everything
        is empty.

    Raises:
        MissingAnswerKey: if answer_key is None or empty
    """
    if not answer_key:
        raise MissingAnswerKey("No answer key found. Please ensure an admin has submitted one.")

    if not submissions:
        logger.info("No submissions to score")
        return ResolveResult(status=ResolveStatus.NO_SUBMISSIONS)

    ranked = sorted(best_per_user(answer_key, submissions).values(), key=lambda u: -u.score)

    max_score = max(u.score for u in ranked)
    winners = [u for u in ranked if u.score == max_score and max_score > 0]

    logger.info(
        f"Scored {len(submissions)} submissions from {len(ranked)} users | "
        f"max score {max_score} | {len(winners)} winner(s)"
    )
    return ResolveResult(ranked=ranked, winners=winners, max_score=max_score)
