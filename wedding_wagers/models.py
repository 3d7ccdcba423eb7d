"""
Data models for the wager server

Store documents use camelCase field names; Python code uses snake_case.
Every model accepts either form on input and dumps camelCase by alias.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WagerModel(BaseModel):
    """Base model with camelCase aliases"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> Dict:
        """Dump in the store's native (camelCase) format"""
        return self.model_dump(by_alias=True, exclude={"id"})


class BetKind(str, Enum):
    MULTIPLE_CHOICE = "multiple-choice"
    OPEN_ENDED = "open-ended"


class Bet(WagerModel):
    """Admin-authored question"""
    id: Optional[str] = None
    question_text: str
    kind: BetKind
    options: List[str] = []  # non-empty only for multiple-choice
    created_at: datetime = Field(default_factory=utc_now)


class AnswerKey(WagerModel):
    """One correct answer per bet"""
    id: Optional[str] = None
    submitted_by: str
    submitted_at: datetime = Field(default_factory=utc_now)
    answers: Dict[str, str]


class Submission(WagerModel):
    """One user's answers, bet id -> answer"""
    id: Optional[str] = None
    user_id: str
    user_name: str
    answers: Dict[str, str] = {}
    submitted_at: datetime = Field(default_factory=utc_now)


class ScoredUser(WagerModel):
    user_id: str
    user_name: str
    score: int = Field(ge=0)
    answers: Optional[Dict[str, str]] = None  # kept for audit display


class PublishedWinner(WagerModel):
    """Homepage winner entry, fully replaced on every publish"""
    id: Optional[str] = None
    user_id: str
    user_name: str
    score: int
    displayed_at: datetime = Field(default_factory=utc_now)


class ResolveStatus(str, Enum):
    OK = "ok"
    NO_SUBMISSIONS = "no-submissions"


class ResolveResult(WagerModel):
    """Output of the scoring resolver"""
    ranked: List[ScoredUser] = []
    winners: List[ScoredUser] = []
    max_score: int = 0
    status: ResolveStatus = ResolveStatus.OK


class UserRecord(WagerModel):
    """Identity held by the identity provider"""
    uid: str
    email: str
    display_name: str
    password_hash: str
    email_verified: bool = False
    custom_claims: Dict[str, bool] = {}
    created_at: datetime = Field(default_factory=utc_now)


class SessionContext(WagerModel):
    """
    Signed-in principal

    Populated once at sign-in and passed explicitly to whatever performs an
    action on the user's behalf. Dropped on sign-out.
    """
    token: str
    user_id: str
    email: str
    display_name: str
    is_admin: bool = False
    started_at: datetime = Field(default_factory=utc_now)


class AppConfig(BaseModel):
    """Deployment configuration (config/settings.yaml)"""
    super_admin_email: Optional[str] = None
    session_ttl_minutes: int = 720
    seed_bets_path: Optional[str] = "data/bets.csv"
    log_level: str = "INFO"


# ==================== REQUEST BODIES ====================

class SignUpRequest(WagerModel):
    email: str
    password: str
    confirm_password: str
    name: str


class VerifyEmailRequest(WagerModel):
    token: str


class SignInRequest(WagerModel):
    email: str
    password: str


class CreateBetRequest(WagerModel):
    question_text: str
    kind: BetKind = BetKind.MULTIPLE_CHOICE
    options: List[str] = []


class AnswersRequest(WagerModel):
    answers: Dict[str, str]


class AnswerKeyRequest(WagerModel):
    answers: Dict[str, str]
    replace: bool = False


class PublishWinnersRequest(WagerModel):
    user_ids: List[str]


class RoleRequest(WagerModel):
    email: Optional[str] = None
