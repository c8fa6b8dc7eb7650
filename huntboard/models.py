"""
Data models for the competition tracker

Python attributes are snake_case; the wire format (seed files, snapshots,
API payloads) uses the camelCase aliases.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """Base model accepting both field names and camelCase aliases"""
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ChallengeType(str, Enum):
    NORMAL = "normal"
    RARE = "rare"
    SECRET = "secret"

    @property
    def is_exclusive(self) -> bool:
        """Rare and secret challenges can be won by a single team"""
        return self is not ChallengeType.NORMAL


class Player(WireModel):
    id: str
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    personal_points: int = Field(0, alias="personalPoints", ge=0)


class Team(WireModel):
    id: str
    name: str
    color: str = ""                       # presentation only, never validated
    points: int = 0                       # cached total, maintained by the engine
    completed_challenges: List[str] = Field(default_factory=list, alias="completedChallenges")
    players: List[Player] = Field(default_factory=list)

    def find_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def player_index(self, player_id: str) -> int:
        for idx, player in enumerate(self.players):
            if player.id == player_id:
                return idx
        return -1

    @property
    def personal_total(self) -> int:
        return sum(p.personal_points for p in self.players)


class Challenge(WireModel):
    id: str
    name: str
    description: str = ""
    points: int
    type: ChallengeType = ChallengeType.NORMAL
    available_at: datetime = Field(alias="availableAt")
    winners: List[str] = Field(default_factory=list)
    disabled: bool = False


class SessionState(WireModel):
    """Global suspense / pause flags, independent of team data"""
    suspense_mode: bool = Field(False, alias="suspenseMode")
    suspense_order: List[str] = Field(default_factory=list, alias="suspenseOrder")
    pause_until: Optional[datetime] = Field(None, alias="pauseUntil")


class Snapshot(WireModel):
    """Consistent view of the entity store at one instant"""
    teams: List[Team] = Field(default_factory=list)
    challenges: List[Challenge] = Field(default_factory=list)

    def find_team(self, team_id: str) -> Optional[Team]:
        return next((t for t in self.teams if t.id == team_id), None)

    def find_challenge(self, challenge_id: str) -> Optional[Challenge]:
        return next((c for c in self.challenges if c.id == challenge_id), None)


class RejectionReason(str, Enum):
    TEAM_NOT_FOUND = "team_not_found"
    CHALLENGE_NOT_FOUND = "challenge_not_found"
    PLAYER_NOT_FOUND = "player_not_found"
    CHALLENGE_DISABLED = "challenge_disabled"
    EXCLUSIVE_TAKEN = "exclusive_taken"
    INVALID_AMOUNT = "invalid_amount"
    SAME_PLAYER = "same_player"

    @property
    def is_not_found(self) -> bool:
        return self.value.endswith("_not_found")


class OperationResult(BaseModel):
    """Outcome of an engine operation: applied, or rejected with a reason"""
    applied: bool
    reason: Optional[RejectionReason] = None

    @classmethod
    def ok(cls) -> "OperationResult":
        return cls(applied=True)

    @classmethod
    def rejected(cls, reason: RejectionReason) -> "OperationResult":
        return cls(applied=False, reason=reason)


class RankedTeam(BaseModel):
    """One leaderboard row produced by the ranking projector"""
    id: str
    name: str
    color: str
    rank: int
    total: int              # recomputed from players and challenges
    cached_points: int      # Team.points as maintained by the engine
    consistent: bool


class ErrorPolicy(str, Enum):
    SOFT = "soft"       # rejections answer 200 with applied=false
    STRICT = "strict"   # rejections answer 404 / 409


class Settings(BaseModel):
    """Runtime settings loaded from YAML"""
    teams_path: str = "data/teams.json"
    challenges_path: str = "data/challenges.json"
    snapshot_path: Optional[str] = None
    reset_clears_session: bool = False
    error_policy: ErrorPolicy = ErrorPolicy.SOFT
    cors_origins: List[str] = ["*"]
