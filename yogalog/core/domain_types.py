"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - SessionId, ScoreCardId, PoseId wrap UUIDs; UserId wraps the caller-supplied string
    - Rating is bounded 1–10; OverallScore is a 2-decimal mean of ratings
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and persist to String columns without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
SessionId = NewType("SessionId", UUID)
ScoreCardId = NewType("ScoreCardId", UUID)
PoseId = NewType("PoseId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

Rating = NewType("Rating", int)              # 1–10
OverallScore = NewType("OverallScore", float)

RATING_MIN = 1
RATING_MAX = 10


# ─── Enums ───────────────────────────────────────────────────────

class Segment(str, Enum):
    """Display segment of a pose or score card — maps to `segment` columns."""
    SUN_A = "SUN_A"
    SUN_B = "SUN_B"
    STANDING = "STANDING"
    PRIMARY = "PRIMARY"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED_A = "ADVANCED_A"
    ADVANCED_B = "ADVANCED_B"
    FINISHING = "FINISHING"
    WARMUP = "WARMUP"
    BACKBENDING = "BACKBENDING"
    OTHER = "OTHER"


class CatalogGroup(str, Enum):
    """Canonical blocks of the hand-authored pose catalog."""
    SUN = "SUN"
    STANDING = "STANDING"
    PRIMARY = "PRIMARY"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED_A = "ADVANCED_A"
    ADVANCED_B = "ADVANCED_B"
    FINISHING = "FINISHING"


# Series-specific blocks a selection may insert between standing and finishing
BODY_BLOCKS: tuple[CatalogGroup, ...] = (
    CatalogGroup.PRIMARY,
    CatalogGroup.INTERMEDIATE,
    CatalogGroup.ADVANCED_A,
    CatalogGroup.ADVANCED_B,
)


class PracticeType(str, Enum):
    """Which body block(s) a session covers. CUSTOM uses explicit blocks."""
    FULL_PRIMARY = "FULL_PRIMARY"
    HALF_PRIMARY = "HALF_PRIMARY"
    HALF_PRIMARY_PLUS_INTERMEDIATE = "HALF_PRIMARY_PLUS_INTERMEDIATE"
    PRIMARY_PLUS_INTERMEDIATE = "PRIMARY_PLUS_INTERMEDIATE"
    FULL_INTERMEDIATE = "FULL_INTERMEDIATE"
    INTERMEDIATE_PLUS_ADVANCED_A = "INTERMEDIATE_PLUS_ADVANCED_A"
    INTERMEDIATE_PLUS_ADVANCED_B = "INTERMEDIATE_PLUS_ADVANCED_B"
    ADVANCED_A = "ADVANCED_A"
    ADVANCED_B = "ADVANCED_B"
    CUSTOM = "CUSTOM"


class SessionStatus(str, Enum):
    """Practice session lifecycle — maps to DB `status` column."""
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class Side(str, Enum):
    """Body side of a score card. NA for poses that are not two-sided."""
    RIGHT = "RIGHT"
    LEFT = "LEFT"
    NA = "NA"


class RatingKey(str, Enum):
    """The six bounded rating axes of a score card, in canonical order."""
    EASE = "ease"
    COMFORT = "comfort"
    STABILITY = "stability"
    PAIN = "pain"
    BREATH = "breath"
    FOCUS = "focus"


RATING_KEYS: tuple[str, ...] = tuple(k.value for k in RatingKey)


class TrendMetric(str, Enum):
    """Fields a caller may select when trending a pose."""
    EASE = "ease"
    COMFORT = "comfort"
    STABILITY = "stability"
    PAIN = "pain"
    BREATH = "breath"
    FOCUS = "focus"
    OVERALL_SCORE = "overall_score"


class TrendSide(str, Enum):
    """Side filter for trends. BOTH = LEFT + RIGHT, ALL = no filter."""
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    NA = "NA"
    BOTH = "BOTH"
    ALL = "ALL"
