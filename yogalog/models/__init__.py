"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - PracticeSession is the aggregate root; score cards are scoped by session_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from yogalog.models.pose import Pose  # noqa: F401
from yogalog.models.practice_session import PracticeSession  # noqa: F401
from yogalog.models.score_card import ScoreCard  # noqa: F401
