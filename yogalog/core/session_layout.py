"""Session Layout — pure side-splitting and ordering of score cards for a plan.

Invariants:
    - order_in_session is contiguous 1..N in plan order
    - A two-sided pose yields RIGHT then LEFT at consecutive positions
    - A one-sided pose yields a single NA card
    - Every plan slug must resolve; otherwise MissingReferenceDataError names all gaps

Design Decisions:
    - Separated from services/session_materializer.py so the ordering invariants
      are testable without a database (impureim sandwich: fetch → layout → insert)
"""

from dataclasses import dataclass
from typing import Mapping, Sequence
from uuid import UUID

from yogalog.core.domain_types import Segment, Side
from yogalog.core.errors import MissingReferenceDataError
from yogalog.core.plan_expander import PlanItem


@dataclass(frozen=True)
class ResolvedPose:
    """Persisted pose identity needed to lay out cards."""
    id: UUID
    slug: str
    is_two_sided: bool


@dataclass(frozen=True)
class CardDraft:
    pose_id: UUID
    order_in_session: int
    segment: Segment
    side: Side


def unique_slugs(plan: Sequence[PlanItem]) -> list[str]:
    """Distinct slugs in first-appearance order."""
    return list(dict.fromkeys(item.slug for item in plan))


def find_missing_slugs(
    plan: Sequence[PlanItem], resolved: Mapping[str, ResolvedPose],
) -> list[str]:
    return [slug for slug in unique_slugs(plan) if slug not in resolved]


def layout_score_cards(
    plan: Sequence[PlanItem], resolved: Mapping[str, ResolvedPose],
) -> list[CardDraft]:
    missing = find_missing_slugs(plan, resolved)
    if missing:
        raise MissingReferenceDataError(missing)

    drafts: list[CardDraft] = []
    order = 1
    for item in plan:
        pose = resolved[item.slug]
        sides = (Side.RIGHT, Side.LEFT) if pose.is_two_sided else (Side.NA,)
        for side in sides:
            drafts.append(CardDraft(
                pose_id=pose.id,
                order_in_session=order,
                segment=item.segment,
                side=side,
            ))
            order += 1
    return drafts
