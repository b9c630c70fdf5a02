"""Practice Sessions — create, read, edit, publish and summarize the caller's sessions.

Invariants:
    - Every route is scoped to the caller (get_current_user_id)
    - Creation returns the full session with its ordered score cards (201)
    - Domain failures propagate as YogaLogError to the global handlers
"""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from yogalog.api.dependencies import get_current_user_id
from yogalog.config import get_settings
from yogalog.core.domain_types import SessionStatus, UserId
from yogalog.infrastructure.database import get_db
from yogalog.schemas.practice_session import (
    CustomSessionCreate, PracticeSessionDetail, PracticeSessionResponse,
    PresetSessionCreate, SessionListResponse, SessionUpdate,
)
from yogalog.services.publish_session import publish_session, unpublish_session
from yogalog.services.session_materializer import materialize_session
from yogalog.services.session_queries import (
    get_owned_session, list_sessions, summarize_session, update_session_details,
)

router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])


# ─── Creation ────────────────────────────────────────────────────

@router.post(
    "/preset", response_model=PracticeSessionDetail,
    status_code=status.HTTP_201_CREATED,
)
async def create_preset_session(
    body: PresetSessionCreate,
    user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Create a DRAFT session from a named practice type."""
    session = await materialize_session(
        db, user_id, body.to_selection(),
        date=body.date, label=body.label, duration_minutes=body.duration_minutes,
    )
    return PracticeSessionDetail.from_model(session)


@router.post(
    "/custom", response_model=PracticeSessionDetail,
    status_code=status.HTTP_201_CREATED,
)
async def create_custom_session(
    body: CustomSessionCreate,
    user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Create a DRAFT session from explicit body blocks."""
    session = await materialize_session(
        db, user_id, body.to_selection(),
        date=body.date, label=body.label, duration_minutes=body.duration_minutes,
    )
    return PracticeSessionDetail.from_model(session)


# ─── Reads ───────────────────────────────────────────────────────

@router.get("", response_model=SessionListResponse)
async def get_sessions(
    limit: int = Query(20, ge=1),
    offset: int = Query(0, ge=0),
    status_filter: SessionStatus | None = Query(None, alias="status"),
    date_from: datetime | None = Query(None, alias="from"),
    date_to: datetime | None = Query(None, alias="to"),
    user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's sessions, newest first."""
    limit = min(limit, get_settings().session_list_max_limit)
    sessions = await list_sessions(
        db, user_id, limit=limit, offset=offset, status=status_filter,
        date_from=date_from, date_to=date_to,
    )
    return SessionListResponse(
        sessions=[PracticeSessionResponse.from_model(s) for s in sessions],
        pagination={"limit": limit, "offset": offset},
    )


@router.get("/{session_id}", response_model=PracticeSessionDetail)
async def get_session(
    session_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    session = await get_owned_session(db, session_id, user_id)
    return PracticeSessionDetail.from_model(session)


@router.get("/{session_id}/summary")
async def get_session_summary(
    session_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Completeness, metric averages and pain hot spots for one session."""
    return await summarize_session(db, session_id, user_id)


# ─── Mutations ───────────────────────────────────────────────────

@router.patch("/{session_id}", response_model=PracticeSessionResponse)
async def patch_session(
    session_id: UUID,
    body: SessionUpdate,
    user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    session = await update_session_details(db, session_id, user_id, body)
    return PracticeSessionResponse.from_model(session)


@router.post("/{session_id}/publish", response_model=PracticeSessionDetail)
async def publish(
    session_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """DRAFT → PUBLISHED. 422 SESSION_INCOMPLETE lists every unrated card."""
    session = await publish_session(db, session_id, user_id)
    return PracticeSessionDetail.from_model(session)


@router.post("/{session_id}/unpublish", response_model=PracticeSessionDetail)
async def unpublish(
    session_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    session = await unpublish_session(db, session_id, user_id)
    return PracticeSessionDetail.from_model(session)
