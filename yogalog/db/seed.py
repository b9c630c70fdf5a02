"""Catalog Seeding — idempotent upsert of the pose catalog keyed by slug.

Invariants:
    - Re-running never duplicates poses: existing slugs are updated in place
    - One commit for the whole catalog (all or nothing)

Design Decisions:
    - Select-then-update instead of dialect-specific ON CONFLICT: same code path on
      PostgreSQL and the SQLite test database
    - Runnable as the `yogalog-seed` console script and from the app lifespan
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from yogalog.config import get_settings
from yogalog.core.pose_catalog import DEFAULT_CATALOG, PoseCatalog
from yogalog.db.session import create_session_factory
from yogalog.infrastructure.observability import setup_logging
from yogalog.models.pose import Pose

logger = logging.getLogger(__name__)


async def seed_poses(db: AsyncSession, catalog: PoseCatalog = DEFAULT_CATALOG) -> int:
    """Upsert every catalog pose. Returns the number of rows written."""
    rows = catalog.seed_rows()
    try:
        result = await db.execute(
            select(Pose).where(Pose.slug.in_([r.slug for r in rows])),
        )
        existing = {pose.slug: pose for pose in result.scalars()}

        created = 0
        for row in rows:
            pose = existing.get(row.slug)
            if pose is None:
                db.add(Pose(
                    slug=row.slug,
                    name=row.name,
                    segment=row.segment.value,
                    order_in_segment=row.order_in_segment,
                    is_two_sided=row.is_two_sided,
                ))
                created += 1
                continue
            pose.name = row.name
            pose.segment = row.segment.value
            pose.order_in_segment = row.order_in_segment
            pose.is_two_sided = row.is_two_sided

        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        f"Seeded {len(rows)} poses ({created} new, {len(rows) - created} updated)",
    )
    return len(rows)


async def _run() -> None:
    settings = get_settings()
    factory = create_session_factory(settings.database_url)
    async with factory() as db:
        await seed_poses(db)
    await factory.kw["bind"].dispose()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    asyncio.run(_run())


if __name__ == "__main__":
    main()
