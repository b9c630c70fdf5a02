"""Catalog seeding — idempotent upsert keyed by slug."""

from sqlalchemy import func, select

from yogalog.core.domain_types import CatalogGroup, Segment
from yogalog.core.pose_catalog import CatalogPose, PoseCatalog
from yogalog.db.seed import seed_poses
from yogalog.models.pose import Pose


async def _pose_count(db) -> int:
    return (await db.execute(select(func.count()).select_from(Pose))).scalar_one()


async def test_seed_inserts_whole_catalog(test_db):
    assert await seed_poses(test_db) == 172
    assert await _pose_count(test_db) == 172


async def test_reseed_does_not_duplicate(test_db):
    await seed_poses(test_db)
    await seed_poses(test_db)
    assert await _pose_count(test_db) == 172


async def test_reseed_updates_existing_rows(test_db):
    small = PoseCatalog({
        CatalogGroup.STANDING: (CatalogPose("Parsvottanasana", False),),
    })
    await seed_poses(test_db, small)

    fixed = PoseCatalog({
        CatalogGroup.STANDING: (
            CatalogPose("Padangusthasana", False),
            CatalogPose("Parsvottanasana", True),
        ),
    })
    await seed_poses(test_db, fixed)

    pose = (await test_db.execute(
        select(Pose).where(Pose.slug == "parsvottanasana"),
    )).scalar_one()
    assert pose.is_two_sided is True
    assert pose.order_in_segment == 2
    assert pose.segment == Segment.STANDING.value
    assert await _pose_count(test_db) == 2
