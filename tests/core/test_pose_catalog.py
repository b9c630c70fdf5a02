"""Pose Catalog — tests for the immutable hand-authored pose lists.

Tests cover:
    - group sizes and two-sidedness counts used by the plan expander
    - slug uniqueness across the whole catalog (seeding keys on slug)
    - compose preserves group order; series are standing + block + finishing
    - seed rows carry 1-based order and resolved sun segments
"""

import pytest

from yogalog.core.domain_types import CatalogGroup, Segment
from yogalog.core.pose_catalog import (
    DEFAULT_CATALOG, SERIES, CatalogPose, PoseCatalog,
    segment_for_group, sun_segment_for_pose_name,
)


# ─── Group contents ──────────────────────────────────────────────

@pytest.mark.parametrize("group, size", [
    (CatalogGroup.SUN, 2),
    (CatalogGroup.STANDING, 11),
    (CatalogGroup.PRIMARY, 35),
    (CatalogGroup.INTERMEDIATE, 37),
    (CatalogGroup.ADVANCED_A, 34),
    (CatalogGroup.ADVANCED_B, 37),
    (CatalogGroup.FINISHING, 16),
])
def test_group_sizes(group, size):
    assert len(DEFAULT_CATALOG.group(group)) == size


def test_standing_has_five_two_sided_poses():
    standing = DEFAULT_CATALOG.group(CatalogGroup.STANDING)
    assert sum(p.is_two_sided for p in standing) == 5


def test_primary_has_fourteen_two_sided_poses():
    primary = DEFAULT_CATALOG.group(CatalogGroup.PRIMARY)
    assert sum(p.is_two_sided for p in primary) == 14


def test_slugs_are_unique_across_catalog():
    slugs = [p.slug for p in DEFAULT_CATALOG.all_poses()]
    assert len(slugs) == len(set(slugs)) == 172


def test_navasana_is_twentieth_primary_pose():
    primary = DEFAULT_CATALOG.group(CatalogGroup.PRIMARY)
    assert primary[19].slug == "navasana"


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_CATALOG.groups[CatalogGroup.SUN] = ()


# ─── Composition ─────────────────────────────────────────────────

def test_compose_concatenates_in_given_order():
    catalog = PoseCatalog({
        CatalogGroup.STANDING: (CatalogPose("A", False), CatalogPose("B", True)),
        CatalogGroup.FINISHING: (CatalogPose("Z", False),),
    })
    names = [p.name for p in catalog.compose(CatalogGroup.FINISHING, CatalogGroup.STANDING)]
    assert names == ["Z", "A", "B"]


def test_series_are_standing_block_finishing():
    assert len(SERIES) == 4
    primary = SERIES[0]
    expected = DEFAULT_CATALOG.compose(
        CatalogGroup.STANDING, CatalogGroup.PRIMARY, CatalogGroup.FINISHING,
    )
    assert primary.poses == expected
    assert len(primary.poses) == 11 + 35 + 16


# ─── Segments & seed rows ────────────────────────────────────────

def test_sun_segment_resolved_by_name():
    assert sun_segment_for_pose_name("Surya Namaskar A") is Segment.SUN_A
    assert sun_segment_for_pose_name("surya  namaskar b") is Segment.SUN_B
    assert sun_segment_for_pose_name("Something else") is Segment.SUN_A


def test_segment_for_non_sun_group_uses_group_name():
    assert segment_for_group(CatalogGroup.PRIMARY, "Navasana") is Segment.PRIMARY


def test_seed_rows_have_one_based_order_per_group():
    rows = DEFAULT_CATALOG.seed_rows()
    assert len(rows) == 172
    sun = [r for r in rows if r.segment in (Segment.SUN_A, Segment.SUN_B)]
    assert [(r.slug, r.segment, r.order_in_segment) for r in sun] == [
        ("surya-namaskar-a", Segment.SUN_A, 1),
        ("surya-namaskar-b", Segment.SUN_B, 2),
    ]
    finishing = [r for r in rows if r.segment is Segment.FINISHING]
    assert finishing[0].order_in_segment == 1
    assert finishing[-1].order_in_segment == 16
