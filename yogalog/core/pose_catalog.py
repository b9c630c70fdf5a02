"""Pose Catalog — immutable, hand-authored ordered pose lists per canonical block.

Invariants:
    - Built once at import time, never mutated (tuples + MappingProxyType)
    - Order within each group is the canonical practice order
    - slugify(name) is unique across the whole catalog (seeding keys on slug)

Design Decisions:
    - PoseCatalog is a value object injected into the expander and the seeder,
      so tests can pass a small catalog instead of DEFAULT_CATALOG
    - The four SERIES are pre-composed for seeding/documentation only; the plan
      expander re-slices groups itself because partial practices cut mid-group
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from yogalog.core.domain_types import CatalogGroup, Segment
from yogalog.core.slugs import slugify


@dataclass(frozen=True)
class CatalogPose:
    name: str
    is_two_sided: bool

    @property
    def slug(self) -> str:
        return slugify(self.name)


@dataclass(frozen=True)
class SeriesDefinition:
    name: str
    description: str
    poses: tuple[CatalogPose, ...]


@dataclass(frozen=True)
class PoseSeedRow:
    """One row for the idempotent pose upsert."""
    slug: str
    name: str
    segment: Segment
    order_in_segment: int
    is_two_sided: bool


_SUN_A = re.compile(r"surya\s+namaskar\s+a", re.IGNORECASE)
_SUN_B = re.compile(r"surya\s+namaskar\s+b", re.IGNORECASE)


def sun_segment_for_pose_name(name: str) -> Segment:
    """Resolve SUN_A vs SUN_B from the pose name. Defaults to SUN_A."""
    if _SUN_A.search(name):
        return Segment.SUN_A
    if _SUN_B.search(name):
        return Segment.SUN_B
    return Segment.SUN_A


def segment_for_group(group: CatalogGroup, pose_name: str) -> Segment:
    """Default display segment of a pose drawn from a catalog group."""
    if group is CatalogGroup.SUN:
        return sun_segment_for_pose_name(pose_name)
    return Segment(group.value)


class PoseCatalog:
    """Ordered pose lists keyed by CatalogGroup. Read-only after construction."""

    def __init__(self, groups: Mapping[CatalogGroup, tuple[CatalogPose, ...]]):
        self._groups = MappingProxyType(
            {key: tuple(poses) for key, poses in groups.items()},
        )

    @property
    def groups(self) -> Mapping[CatalogGroup, tuple[CatalogPose, ...]]:
        return self._groups

    def group(self, key: CatalogGroup) -> tuple[CatalogPose, ...]:
        return self._groups[key]

    def compose(self, *keys: CatalogGroup) -> tuple[CatalogPose, ...]:
        """Concatenate groups in the given order, preserving internal order."""
        return tuple(pose for key in keys for pose in self._groups[key])

    def all_poses(self) -> tuple[CatalogPose, ...]:
        return self.compose(*self._groups.keys())

    def seed_rows(self) -> list[PoseSeedRow]:
        rows = []
        for key, poses in self._groups.items():
            for index, pose in enumerate(poses, start=1):
                rows.append(PoseSeedRow(
                    slug=pose.slug,
                    name=pose.name,
                    segment=segment_for_group(key, pose.name),
                    order_in_segment=index,
                    is_two_sided=pose.is_two_sided,
                ))
        return rows


def _s(name: str) -> CatalogPose:
    return CatalogPose(name, is_two_sided=False)


def _lr(name: str) -> CatalogPose:
    return CatalogPose(name, is_two_sided=True)


# ─── Canonical groups ────────────────────────────────────────────

SUN_SALUTATIONS = (
    _s("Surya Namaskar A"),
    _s("Surya Namaskar B"),
)

STANDING = (
    _s("Padangusthasana"),
    _s("Padahastasana"),
    _lr("Utthita Trikonasana"),
    _lr("Parivrtta Trikonasana"),
    _lr("Utthita Parsvakonasana"),
    _lr("Parivrtta Parsvakonasana"),
    _s("Prasarita Padottanasana A"),
    _s("Prasarita Padottanasana B"),
    _s("Prasarita Padottanasana C"),
    _s("Prasarita Padottanasana D"),
    _lr("Parsvottanasana"),
)

FINISHING = (
    _s("Urdhva Dhanurasana"),
    _s("Paschimottanasana"),
    _s("Salamba Sarvangasana"),
    _s("Halasana"),
    _s("Karnapidasana"),
    _s("Urdva Padmasana"),
    _s("Pindasana"),
    _s("Matsyasana"),
    _s("Uttana Padasana"),
    _s("Sirsasana A"),
    _s("Sirsasana B"),
    _s("Sirsasana C"),
    _s("Yoga Mudra Asana"),
    _s("Padmasana"),
    _s("Utpluthih"),
    _s("Savasana"),
)

PRIMARY_ONLY = (
    _lr("Utthita Hasta Padangusthasana"),
    _lr("Ardha Baddha Padmottanasana"),
    _s("Uttkatasana"),
    _lr("Virabhadrasana I"),
    _lr("Virabhadrasana II"),
    _s("Dandasana"),
    _s("Paschimottanasana A"),
    _s("Paschimottanasana B"),
    _s("Paschimottanasana C"),
    _s("Purvottanasana"),
    _lr("Ardha Baddha Padma Paschimottanasana"),
    _lr("Triang Mukha Eka Pada Paschimottanasana"),
    _lr("Janu Sirsasana A"),
    _lr("Janu Sirsasana B"),
    _lr("Janu Sirsasana C"),
    _lr("Marichyasana A"),
    _lr("Marichyasana B"),
    _lr("Marichyasana C"),
    _lr("Marichyasana D"),
    _s("Navasana"),
    _s("Bujapidasana"),
    _s("Kurmasana"),
    _s("Supta Kurmasana"),
    _s("Garbha Pindasana"),
    _s("Kukkutasana"),
    _s("Baddha Konasana A"),
    _s("Baddha Konasana B"),
    _s("Baddha Konasana C"),
    _s("Upavistha Konasana A"),
    _s("Upavistha Konasana B"),
    _s("Supta Konasana"),
    _lr("Supta Padangusthasana"),
    _s("Ubhaya Padangusthasana"),
    _s("Urdva Mukha Paschimottanasana"),
    _s("Setu Bandhasana"),
)

INTERMEDIATE_ONLY = (
    _s("Pasasana"),
    _s("Krounchasana"),
    _s("Shalabhasana A"),
    _s("Shalabhasana B"),
    _s("Bhekasana"),
    _s("Dhanurasana"),
    _lr("Parsva Dhanurasana"),
    _s("Ustrasana"),
    _s("Laghu Vajrasana"),
    _s("Kapotasana A"),
    _s("Kapotasana B"),
    _s("Supta Vajrasana"),
    _s("Bakasana A"),
    _s("Bakasana B"),
    _lr("Bharadvajasana"),
    _lr("Ardha Matsyendrasana"),
    _lr("Eka Pada Sirsasana"),
    _s("Dwi Pada Sirsasana"),
    _s("Tittibhasana A"),
    _s("Tittibhasana B"),
    _s("Tittibhasana C"),
    _s("Pincha Mayurasana"),
    _s("Karandavasana"),
    _s("Mayurasana"),
    _s("Nakrasana"),
    _lr("Vatayanasana"),
    _lr("Parighasana"),
    _lr("Gomukhasana A"),
    _lr("Gomukhasana B"),
    _lr("Supta Urdhva Pada Vajrasana"),
    _s("Muka Hasta Sirsasana A"),
    _s("Muka Hasta Sirsasana B"),
    _s("Muka Hasta Sirsasana C"),
    _s("Baddha Hasta Sirsasana A"),
    _s("Baddha Hasta Sirsasana B"),
    _s("Baddha Hasta Sirsasana C"),
    _s("Baddha Hasta Sirsasana D"),
)

ADVANCED_A_ONLY = (
    _lr("Vasisthasana"),
    _lr("Vishvamitrasana"),
    _lr("Kasyapasana"),
    _lr("Chakorasana"),
    _lr("Bhairvasana"),
    _lr("Skandasana"),
    _lr("Durvasasana"),
    _s("Urdhva Kukkutasana A"),
    _s("Urdhva Kukkutasana B"),
    _s("Urdhva Kukkutasana C"),
    _lr("Galavasana"),
    _lr("Eka Pada Bakasana A"),
    _lr("Eka Pada Bakasana B"),
    _lr("Koundinyanasana A"),
    _lr("Koundinyanasana B"),
    _lr("Astavakrasana A"),
    _lr("Astavakrasana B"),
    _lr("Purna Matsyendrasana"),
    _lr("Viranchyasana A"),
    _lr("Viranchyasana B"),
    _s("Viparita Dandasana"),
    _lr("Eka Pada Viparita Dandasana"),
    _s("Viparita Salabhasana"),
    _s("Ganda Bherundasana A"),
    _s("Ganda Bherundasana B"),
    _lr("Hanumanasana A"),
    _lr("Hanumanasana B"),
    _lr("Supta Trivikramasana"),
    _lr("Dighasana A"),
    _lr("Dighasana B"),
    _lr("Trivikramasana"),
    _lr("Natarajasana"),
    _s("Raja Kapotasana"),
    _lr("Eka Pada Raja kapotasana"),
)

ADVANCED_B_ONLY = (
    _s("Mula Bandhasana"),
    _s("Nahusasana A"),
    _s("Nahusasana B"),
    _s("Nahusasana C"),
    _s("Vrschikasana"),
    _s("Sayanasana"),
    _lr("Buddhasana"),
    _lr("Kapilasana"),
    _lr("Akarna Dhanurasana A"),
    _lr("Akarna Dhanurasana B"),
    _s("Padangustha Dhanurasana A"),
    _s("Padangustha Dhanurasana B"),
    _lr("Marichyasana E"),
    _lr("Marichyasana F"),
    _lr("Marichyasana G"),
    _lr("Marichyasana H"),
    _s("Tadasana"),
    _lr("Samanasana"),
    _lr("Punga Kukkutasana"),
    _lr("Parsva Bakasana"),
    _lr("Eka Pada Dhanurasana A"),
    _lr("Eka Pada Dhanurasana B"),
    _lr("Eka Pada Kapotasana A"),
    _lr("Eka Pada Kapotasana B"),
    _s("Paryangasana A"),
    _s("Paryangasana B"),
    _s("Parivrttasana A"),
    _s("Parivrttasana B"),
    _lr("Yoni Dandasana A"),
    _lr("Yoni Dandasana B"),
    _lr("Yoga Dandasana"),
    _lr("Bhuja Dandasana"),
    _lr("Parsva Dandasana"),
    _lr("Adho Dandasana"),
    _lr("Urdhva Dandasana"),
    _s("Sama Konasana"),
    _lr("Omkarasana"),
)

DEFAULT_CATALOG = PoseCatalog({
    CatalogGroup.SUN: SUN_SALUTATIONS,
    CatalogGroup.STANDING: STANDING,
    CatalogGroup.PRIMARY: PRIMARY_ONLY,
    CatalogGroup.INTERMEDIATE: INTERMEDIATE_ONLY,
    CatalogGroup.ADVANCED_A: ADVANCED_A_ONLY,
    CatalogGroup.ADVANCED_B: ADVANCED_B_ONLY,
    CatalogGroup.FINISHING: FINISHING,
})


# ─── Pre-composed series ─────────────────────────────────────────

def _series(name: str, description: str, block: CatalogGroup) -> SeriesDefinition:
    return SeriesDefinition(
        name=name,
        description=description,
        poses=DEFAULT_CATALOG.compose(
            CatalogGroup.STANDING, block, CatalogGroup.FINISHING,
        ),
    )


SERIES: tuple[SeriesDefinition, ...] = (
    _series(
        "Ashtanga Primary Series",
        "The first series of Ashtanga Yoga, also known as Yoga Chikitsa (Yoga Therapy).",
        CatalogGroup.PRIMARY,
    ),
    _series(
        "Ashtanga Intermediate Series",
        "The second series of Ashtanga Yoga, also known as Nadi Shodhana (Nerve Purification).",
        CatalogGroup.INTERMEDIATE,
    ),
    _series(
        "Ashtanga Advanced A Series",
        "The third series of Ashtanga Yoga, also known as Sthira Bhaga (Strength and Grace).",
        CatalogGroup.ADVANCED_A,
    ),
    _series(
        "Ashtanga Advanced B Series",
        "The fourth series of Ashtanga Yoga, also known as Sthira Bhaga (Strength and Grace).",
        CatalogGroup.ADVANCED_B,
    ),
)
