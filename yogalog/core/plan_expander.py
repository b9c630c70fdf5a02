"""Plan Expander — turns a practice-type selection into an ordered pose plan.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Every plan starts with the full sun + standing groups and ends with finishing
    - Body blocks keep catalog order; a cutoff keeps the prefix up to and including it
    - Sun poses resolve SUN_A/SUN_B by name; other poses take their group's segment
      unless a custom block overrides the display segment

Design Decisions:
    - Preset recipes as a table (PRESET_RECIPES) instead of a switch: one place to
      read which blocks and which cutoff field every practice type uses
    - Selections are frozen dataclasses: the HTTP schemas convert into them, so the
      expander never depends on Pydantic
"""

from dataclasses import dataclass

from yogalog.core.domain_types import (
    BODY_BLOCKS, CatalogGroup, PracticeType, Segment,
)
from yogalog.core.errors import (
    CutoffNotFoundError, InvalidRangeError, UnknownSegmentError,
    ValidationFailedError,
)
from yogalog.core.pose_catalog import (
    DEFAULT_CATALOG, CatalogPose, PoseCatalog, segment_for_group,
)
from yogalog.core.slugs import slugify


@dataclass(frozen=True)
class PlanItem:
    """One pose of the expanded plan, before side splitting."""
    name: str
    slug: str
    segment: Segment


@dataclass(frozen=True)
class PresetSelection:
    practice_type: PracticeType
    half_primary_up_to_slug: str | None = None
    intermediate_up_to_slug: str | None = None
    advanced_up_to_slug: str | None = None


@dataclass(frozen=True)
class CustomBlock:
    segment: CatalogGroup | str
    up_to_slug: str | None = None
    from_slug: str | None = None
    display_segment: Segment | None = None


@dataclass(frozen=True)
class CustomSelection:
    blocks: tuple[CustomBlock, ...]


Selection = PresetSelection | CustomSelection


@dataclass(frozen=True)
class _BlockRecipe:
    group: CatalogGroup
    cutoff_field: str | None = None
    default_cutoff: str | None = None


_HALF_PRIMARY = _BlockRecipe(
    CatalogGroup.PRIMARY, "half_primary_up_to_slug", "navasana",
)
_PARTIAL_INTERMEDIATE = _BlockRecipe(
    CatalogGroup.INTERMEDIATE, "intermediate_up_to_slug",
)

PRESET_RECIPES: dict[PracticeType, tuple[_BlockRecipe, ...]] = {
    PracticeType.FULL_PRIMARY: (_BlockRecipe(CatalogGroup.PRIMARY),),
    PracticeType.HALF_PRIMARY: (_HALF_PRIMARY,),
    PracticeType.HALF_PRIMARY_PLUS_INTERMEDIATE: (
        _HALF_PRIMARY, _PARTIAL_INTERMEDIATE,
    ),
    PracticeType.PRIMARY_PLUS_INTERMEDIATE: (
        _BlockRecipe(CatalogGroup.PRIMARY), _PARTIAL_INTERMEDIATE,
    ),
    PracticeType.FULL_INTERMEDIATE: (_BlockRecipe(CatalogGroup.INTERMEDIATE),),
    PracticeType.INTERMEDIATE_PLUS_ADVANCED_A: (
        _BlockRecipe(CatalogGroup.INTERMEDIATE),
        _BlockRecipe(CatalogGroup.ADVANCED_A, "advanced_up_to_slug"),
    ),
    PracticeType.INTERMEDIATE_PLUS_ADVANCED_B: (
        _BlockRecipe(CatalogGroup.INTERMEDIATE),
        _BlockRecipe(CatalogGroup.ADVANCED_B, "advanced_up_to_slug"),
    ),
    PracticeType.ADVANCED_A: (_BlockRecipe(CatalogGroup.ADVANCED_A),),
    PracticeType.ADVANCED_B: (_BlockRecipe(CatalogGroup.ADVANCED_B),),
}

_CUTOFF_FIELDS = (
    "half_primary_up_to_slug", "intermediate_up_to_slug", "advanced_up_to_slug",
)


# ─── Slicing ─────────────────────────────────────────────────────

def slice_by_slug(
    poses: tuple[CatalogPose, ...],
    group: CatalogGroup,
    up_to_slug: str | None = None,
    from_slug: str | None = None,
) -> tuple[CatalogPose, ...]:
    """Slice a group between two slugs, both inclusive. None means open-ended."""
    slugs = [p.slug for p in poses]
    start = 0
    end = len(poses) - 1
    if from_slug:
        wanted = slugify(from_slug)
        if wanted not in slugs:
            raise CutoffNotFoundError(from_slug, group.value)
        start = slugs.index(wanted)
    if up_to_slug:
        wanted = slugify(up_to_slug)
        if wanted not in slugs:
            raise CutoffNotFoundError(up_to_slug, group.value)
        end = slugs.index(wanted)
    if end < start:
        raise InvalidRangeError(from_slug or "", up_to_slug or "", group.value)
    return poses[start:end + 1]


def to_plan_items(
    group: CatalogGroup,
    poses: tuple[CatalogPose, ...],
    display_segment: Segment | None = None,
) -> list[PlanItem]:
    return [
        PlanItem(
            name=p.name,
            slug=p.slug,
            segment=display_segment or segment_for_group(group, p.name),
        )
        for p in poses
    ]


def _bookends(catalog: PoseCatalog) -> tuple[list[PlanItem], list[PlanItem]]:
    opening = (
        to_plan_items(CatalogGroup.SUN, catalog.group(CatalogGroup.SUN))
        + to_plan_items(CatalogGroup.STANDING, catalog.group(CatalogGroup.STANDING))
    )
    closing = to_plan_items(
        CatalogGroup.FINISHING, catalog.group(CatalogGroup.FINISHING),
    )
    return opening, closing


# ─── Expansion ───────────────────────────────────────────────────

def expand_preset(
    selection: PresetSelection, catalog: PoseCatalog = DEFAULT_CATALOG,
) -> list[PlanItem]:
    if selection.practice_type is PracticeType.CUSTOM:
        raise ValidationFailedError(
            "CUSTOM practice type requires explicit blocks", field="practice_type",
        )
    recipes = PRESET_RECIPES[selection.practice_type]

    used_fields = {r.cutoff_field for r in recipes if r.cutoff_field}
    for name in _CUTOFF_FIELDS:
        if getattr(selection, name) and name not in used_fields:
            raise ValidationFailedError(
                f"{name} does not apply to {selection.practice_type.value}",
                field=name,
            )

    opening, closing = _bookends(catalog)
    middle: list[PlanItem] = []
    for recipe in recipes:
        cutoff = None
        if recipe.cutoff_field:
            cutoff = getattr(selection, recipe.cutoff_field) or recipe.default_cutoff
        poses = slice_by_slug(catalog.group(recipe.group), recipe.group, cutoff)
        middle.extend(to_plan_items(recipe.group, poses))
    return opening + middle + closing


def _parse_block_group(segment: CatalogGroup | str) -> CatalogGroup:
    raw = segment.value if isinstance(segment, CatalogGroup) else str(segment)
    try:
        group = CatalogGroup(raw.upper())
    except ValueError:
        raise UnknownSegmentError(raw) from None
    if group not in BODY_BLOCKS:
        raise UnknownSegmentError(raw)
    return group


def expand_custom(
    selection: CustomSelection, catalog: PoseCatalog = DEFAULT_CATALOG,
) -> list[PlanItem]:
    if not selection.blocks:
        raise ValidationFailedError(
            "Custom practice requires at least one block", field="blocks",
        )
    opening, closing = _bookends(catalog)
    middle: list[PlanItem] = []
    for block in selection.blocks:
        group = _parse_block_group(block.segment)
        poses = slice_by_slug(
            catalog.group(group), group, block.up_to_slug, block.from_slug,
        )
        middle.extend(to_plan_items(group, poses, block.display_segment))
    return opening + middle + closing


def expand(
    selection: Selection, catalog: PoseCatalog = DEFAULT_CATALOG,
) -> list[PlanItem]:
    """Expand any selection into the ordered plan."""
    if isinstance(selection, CustomSelection):
        return expand_custom(selection, catalog)
    return expand_preset(selection, catalog)


# ─── Labels ──────────────────────────────────────────────────────

def _humanize(value: str) -> str:
    return value.replace("_", " ").lower().capitalize()


def default_label(selection: Selection) -> str:
    """Human-readable session label from the practice type and cutoffs."""
    if isinstance(selection, CustomSelection):
        parts = []
        for block in selection.blocks:
            raw = block.segment.value if isinstance(block.segment, CatalogGroup) else block.segment
            part = _humanize(str(raw))
            if block.up_to_slug:
                part += f" to {block.up_to_slug}"
            parts.append(part)
        return f"Custom ({' + '.join(parts)})" if parts else "Custom"

    base = _humanize(selection.practice_type.value)
    extras = []
    if selection.half_primary_up_to_slug:
        extras.append(f"to {selection.half_primary_up_to_slug}")
    if selection.intermediate_up_to_slug:
        extras.append(f"+ Int to {selection.intermediate_up_to_slug}")
    if selection.advanced_up_to_slug:
        extras.append(f"+ Adv to {selection.advanced_up_to_slug}")
    return f"{base} ({' '.join(extras)})" if extras else base
