"""Practice session routes — creation, reads, edits and ownership scoping.

Invariants:
    - missing identity header → 401 before any DB work
    - another user's session is a 404, never a 403
    - validation failures use the structured error envelope
"""

from uuid import uuid4

from tests.services.session_helpers import (
    OTHER_USER, USER, create_preset, create_short_custom,
)


# ─── Creation ────────────────────────────────────────────────────

async def test_create_preset_returns_ordered_cards(client, seeded_poses):
    body = await create_preset(client, "FULL_PRIMARY", label="Monday")
    assert body["status"] == "DRAFT"
    assert body["label"] == "Monday"
    assert body["overall_score"] is None
    cards = body["score_cards"]
    assert len(cards) == 83
    assert [c["order_in_session"] for c in cards] == list(range(1, 84))
    assert cards[0]["pose_slug"] == "surya-namaskar-a"
    assert cards[0]["segment"] == "SUN_A"
    assert cards[1]["segment"] == "SUN_B"
    assert cards[-1]["pose_slug"] == "savasana"


async def test_create_half_primary_with_cutoff(client, seeded_poses):
    body = await create_preset(
        client, "HALF_PRIMARY", half_primary_up_to_slug="marichyasana-d",
    )
    primary = [c for c in body["score_cards"] if c["segment"] == "PRIMARY"]
    assert primary[-1]["pose_slug"] == "marichyasana-d"
    assert body["label"] == "Half primary (to marichyasana-d)"


async def test_create_requires_identity(client, seeded_poses):
    res = await client.post(
        "/api/v1/sessions/preset", json={"practice_type": "FULL_PRIMARY"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


async def test_blank_identity_rejected(client, seeded_poses):
    res = await client.post(
        "/api/v1/sessions/preset", json={"practice_type": "FULL_PRIMARY"},
        headers={"X-User-Id": "   "},
    )
    assert res.status_code == 401


async def test_unknown_cutoff_is_400(client, seeded_poses):
    res = await client.post(
        "/api/v1/sessions/preset",
        json={"practice_type": "HALF_PRIMARY", "half_primary_up_to_slug": "nope"},
        headers=USER,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "CUTOFF_NOT_FOUND"


async def test_custom_with_unknown_segment_is_400(client, seeded_poses):
    res = await client.post(
        "/api/v1/sessions/custom",
        json={"blocks": [{"segment": "FINISHING"}]},
        headers=USER,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "UNKNOWN_SEGMENT"


async def test_custom_with_no_blocks_is_400(client, seeded_poses):
    res = await client.post(
        "/api/v1/sessions/custom", json={"blocks": []}, headers=USER,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_preset_body_rejects_custom_type(client, seeded_poses):
    res = await client.post(
        "/api/v1/sessions/preset", json={"practice_type": "CUSTOM"}, headers=USER,
    )
    assert res.status_code == 400


async def test_missing_catalog_is_500_missing_reference_data(client):
    res = await client.post(
        "/api/v1/sessions/preset", json={"practice_type": "FULL_PRIMARY"},
        headers=USER,
    )
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "MISSING_REFERENCE_DATA"
    assert error["severity"] == "critical"
    assert "navasana" in error["details"]["missing_slugs"]

    listed = await client.get("/api/v1/sessions", headers=USER)
    assert listed.json()["sessions"] == []


# ─── Reads ───────────────────────────────────────────────────────

async def test_get_session_returns_cards(client, seeded_poses):
    created = await create_short_custom(client)
    res = await client.get(f"/api/v1/sessions/{created['id']}", headers=USER)
    assert res.status_code == 200
    assert len(res.json()["score_cards"]) == 39


async def test_other_users_session_is_not_found(client, seeded_poses):
    created = await create_short_custom(client)
    res = await client.get(f"/api/v1/sessions/{created['id']}", headers=OTHER_USER)
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_unknown_session_is_not_found(client, seeded_poses):
    res = await client.get(f"/api/v1/sessions/{uuid4()}", headers=USER)
    assert res.status_code == 404


async def test_list_is_scoped_and_newest_first(client, seeded_poses):
    older = await create_preset(client, date="2026-01-01T07:00:00Z")
    newer = await create_preset(client, date="2026-02-01T07:00:00Z")
    await create_preset(client, headers=OTHER_USER)

    res = await client.get("/api/v1/sessions", headers=USER)
    ids = [s["id"] for s in res.json()["sessions"]]
    assert ids == [newer["id"], older["id"]]


async def test_list_filters_and_paginates(client, seeded_poses):
    await create_preset(client, date="2026-01-01T07:00:00Z")
    jan15 = await create_preset(client, date="2026-01-15T07:00:00Z")
    await create_preset(client, date="2026-02-01T07:00:00Z")

    res = await client.get(
        "/api/v1/sessions",
        params={"from": "2026-01-10T00:00:00Z", "to": "2026-01-20T00:00:00Z"},
        headers=USER,
    )
    assert [s["id"] for s in res.json()["sessions"]] == [jan15["id"]]

    page = await client.get(
        "/api/v1/sessions", params={"limit": 1, "offset": 1}, headers=USER,
    )
    body = page.json()
    assert [s["id"] for s in body["sessions"]] == [jan15["id"]]
    assert body["pagination"] == {"limit": 1, "offset": 1}


async def test_list_status_filter(client, seeded_poses):
    await create_preset(client)
    res = await client.get(
        "/api/v1/sessions", params={"status": "PUBLISHED"}, headers=USER,
    )
    assert res.json()["sessions"] == []


async def test_list_rejects_inverted_range(client, seeded_poses):
    res = await client.get(
        "/api/v1/sessions",
        params={"from": "2026-02-01T00:00:00Z", "to": "2026-01-01T00:00:00Z"},
        headers=USER,
    )
    assert res.status_code == 400


async def test_list_accepts_mixed_aware_and_naive_bounds(client, seeded_poses):
    jan15 = await create_preset(client, date="2026-01-15T07:00:00Z")

    res = await client.get(
        "/api/v1/sessions",
        params={"from": "2026-01-01T00:00:00Z", "to": "2026-02-01T00:00:00"},
        headers=USER,
    )
    assert res.status_code == 200
    assert [s["id"] for s in res.json()["sessions"]] == [jan15["id"]]

    inverted = await client.get(
        "/api/v1/sessions",
        params={"from": "2026-02-01T00:00:00", "to": "2026-01-01T00:00:00+02:00"},
        headers=USER,
    )
    assert inverted.status_code == 400


# ─── Detail edits ────────────────────────────────────────────────

async def test_patch_session_details(client, seeded_poses):
    created = await create_short_custom(client)
    res = await client.patch(
        f"/api/v1/sessions/{created['id']}",
        json={"energy_level": 7, "mood": "calm", "duration_minutes": 75},
        headers=USER,
    )
    assert res.status_code == 200
    body = res.json()
    assert (body["energy_level"], body["mood"], body["duration_minutes"]) == (7, "calm", 75)
    assert body["status"] == "DRAFT"


async def test_patch_rejects_energy_out_of_range(client, seeded_poses):
    created = await create_short_custom(client)
    res = await client.patch(
        f"/api/v1/sessions/{created['id']}", json={"energy_level": 0}, headers=USER,
    )
    assert res.status_code == 400


async def test_patch_empty_body_rejected(client, seeded_poses):
    created = await create_short_custom(client)
    res = await client.patch(f"/api/v1/sessions/{created['id']}", json={}, headers=USER)
    assert res.status_code == 400


async def test_patch_other_users_session_is_not_found(client, seeded_poses):
    created = await create_short_custom(client)
    res = await client.patch(
        f"/api/v1/sessions/{created['id']}", json={"mood": "x"}, headers=OTHER_USER,
    )
    assert res.status_code == 404


# ─── Summary ─────────────────────────────────────────────────────

async def test_summary_of_fresh_session(client, seeded_poses):
    created = await create_short_custom(client)
    res = await client.get(f"/api/v1/sessions/{created['id']}/summary", headers=USER)
    assert res.status_code == 200
    body = res.json()
    assert body["total"] == 39
    assert body["incomplete"] == 39
    assert body["first_incomplete_score_card_id"] == created["score_cards"][0]["id"]
    assert body["pain_hot_spots"] == []
