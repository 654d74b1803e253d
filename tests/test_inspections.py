# tests/test_inspections.py

"""
Tests for move-out inspections and the checklist.
"""

import pytest

from core.errors import AuthorizationError, RemoteError, StateError, ValidationError
from models.enums import ChecklistKey
from services.inspections import (
    create_inspection,
    finalize_inspection,
    get_inspection,
    list_inspections,
    save_checklist,
)
from services.move_out import submit_move_out_intention


ALL_YES = {key.value: {"yes_no": True} for key in ChecklistKey}


@pytest.fixture
def intended(fake_db, tenant_user):
    """tenancy-1 after the tenant has declared a move-out."""
    return submit_move_out_intention(
        tenant_user,
        tenancy_id="tenancy-1",
        planned_move_out_date="2026-06-30",
        rent_paid_up=True,
    )


@pytest.fixture
def draft(intended, coordinator_user):
    return create_inspection(coordinator_user, "tenancy-1", "room-1")


# -----------------------------------------------------
# Create
# -----------------------------------------------------
def test_create_inspection_moves_tenancy_to_draft(fake_db, draft):
    assert draft["status"] == "DRAFT"
    assert draft["created_by"] == "coord-1"
    assert fake_db.get("tenancies", "tenancy-1")["status"] == "MOVE_OUT_INSPECTION_DRAFT"


def test_create_requires_move_out_intention(fake_db, coordinator_user):
    with pytest.raises(StateError):
        create_inspection(coordinator_user, "tenancy-1", "room-1")
    assert fake_db.rows("inspections") == []


def test_create_rejects_mismatched_room(fake_db, intended, coordinator_user):
    with pytest.raises(ValidationError):
        create_inspection(coordinator_user, "tenancy-1", "room-2")


def test_create_requires_house_coordinator(fake_db, intended, other_coordinator_user):
    with pytest.raises(AuthorizationError):
        create_inspection(other_coordinator_user, "tenancy-1", "room-1")


def test_create_rolls_back_when_status_write_fails(fake_db, intended, coordinator_user):
    fake_db.fail_on.add(("update", "tenancies"))

    with pytest.raises(RemoteError):
        create_inspection(coordinator_user, "tenancy-1", "room-1")

    assert fake_db.rows("inspections") == []


# -----------------------------------------------------
# Save checklist (draft)
# -----------------------------------------------------
def test_no_answer_without_description_is_rejected(fake_db, draft, coordinator_user):
    with pytest.raises(ValidationError) as exc:
        save_checklist(
            coordinator_user,
            draft["id"],
            {"no_damage": {"yes_no": False, "description": ""}},
        )

    assert 'Please provide a description for "No damage/stain caused" (no_damage)' == str(exc.value)
    assert fake_db.rows("inspection_checklist_items") == []


def test_save_replaces_previous_rows(fake_db, draft, coordinator_user):
    save_checklist(
        coordinator_user,
        draft["id"],
        {
            "rent_paid": {"yes_no": True},
            "no_damage": {"yes_no": False, "description": "Cracked tile"},
        },
    )
    assert len(fake_db.rows("inspection_checklist_items", inspection_id=draft["id"])) == 2

    save_checklist(coordinator_user, draft["id"], {"cleaned": {"yes_no": True}})

    rows = fake_db.rows("inspection_checklist_items", inspection_id=draft["id"])
    assert [r["key"] for r in rows] == ["cleaned"]


def test_description_ignored_for_yes(fake_db, draft, coordinator_user):
    rows = save_checklist(
        coordinator_user, draft["id"], {"keys_returned": {"yes_no": True, "description": "n/a"}}
    )
    assert rows[0]["description_if_no"] is None


def test_unknown_checklist_key(fake_db, draft, coordinator_user):
    with pytest.raises(ValidationError):
        save_checklist(coordinator_user, draft["id"], {"pets_removed": {"yes_no": True}})


def test_insert_failure_restores_previous_checklist(fake_db, draft, coordinator_user):
    save_checklist(coordinator_user, draft["id"], {"rent_paid": {"yes_no": True}})
    fake_db.fail_once.add(("insert", "inspection_checklist_items"))

    with pytest.raises(RemoteError):
        save_checklist(coordinator_user, draft["id"], {"cleaned": {"yes_no": True}})

    rows = fake_db.rows("inspection_checklist_items", inspection_id=draft["id"])
    assert [r["key"] for r in rows] == ["rent_paid"]


# -----------------------------------------------------
# Finalize
# -----------------------------------------------------
def test_finalize_requires_every_item(fake_db, draft, coordinator_user):
    partial = dict(ALL_YES)
    partial.pop("bank_details")

    with pytest.raises(ValidationError) as exc:
        finalize_inspection(coordinator_user, draft["id"], partial)

    assert "bank_details" in str(exc.value)
    assert fake_db.get("inspections", draft["id"])["status"] == "DRAFT"
    assert fake_db.get("tenancies", "tenancy-1")["status"] == "MOVE_OUT_INSPECTION_DRAFT"


def test_finalize_locks_inspection(fake_db, sent_notifications, draft, coordinator_user):
    final = finalize_inspection(coordinator_user, draft["id"], ALL_YES)

    assert final["status"] == "FINAL"
    assert final["finalised_at"]
    assert fake_db.get("tenancies", "tenancy-1")["status"] == "MOVE_OUT_INSPECTION_FINAL"
    assert len(fake_db.rows("inspection_checklist_items", inspection_id=draft["id"])) == len(ChecklistKey)
    assert sent_notifications["email"] == [
        "Move-out intention submitted",
        "Move-out inspection finalized",
    ]


def test_finalize_merges_saved_answers(fake_db, draft, coordinator_user):
    saved = dict(ALL_YES)
    saved["no_damage"] = {"yes_no": False, "description": "Stain on carpet"}
    save_checklist(coordinator_user, draft["id"], saved)

    final = finalize_inspection(coordinator_user, draft["id"])

    assert final["status"] == "FINAL"
    row = fake_db.rows("inspection_checklist_items", inspection_id=draft["id"], key="no_damage")[0]
    assert row["yes_no"] is False
    assert row["description_if_no"] == "Stain on carpet"


def test_finalize_twice_is_a_state_error(fake_db, draft, coordinator_user):
    finalize_inspection(coordinator_user, draft["id"], ALL_YES)
    before = sorted(
        (r["key"], r["yes_no"], r.get("description_if_no"))
        for r in fake_db.rows("inspection_checklist_items", inspection_id=draft["id"])
    )

    with pytest.raises(StateError):
        finalize_inspection(coordinator_user, draft["id"], {"cleaned": {"yes_no": False, "description": "x"}})

    after = sorted(
        (r["key"], r["yes_no"], r.get("description_if_no"))
        for r in fake_db.rows("inspection_checklist_items", inspection_id=draft["id"])
    )
    assert after == before
    assert fake_db.get("inspections", draft["id"])["status"] == "FINAL"


def test_final_inspection_cannot_be_edited(fake_db, draft, coordinator_user):
    finalize_inspection(coordinator_user, draft["id"], ALL_YES)

    with pytest.raises(StateError):
        save_checklist(coordinator_user, draft["id"], {"cleaned": {"yes_no": False, "description": "dusty"}})

    assert fake_db.rows("inspection_checklist_items", inspection_id=draft["id"], key="cleaned")[0]["yes_no"] is True


def test_finalize_reverts_when_status_write_fails(fake_db, draft, coordinator_user):
    fake_db.fail_on.add(("update", "tenancies"))

    with pytest.raises(RemoteError):
        finalize_inspection(coordinator_user, draft["id"], ALL_YES)

    inspection = fake_db.get("inspections", draft["id"])
    assert inspection["status"] == "DRAFT"
    assert inspection["finalised_at"] is None


# -----------------------------------------------------
# Read side
# -----------------------------------------------------
def test_get_inspection_presents_every_item(fake_db, draft, coordinator_user):
    save_checklist(coordinator_user, draft["id"], {"cleaned": {"yes_no": False, "description": "Oven"}})

    detail = get_inspection(coordinator_user, draft["id"])

    assert [item["key"] for item in detail["checklist"]] == [k.value for k in ChecklistKey]
    cleaned = next(i for i in detail["checklist"] if i["key"] == "cleaned")
    assert cleaned["yes_no"] is False
    assert cleaned["description"] == "Oven"


def test_list_inspections_scoped(fake_db, draft, coordinator_user, other_coordinator_user, admin_user):
    assert [i["id"] for i in list_inspections(coordinator_user)] == [draft["id"]]
    assert list_inspections(other_coordinator_user) == []
    assert len(list_inspections(admin_user)) == 1


def test_finalize_with_unexplained_no_stays_draft(fake_db, draft, coordinator_user):
    items = dict(ALL_YES)
    items["no_damage"] = {"yes_no": False, "description": ""}

    with pytest.raises(ValidationError) as exc:
        finalize_inspection(coordinator_user, draft["id"], items)

    assert "no_damage" in str(exc.value)
    assert fake_db.get("inspections", draft["id"])["status"] == "DRAFT"
    assert fake_db.rows("inspection_checklist_items") == []
