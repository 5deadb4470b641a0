"""
Mapping maintenance: inventory, purge of mappings without a QR code, legacy passage set repair.
"""
import uuid

import pytest

from conftest import make_passage_set, make_raw_mapping, make_textbook
from edubot.models import PassageSet, TextbookPassageMapping
from edubot.models.passage_set import LEGACY_COLUMNS
from edubot.services import maintenance, mappings


@pytest.fixture
def mixed_mappings(db):
    """Ids of one complete mapping ("ABC"), one with an empty code, one with no code at all."""
    tb = make_textbook(db)
    sets = [make_passage_set(db, title=f"지문 {i}") for i in range(3)]
    keep = make_raw_mapping(db, tb, sets[0], 1, qr_code="ABC", qr_code_url="http://localhost:3000/chat/ABC")
    empty = make_raw_mapping(db, tb, sets[1], 2, qr_code="")
    missing = make_raw_mapping(db, tb, sets[2], 3)
    # ids are read here: the purge deletes the rows behind these instances
    return keep.id, empty.id, missing.id


def test_purge_leaves_only_mappings_with_qr(db, mixed_mappings):
    keep_id, empty_id, missing_id = mixed_mappings
    result = maintenance.purge_mappings_without_qr(db)
    assert result.deleted_count == 2
    assert not result.dry_run
    assert set(result.matched_ids) == {empty_id, missing_id}
    db.expire_all()
    remaining = db.query(TextbookPassageMapping).all()
    assert [m.id for m in remaining] == [keep_id]
    assert all(m.qr_code for m in remaining)


def test_purge_is_idempotent(db, mixed_mappings):
    assert maintenance.purge_mappings_without_qr(db).deleted_count == 2
    second = maintenance.purge_mappings_without_qr(db)
    assert second.deleted_count == 0
    assert second.matched_ids == []


def test_purge_dry_run_writes_nothing(db, mixed_mappings):
    _, empty_id, missing_id = mixed_mappings
    result = maintenance.purge_mappings_without_qr(db, dry_run=True)
    assert result.dry_run
    assert result.deleted_count == 0
    assert set(result.matched_ids) == {empty_id, missing_id}
    assert db.query(TextbookPassageMapping).count() == 3


def test_report_current_mappings_orders_by_textbook_then_order(db, mixed_mappings):
    rows = maintenance.report_current_mappings(db)
    assert [r["order"] for r in rows] == [1, 2, 3]
    assert rows[0]["qr_code"] == "ABC"
    assert rows[2]["qr_code"] is None
    assert {"id", "textbook_id", "passage_set_id", "order", "qr_code", "qr_code_url"} <= set(rows[0])


def test_list_all_mappings_inventory(db, mixed_mappings):
    inventory = maintenance.list_all_mappings(db)
    assert len(inventory.mappings) == 3
    for table in ("passagesets", "textbooks", "textbook_passage_mappings", "systemprompts", "systemPromptVersions"):
        assert table in inventory.collections
    assert [t["title"] for t in inventory.textbooks] == ["수능특강 국어"]


def test_detect_legacy_passage_sets(db):
    tb = make_textbook(db)
    legacy = make_passage_set(db, title="old", textbook_id=tb.id, set_number=2)
    make_passage_set(db, title="new")
    assert [ps.id for ps in maintenance.detect_legacy_passage_sets(db)] == [legacy.id]


def test_strip_legacy_fields_keeps_other_columns(session_factory):
    db = session_factory()
    tb = make_textbook(db)
    ps = make_passage_set(db, title="legacy", textbook_id=tb.id, set_number=2)
    before = maintenance.row_to_dict(ps)
    db.close()

    db = session_factory()
    result = maintenance.strip_legacy_fields(db)
    db.close()
    assert result.stripped_ids == [ps.id]
    assert result.stripped_count == 1

    db = session_factory()
    after = maintenance.row_to_dict(db.get(PassageSet, ps.id))
    for col in LEGACY_COLUMNS:
        assert after[col] is None
    for col, value in before.items():
        if col not in LEGACY_COLUMNS:
            assert after[col] == value, col
    assert maintenance.detect_legacy_passage_sets(db) == []
    db.close()


def test_strip_legacy_fields_creates_replacement_mapping(db):
    tb = make_textbook(db)
    ps = make_passage_set(db, textbook_id=tb.id, set_number=2)
    result = maintenance.strip_legacy_fields(db)
    assert len(result.created_mappings) == 1
    m = db.get(TextbookPassageMapping, result.created_mappings[0])
    assert m.textbook_id == tb.id
    assert m.passage_set_id == ps.id
    assert m.order == 2
    assert m.has_qr_code
    assert m.qr_code_url.endswith(m.qr_code)


def test_strip_legacy_fields_uses_next_order_when_taken(db):
    tb = make_textbook(db)
    other = make_passage_set(db, title="mapped")
    make_raw_mapping(db, tb, other, 1, qr_code="ABC")
    ps = make_passage_set(db, textbook_id=tb.id, set_number=1)
    result = maintenance.strip_legacy_fields(db)
    m = db.get(TextbookPassageMapping, result.created_mappings[0])
    assert m.passage_set_id == ps.id
    assert m.order == 2


def test_strip_legacy_fields_keeps_existing_mapping(db):
    tb = make_textbook(db)
    ps = make_passage_set(db, textbook_id=tb.id, set_number=1)
    make_raw_mapping(db, tb, ps, 1, qr_code="ABC")
    result = maintenance.strip_legacy_fields(db)
    assert result.created_mappings == []
    assert result.existing_mappings == [ps.id]
    assert db.query(TextbookPassageMapping).count() == 1


def test_strip_legacy_fields_orphaned_textbook(db):
    ps = make_passage_set(db, textbook_id=uuid.uuid4(), set_number=3)
    result = maintenance.strip_legacy_fields(db)
    assert result.orphaned_ids == [ps.id]
    assert result.stripped_ids == [ps.id]
    assert db.query(TextbookPassageMapping).count() == 0


def test_strip_legacy_fields_without_ensure(db):
    tb = make_textbook(db)
    make_passage_set(db, textbook_id=tb.id, set_number=1)
    result = maintenance.strip_legacy_fields(db, ensure_mappings=False)
    assert result.stripped_count == 1
    assert result.created_mappings == []
    assert db.query(TextbookPassageMapping).count() == 0


def test_strip_legacy_fields_nothing_to_do(db):
    make_passage_set(db)
    result = maintenance.strip_legacy_fields(db)
    assert result.stripped_count == 0


def test_repaired_mapping_with_large_set_number_resolves(db):
    tb = make_textbook(db)
    ps = make_passage_set(db, textbook_id=tb.id, set_number=1200)
    result = maintenance.strip_legacy_fields(db)
    m = db.get(TextbookPassageMapping, result.created_mappings[0])
    assert m.order == 1200
    resolved = mappings.resolve_qr_code(db, m.qr_code)
    assert resolved["qr_type"] == "mapping"
    assert resolved["passage_set"]["id"] == ps.id
    assert resolved["passage_set"]["order"] == 1200
