"""
Mapping maintenance: inspect the mapping table, purge mappings without a QR identifier,
and move legacy passage sets (textbook_id / set_number on the row) onto TextbookPassageMapping.

All functions take the session explicitly; destructive ones commit their own single transaction.
"""
import logging
from dataclasses import dataclass, field

from sqlalchemy import delete, inspect, or_, select, update
from sqlalchemy.orm import Session

from edubot.errors import translate_store_errors
from edubot.models import PassageSet, Textbook, TextbookPassageMapping
from edubot.services import mappings as mapping_service

logger = logging.getLogger(__name__)


@dataclass
class MappingInventory:
    mappings: list[dict]
    collections: list[str]
    textbooks: list[dict]


@dataclass
class PurgeResult:
    deleted_count: int
    matched_ids: list = field(default_factory=list)
    dry_run: bool = False


@dataclass
class LegacyRepairResult:
    stripped_ids: list = field(default_factory=list)
    created_mappings: list = field(default_factory=list)  # mapping ids
    existing_mappings: list = field(default_factory=list)  # passage set ids already mapped
    orphaned_ids: list = field(default_factory=list)  # legacy textbook no longer exists

    @property
    def stripped_count(self) -> int:
        return len(self.stripped_ids)


def row_to_dict(obj) -> dict:
    """Column values of a mapped row, keyed by column name."""
    return {c.key: getattr(obj, c.key) for c in inspect(obj).mapper.column_attrs}


def _without_qr():
    return or_(TextbookPassageMapping.qr_code.is_(None), TextbookPassageMapping.qr_code == "")


def report_current_mappings(db: Session) -> list[dict]:
    """Every mapping row, verbatim, ordered by textbook then order."""
    with translate_store_errors(db):
        rows = db.scalars(
            select(TextbookPassageMapping).order_by(TextbookPassageMapping.textbook_id, TextbookPassageMapping.order)
        ).all()
        return [row_to_dict(m) for m in rows]


def list_all_mappings(db: Session) -> MappingInventory:
    """Read-only snapshot: all mappings, every table in the store, and textbook ids/titles."""
    with translate_store_errors(db):
        collections = sorted(inspect(db.get_bind()).get_table_names())
        textbooks = [
            {"id": tb_id, "title": title}
            for tb_id, title in db.execute(select(Textbook.id, Textbook.title).order_by(Textbook.title))
        ]
    return MappingInventory(mappings=report_current_mappings(db), collections=collections, textbooks=textbooks)


def purge_mappings_without_qr(db: Session, dry_run: bool = False) -> PurgeResult:
    """
    Delete every mapping whose qr_code is NULL or empty, in one bulk DELETE.
    dry_run returns what would be deleted and writes nothing.
    """
    with translate_store_errors(db):
        matched = list(db.scalars(select(TextbookPassageMapping.id).where(_without_qr())))
        if dry_run:
            logger.info("Dry run: %s mapping(s) without QR would be deleted", len(matched))
            return PurgeResult(deleted_count=0, matched_ids=matched, dry_run=True)
        result = db.execute(delete(TextbookPassageMapping).where(_without_qr()))
        db.commit()
    deleted = result.rowcount if result.rowcount is not None and result.rowcount >= 0 else len(matched)
    logger.info("Deleted %s mapping(s) without QR codes", deleted)
    return PurgeResult(deleted_count=deleted, matched_ids=matched)


def detect_legacy_passage_sets(db: Session) -> list[PassageSet]:
    """Passage sets still carrying the legacy textbook_id link."""
    with translate_store_errors(db):
        return list(db.scalars(select(PassageSet).where(PassageSet.textbook_id.is_not(None))))


def _ensure_mapping(db: Session, ps: PassageSet, result: LegacyRepairResult) -> None:
    """Verify or create the mapping equivalent to ps's legacy link (flushes, does not commit)."""
    if not db.get(Textbook, ps.textbook_id):
        logger.warning("Legacy passage set %s points at missing textbook %s; link dropped", ps.id, ps.textbook_id)
        result.orphaned_ids.append(ps.id)
        return
    if mapping_service.find_mapping(db, ps.textbook_id, ps.id):
        result.existing_mappings.append(ps.id)
        return
    order = ps.set_number
    if not order or order < 1 or not mapping_service.order_is_free(db, ps.textbook_id, order):
        order = mapping_service.next_order(db, ps.textbook_id)
    mapping = mapping_service.new_mapping(ps.textbook_id, ps.id, order)
    db.add(mapping)
    db.flush()
    result.created_mappings.append(mapping.id)
    logger.info("Created mapping %s for legacy passage set %s (textbook %s, order %s)", mapping.id, ps.id, ps.textbook_id, order)


def strip_legacy_fields(db: Session, ensure_mappings: bool = True) -> LegacyRepairResult:
    """
    Clear textbook_id and set_number on every legacy passage set; other columns are untouched.
    With ensure_mappings, the replacement mapping is verified or created first, in the same
    transaction. Any failure rolls the whole repair back.
    """
    result = LegacyRepairResult()
    with translate_store_errors(db):
        legacy = list(db.scalars(select(PassageSet).where(PassageSet.textbook_id.is_not(None))))
        if not legacy:
            return result
        if ensure_mappings:
            for ps in legacy:
                _ensure_mapping(db, ps, result)
        ids = [ps.id for ps in legacy]
        db.execute(
            update(PassageSet)
            .where(PassageSet.id.in_(ids))
            .values(textbook_id=None, set_number=None, updated_at=PassageSet.updated_at)
            .execution_options(synchronize_session="fetch")
        )
        db.commit()
    result.stripped_ids = ids
    logger.info("Removed legacy textbook_id/set_number from %s passage set(s)", len(ids))
    return result
