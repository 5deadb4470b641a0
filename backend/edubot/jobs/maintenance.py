"""
Maintenance jobs run from backend/scripts: one store session per process, a linear sequence of
operations, guaranteed release, then an exit code (0 ok, 1 on any store failure).
Each job logs an OK/FAIL marker and the before/after snapshots operators audit.
"""
import logging
import pprint
import uuid
from typing import Callable

from sqlalchemy.orm import Session

from edubot.config import settings
from edubot.database import store_session
from edubot.errors import NotFoundError, StoreError
from edubot.services import maintenance, mappings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, (settings.log_level or "INFO").upper(), logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _dump(label: str, value) -> None:
    logger.info("%s:\n%s", label, pprint.pformat(value, sort_dicts=False))


def run_job(name: str, operation: Callable[[Session], object], session_factory=None) -> int:
    """Run operation(db) inside one store session. Returns the process exit code."""
    try:
        with store_session(session_factory) as db:
            operation(db)
    except StoreError as e:
        logger.error("FAIL %s [%s]: %s", name, e.marker, e)
        return EXIT_FAILED
    except (NotFoundError, ValueError) as e:
        logger.error("FAIL %s: %s", name, e)
        return EXIT_FAILED
    logger.info("OK %s", name)
    return EXIT_OK


def find_all_mappings(db: Session) -> maintenance.MappingInventory:
    inventory = maintenance.list_all_mappings(db)
    _dump("Collections", inventory.collections)
    _dump("Mappings", inventory.mappings)
    _dump("Textbooks", inventory.textbooks)
    return inventory


def check_mappings(db: Session) -> list[dict]:
    rows = maintenance.report_current_mappings(db)
    _dump("All mappings", rows)
    return rows


def cleanup_mappings(db: Session, dry_run: bool = False) -> maintenance.PurgeResult:
    _dump("Mappings before cleanup", maintenance.report_current_mappings(db))
    result = maintenance.purge_mappings_without_qr(db, dry_run=dry_run)
    if dry_run:
        _dump("Would delete (dry run)", result.matched_ids)
    else:
        logger.info("Deleted %s mappings without QR codes", result.deleted_count)
    _dump("Remaining mappings", maintenance.report_current_mappings(db))
    return result


def fix_mapping_issue(db: Session, ensure_mappings: bool = True) -> maintenance.LegacyRepairResult:
    _dump("Available collections", maintenance.list_all_mappings(db).collections)
    legacy = maintenance.detect_legacy_passage_sets(db)
    result = maintenance.LegacyRepairResult()
    if legacy:
        _dump("Found old structure passage sets", [maintenance.row_to_dict(ps) for ps in legacy])
        result = maintenance.strip_legacy_fields(db, ensure_mappings=ensure_mappings)
        logger.info(
            "Removed textbookId from %s passage set(s); mappings created=%s existing=%s orphaned=%s",
            result.stripped_count,
            len(result.created_mappings),
            len(result.existing_mappings),
            len(result.orphaned_ids),
        )
    else:
        logger.info("No legacy passage sets found")
    _dump("Current mappings", maintenance.report_current_mappings(db))
    return result


def migrate_existing_mappings(db: Session, mapping_id: uuid.UUID | None = None) -> list:
    updated = mappings.backfill_mapping_qr_codes(db, mapping_id=mapping_id)
    logger.info("Assigned QR codes to %s mapping(s)", len(updated))
    return updated


def create_mapping(db: Session, textbook_id, passage_set_id):
    m = mappings.add_passage_set_to_textbook(db, textbook_id, passage_set_id)
    _dump("Created mapping", {"id": m.id, "order": m.order, "qr_code": m.qr_code, "qr_code_url": m.qr_code_url})
    return m
