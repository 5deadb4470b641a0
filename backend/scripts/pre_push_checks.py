#!/usr/bin/env python3
"""
Checks to run before pushing or deploying: the app imports, tables can be created,
migrations have one head, and the configured store holds no mapping that the
maintenance scripts would still have to repair.
Run from backend dir: python scripts/pre_push_checks.py
"""
import sys
from pathlib import Path

BACKEND = Path(__file__).resolve().parent.parent
if str(BACKEND) not in sys.path:
    sys.path.insert(0, str(BACKEND))


def check_imports():
    from edubot.main import app  # noqa: F401
    from edubot.jobs import maintenance  # noqa: F401
    from edubot.services import qr
    assert qr.validate_qr_code(qr.generate_qr_code())
    assert qr.validate_qr_code(qr.generate_mapping_qr_code("0123456789abcdef", 1))
    return "imports"


def check_init_db():
    from edubot.database import init_db
    init_db()
    return "init_db"


def check_single_migration_head():
    from alembic.config import Config
    from alembic.script import ScriptDirectory
    cfg = Config(str(BACKEND / "alembic.ini"))
    cfg.set_main_option("script_location", str(BACKEND / "alembic"))
    heads = ScriptDirectory.from_config(cfg).get_heads()
    assert len(heads) == 1, f"expected one alembic head, found {heads}"
    return "single_migration_head"


def check_no_orphan_mappings():
    from edubot.database import SessionLocal
    from edubot.services.maintenance import detect_legacy_passage_sets, purge_mappings_without_qr
    db = SessionLocal()
    try:
        pending = purge_mappings_without_qr(db, dry_run=True).matched_ids
        legacy = detect_legacy_passage_sets(db)
    finally:
        db.close()
    assert not pending, f"{len(pending)} mapping(s) without QR code (run scripts/migrate_existing_mappings.py)"
    assert not legacy, f"{len(legacy)} legacy passage set(s) (run scripts/fix_mapping_issue.py)"
    return "no_orphan_mappings"


def main():
    checks = [check_imports, check_single_migration_head, check_init_db, check_no_orphan_mappings]
    for fn in checks:
        try:
            name = fn()
            print(f"OK {name}")
        except Exception as e:
            print(f"FAIL {fn.__name__}: {e}")
            return 1
    print("All pre-push checks passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
