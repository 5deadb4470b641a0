"""
Textbook ↔ passage set mappings: link, unlink, reorder, list both directions, QR backfill and lookup.
Every function takes the session explicitly and commits its own unit of work.
Order stays 1..n without gaps inside a textbook; (textbook_id, order) is unique at every flush.
"""
import logging

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from edubot.errors import NotFoundError, WriteError, translate_store_errors
from edubot.models import PassageSet, Textbook, TextbookPassageMapping
from edubot.models.types import coerce_uuid
from edubot.services import qr

logger = logging.getLogger(__name__)

# Orders are parked above this while a textbook is renumbered
_REORDER_PARKING_OFFSET = 1_000_000


def _get_textbook(db: Session, textbook_id) -> Textbook:
    tb = db.get(Textbook, coerce_uuid(textbook_id))
    if not tb:
        raise NotFoundError("Textbook not found")
    return tb


def _get_passage_set(db: Session, passage_set_id) -> PassageSet:
    ps = db.get(PassageSet, coerce_uuid(passage_set_id))
    if not ps:
        raise NotFoundError("Passage set not found")
    return ps


def find_mapping(db: Session, textbook_id, passage_set_id) -> TextbookPassageMapping | None:
    return db.scalars(
        select(TextbookPassageMapping).where(
            TextbookPassageMapping.textbook_id == coerce_uuid(textbook_id),
            TextbookPassageMapping.passage_set_id == coerce_uuid(passage_set_id),
        )
    ).first()


def _ordered_mappings(db: Session, textbook_id) -> list[TextbookPassageMapping]:
    return list(
        db.scalars(
            select(TextbookPassageMapping)
            .where(TextbookPassageMapping.textbook_id == coerce_uuid(textbook_id))
            .order_by(TextbookPassageMapping.order)
        )
    )


def next_order(db: Session, textbook_id) -> int:
    """1 + highest order used in the textbook (1 for an empty textbook)."""
    current = db.scalar(
        select(func.max(TextbookPassageMapping.order)).where(
            TextbookPassageMapping.textbook_id == coerce_uuid(textbook_id)
        )
    )
    return (current or 0) + 1


def order_is_free(db: Session, textbook_id, order: int) -> bool:
    taken = db.scalar(
        select(func.count()).select_from(TextbookPassageMapping).where(
            TextbookPassageMapping.textbook_id == coerce_uuid(textbook_id),
            TextbookPassageMapping.order == order,
        )
    )
    return not taken


def new_mapping(textbook_id, passage_set_id, order: int) -> TextbookPassageMapping:
    """Build (not add) a mapping with a fresh QR identifier."""
    code = qr.generate_mapping_qr_code(textbook_id, order)
    return TextbookPassageMapping(
        textbook_id=coerce_uuid(textbook_id),
        passage_set_id=coerce_uuid(passage_set_id),
        order=order,
        qr_code=code,
        qr_code_url=qr.qr_code_url(code),
    )


def _apply_order(db: Session, mappings: list[TextbookPassageMapping]) -> None:
    """Give mappings orders 1..n in list order without violating (textbook_id, order) mid-flush."""
    for i, m in enumerate(mappings):
        m.order = _REORDER_PARKING_OFFSET + i + 1
    db.flush()
    for i, m in enumerate(mappings):
        m.order = i + 1
    db.flush()


def add_passage_set_to_textbook(db: Session, textbook_id, passage_set_id) -> TextbookPassageMapping:
    """Link a passage set at the end of a textbook. Raises NotFoundError or WriteError (already linked)."""
    tb = _get_textbook(db, textbook_id)
    ps = _get_passage_set(db, passage_set_id)
    if find_mapping(db, tb.id, ps.id):
        raise WriteError("Passage set already added to this textbook")
    mapping = new_mapping(tb.id, ps.id, next_order(db, tb.id))
    with translate_store_errors(db):
        db.add(mapping)
        db.commit()
    db.refresh(mapping)
    logger.info("Mapping created textbook_id=%s passage_set_id=%s order=%s qr=%s", tb.id, ps.id, mapping.order, mapping.qr_code)
    return mapping


def remove_passage_set_from_textbook(db: Session, textbook_id, passage_set_id) -> None:
    """Unlink and close the gap in the textbook's order."""
    mapping = find_mapping(db, textbook_id, passage_set_id)
    if not mapping:
        raise NotFoundError("Mapping not found")
    with translate_store_errors(db):
        db.delete(mapping)
        db.flush()
        _apply_order(db, _ordered_mappings(db, textbook_id))
        db.commit()
    logger.info("Mapping removed textbook_id=%s passage_set_id=%s", textbook_id, passage_set_id)


def update_passage_set_order(db: Session, textbook_id, passage_set_ids: list) -> list[TextbookPassageMapping]:
    """
    Reorder a textbook: passage_set_ids first, in the given order; unlisted mappings follow
    in their current relative order. Raises NotFoundError for ids not linked to the textbook.
    """
    _get_textbook(db, textbook_id)
    current = _ordered_mappings(db, textbook_id)
    by_set = {m.passage_set_id: m for m in current}
    wanted = [coerce_uuid(p) for p in passage_set_ids]
    missing = [str(p) for p in wanted if p not in by_set]
    if missing:
        raise NotFoundError(f"Passage set(s) not in textbook: {', '.join(missing)}")
    listed = [by_set[p] for p in wanted]
    rest = [m for m in current if m.passage_set_id not in set(wanted)]
    with translate_store_errors(db):
        _apply_order(db, listed + rest)
        db.commit()
    return _ordered_mappings(db, textbook_id)


def passage_set_view(ps: PassageSet, mapping: TextbookPassageMapping | None = None, textbooks: list | None = None) -> dict:
    """Passage set as a dict for PassageSetResponse, optionally with mapping fields or its textbooks."""
    out = {
        "id": ps.id,
        "title": ps.title,
        "passage": ps.passage,
        "passage_comment": ps.passage_comment,
        "qr_code": ps.qr_code,
        "qr_code_url": ps.qr_code_url,
        "created_at": ps.created_at,
        "updated_at": ps.updated_at,
    }
    if mapping is not None:
        out.update(
            order=mapping.order,
            mapping_id=mapping.id,
            mapping_qr_code=mapping.qr_code,
            mapping_qr_code_url=mapping.qr_code_url,
        )
    if textbooks is not None:
        out["textbooks"] = textbooks
    return out


def textbook_info(tb: Textbook, mapping: TextbookPassageMapping | None = None) -> dict:
    out = {"id": tb.id, "title": tb.title, "subject": tb.subject, "level": tb.level}
    if mapping is not None:
        out.update(order=mapping.order, mapping_id=mapping.id)
    return out


def list_textbook_passage_sets(db: Session, textbook_id) -> list[dict]:
    """Passage sets of a textbook in display order, with mapping id/order/QR fields."""
    _get_textbook(db, textbook_id)
    return [passage_set_view(m.passage_set, mapping=m) for m in _ordered_mappings(db, textbook_id)]


def list_passage_set_textbooks(db: Session, passage_set_id) -> list[dict]:
    """Textbooks linking a passage set, most recently linked first."""
    ps = _get_passage_set(db, passage_set_id)
    mappings = db.scalars(
        select(TextbookPassageMapping)
        .where(TextbookPassageMapping.passage_set_id == ps.id)
        .order_by(TextbookPassageMapping.created_at.desc(), TextbookPassageMapping.order)
    )
    return [textbook_info(m.textbook, mapping=m) for m in mappings]


def get_passage_set_detail(db: Session, passage_set_id) -> dict:
    """Passage set with the denormalized `textbooks` array."""
    ps = _get_passage_set(db, passage_set_id)
    return passage_set_view(ps, textbooks=list_passage_set_textbooks(db, ps.id))


def delete_passage_set(db: Session, passage_set_id) -> None:
    """Delete a passage set that no textbook links. Raises WriteError while mappings exist."""
    ps = _get_passage_set(db, passage_set_id)
    in_use = db.scalar(
        select(func.count()).select_from(TextbookPassageMapping).where(TextbookPassageMapping.passage_set_id == ps.id)
    )
    if in_use:
        raise WriteError(
            f"Cannot delete passage set. It is used in {in_use} textbook(s). Please remove it from all textbooks first."
        )
    with translate_store_errors(db):
        db.delete(ps)
        db.commit()


def _missing(column):
    return or_(column.is_(None), column == "")


def backfill_mapping_qr_codes(db: Session, mapping_id=None) -> list[TextbookPassageMapping]:
    """
    Give every mapping missing a QR identifier or URL a fresh pair (or just mapping_id).
    Returns the mappings updated; an already complete mapping_id returns [].
    """
    stmt = select(TextbookPassageMapping).where(
        or_(_missing(TextbookPassageMapping.qr_code), _missing(TextbookPassageMapping.qr_code_url))
    )
    if mapping_id is not None:
        if not db.get(TextbookPassageMapping, coerce_uuid(mapping_id)):
            raise NotFoundError("Mapping not found")
        stmt = stmt.where(TextbookPassageMapping.id == coerce_uuid(mapping_id))
    updated = []
    with translate_store_errors(db):
        for m in db.scalars(stmt).all():
            code = m.qr_code if m.has_qr_code else qr.generate_mapping_qr_code(m.textbook_id, m.order)
            m.qr_code = code
            m.qr_code_url = qr.qr_code_url(code)
            updated.append(m)
            logger.info("Mapping %s assigned QR %s", m.id, code)
        db.commit()
    return updated


def resolve_qr_code(db: Session, qr_code: str) -> dict:
    """
    Scanned QR identifier → {qr_type, passage_set, textbook?}.
    Raises ValueError for a malformed code, NotFoundError when nothing carries it.
    """
    kind = qr.qr_code_type(qr_code)
    if kind == "invalid":
        raise ValueError("Invalid QR code format")
    if kind == "mapping":
        m = db.scalars(select(TextbookPassageMapping).where(TextbookPassageMapping.qr_code == qr_code)).first()
        if not m:
            raise NotFoundError("Mapping not found")
        return {
            "qr_type": kind,
            "passage_set": passage_set_view(m.passage_set, mapping=m),
            "textbook": textbook_info(m.textbook, mapping=m),
        }
    ps = db.scalars(select(PassageSet).where(PassageSet.qr_code == qr_code)).first()
    if not ps:
        raise NotFoundError("Passage set not found")
    return {"qr_type": kind, "passage_set": passage_set_view(ps), "textbook": None}
