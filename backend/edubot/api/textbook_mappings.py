"""
Textbook mappings API: which passage sets a textbook contains, in which order, and the reverse lookup.
  - GET    /admin/textbooks/{textbook_id}/passage-sets
  - POST   /admin/textbooks/{textbook_id}/passage-sets/{passage_set_id}
  - DELETE /admin/textbooks/{textbook_id}/passage-sets/{passage_set_id}
  - PUT    /admin/textbooks/{textbook_id}/passage-sets/order
  - GET    /admin/passage-sets/{passage_set_id}          (with its textbooks)
  - GET    /admin/passage-sets/{passage_set_id}/textbooks
  - DELETE /admin/passage-sets/{passage_set_id}
  - GET    /passage-sets/qr/{qr_code}                    (student entry point)
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from edubot.api.errors import raise_http
from edubot.database import get_db
from edubot.errors import NotFoundError, StoreError
from edubot.schemas.common import APIResponse, Pagination
from edubot.schemas.mapping import MappingResponse, PassageSetOrderRequest
from edubot.schemas.passage_set import PassageSetResponse, QrResolution, TextbookPassageSetList
from edubot.schemas.textbook import TextbookInfo
from edubot.services import mappings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["textbook-mappings"])


@router.get(
    "/admin/textbooks/{textbook_id}/passage-sets",
    response_model=APIResponse[TextbookPassageSetList],
)
def get_textbook_passage_sets(textbook_id: UUID, db: Session = Depends(get_db)):
    """Passage sets of a textbook in display order, with mapping order and QR fields."""
    try:
        items = mappings.list_textbook_passage_sets(db, textbook_id)
    except (NotFoundError, StoreError) as e:
        raise_http(e, "Failed to fetch textbook passage sets")
    return APIResponse(
        data=TextbookPassageSetList(
            passage_sets=[PassageSetResponse.model_validate(i) for i in items],
            pagination=Pagination.single_page(len(items)),
        )
    )


@router.post(
    "/admin/textbooks/{textbook_id}/passage-sets/{passage_set_id}",
    response_model=APIResponse[MappingResponse],
    status_code=status.HTTP_201_CREATED,
)
def add_passage_set_to_textbook(textbook_id: UUID, passage_set_id: UUID, db: Session = Depends(get_db)):
    try:
        mapping = mappings.add_passage_set_to_textbook(db, textbook_id, passage_set_id)
    except (NotFoundError, StoreError) as e:
        raise_http(e, "Failed to add passage set to textbook")
    return APIResponse(
        data=MappingResponse.model_validate(mapping),
        message="Passage set added to textbook successfully",
    )


@router.delete(
    "/admin/textbooks/{textbook_id}/passage-sets/{passage_set_id}",
    response_model=APIResponse[None],
)
def remove_passage_set_from_textbook(textbook_id: UUID, passage_set_id: UUID, db: Session = Depends(get_db)):
    try:
        mappings.remove_passage_set_from_textbook(db, textbook_id, passage_set_id)
    except (NotFoundError, StoreError) as e:
        raise_http(e, "Failed to remove passage set from textbook")
    return APIResponse(message="Passage set removed from textbook successfully")


@router.put(
    "/admin/textbooks/{textbook_id}/passage-sets/order",
    response_model=APIResponse[list[MappingResponse]],
)
def update_passage_set_order(textbook_id: UUID, body: PassageSetOrderRequest, db: Session = Depends(get_db)):
    try:
        ordered = mappings.update_passage_set_order(db, textbook_id, body.passage_set_ids)
    except (NotFoundError, StoreError) as e:
        raise_http(e, "Failed to update passage set order")
    return APIResponse(
        data=[MappingResponse.model_validate(m) for m in ordered],
        message="Passage set order updated successfully",
    )


@router.get("/admin/passage-sets/{passage_set_id}", response_model=APIResponse[PassageSetResponse])
def get_passage_set(passage_set_id: UUID, db: Session = Depends(get_db)):
    try:
        detail = mappings.get_passage_set_detail(db, passage_set_id)
    except (NotFoundError, StoreError) as e:
        raise_http(e, "Failed to fetch passage set")
    return APIResponse(data=PassageSetResponse.model_validate(detail))


@router.get("/admin/passage-sets/{passage_set_id}/textbooks", response_model=APIResponse[list[TextbookInfo]])
def get_passage_set_textbooks(passage_set_id: UUID, db: Session = Depends(get_db)):
    try:
        items = mappings.list_passage_set_textbooks(db, passage_set_id)
    except (NotFoundError, StoreError) as e:
        raise_http(e, "Failed to fetch passage set textbooks")
    return APIResponse(data=[TextbookInfo.model_validate(i) for i in items])


@router.delete("/admin/passage-sets/{passage_set_id}", response_model=APIResponse[None])
def delete_passage_set(passage_set_id: UUID, db: Session = Depends(get_db)):
    """Refuses (400) while any textbook still links the passage set."""
    try:
        mappings.delete_passage_set(db, passage_set_id)
    except (NotFoundError, StoreError) as e:
        raise_http(e, "Failed to delete passage set")
    return APIResponse(message="Passage set deleted successfully")


@router.get("/passage-sets/qr/{qr_code}", response_model=APIResponse[QrResolution])
def get_by_qr_code(qr_code: str, db: Session = Depends(get_db)):
    """Resolve a scanned QR code (mapping or passage set) to the passage set to chat about."""
    try:
        resolved = mappings.resolve_qr_code(db, qr_code)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (NotFoundError, StoreError) as e:
        raise_http(e, "Failed to fetch passage set")
    return APIResponse(data=QrResolution.model_validate(resolved))
