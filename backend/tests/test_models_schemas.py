"""
Wire shapes (camelCase, `_id`) and the question explanation lifecycle.
"""
import uuid
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from conftest import make_passage_set
from edubot.models import Question
from edubot.schemas.chat import ChatMessage, ChatSession
from edubot.schemas.common import APIResponse, Pagination
from edubot.schemas.mapping import PassageSetOrderRequest
from edubot.schemas.passage_set import PassageSetResponse
from edubot.schemas.question import QuestionPayload
from edubot.schemas.textbook import TextbookPayload


def _question(db):
    ps = make_passage_set(db)
    q = Question(
        set_id=ps.id,
        question_number=1,
        question_text="글쓴이의 주장으로 알맞은 것은?",
        options=["가", "나", "다"],
        correct_answer="나",
    )
    db.add(q)
    db.commit()
    db.refresh(q)
    return q


def test_question_explanation_lifecycle(db):
    q = _question(db)
    assert q.explanation_status == "pending"
    q.move_explanation_status("generating")
    now = datetime.now(timezone.utc)
    q.move_explanation_status("failed", error="timeout", at=now)
    assert q.explanation_error == "timeout"
    q.move_explanation_status("pending")
    assert q.explanation_error is None
    q.move_explanation_status("generating")
    q.move_explanation_status("completed", at=now)
    assert q.explanation_generated_at == now
    db.commit()


def test_question_illegal_status_move(db):
    q = _question(db)
    with pytest.raises(ValueError):
        q.move_explanation_status("completed")


def test_question_payload_rules():
    QuestionPayload(question_number=1, question_text="q", options=["a", "b"], correct_answer="a")
    with pytest.raises(ValidationError):
        QuestionPayload(question_number=1, question_text="q", options=["a"], correct_answer="a")
    with pytest.raises(ValidationError):
        QuestionPayload(question_number=1, question_text="q", options=["a", "b"], correct_answer="c")


def test_textbook_payload_level_and_year():
    assert TextbookPayload(title="t", subject="국어", year=2024).level == "고등"
    with pytest.raises(ValidationError):
        TextbookPayload(title="t", subject="국어", level="대학", year=2024)
    with pytest.raises(ValidationError):
        TextbookPayload(title="t", subject="국어", year=1999)


def test_passage_set_response_wire_shape():
    ps_id, mapping_id = uuid.uuid4(), uuid.uuid4()
    resp = PassageSetResponse.model_validate(
        {
            "id": ps_id,
            "title": "지문",
            "passage": "내용",
            "passage_comment": "해설",
            "qr_code": "ps-abcd-0123abcd-x",
            "qr_code_url": "http://localhost:3000/chat/ps-abcd-0123abcd-x",
            "order": 2,
            "mapping_id": mapping_id,
        }
    )
    wire = resp.model_dump(by_alias=True, mode="json", exclude_none=True)
    assert wire["_id"] == str(ps_id)
    assert wire["passageComment"] == "해설"
    assert wire["mappingId"] == str(mapping_id)
    assert wire["order"] == 2
    assert "textbooks" not in wire


def test_api_response_envelope():
    body = APIResponse[Pagination](data=Pagination.single_page(3)).model_dump(by_alias=True)
    assert body == {
        "success": True,
        "data": {"current": 1, "total": 1, "count": 3, "totalItems": 3},
        "message": None,
    }


def test_order_request_rejects_duplicates():
    a = uuid.uuid4()
    with pytest.raises(ValidationError):
        PassageSetOrderRequest(passage_set_ids=[a, a])
    assert PassageSetOrderRequest.model_validate({"passageSetIds": [str(a)]}).passage_set_ids == [a]


def test_chat_session_append_keeps_timestamp_order():
    session = ChatSession(qr_code="ps-abcd-0123abcd-x", title="지문", last_activity=100)
    session.append(ChatMessage(id="2", type="ai", content="답", timestamp=300))
    session.append(ChatMessage(id="1", type="user", content="질문", timestamp=200))
    assert [m.id for m in session.messages] == ["1", "2"]
    assert session.last_activity == 300
    with pytest.raises(ValidationError):
        ChatMessage(id="3", type="system", content="x", timestamp=1)
