"""
System prompt versioning: uniqueness, ordering, update/revert/initialize.
"""
from datetime import datetime, timedelta, timezone

import pytest

from edubot.errors import NotFoundError, WriteError, translate_store_errors
from edubot.models import SystemPrompt, SystemPromptVersion
from edubot.services import prompts
from edubot.services.prompt_helpers import DEFAULT_PROMPTS


def test_duplicate_key_version_is_write_error(db):
    prompts.record_version(db, "greeting", "hello", 1)
    with pytest.raises(WriteError):
        prompts.record_version(db, "greeting", "hello again", 1)
    # session is usable after the rollback
    prompts.record_version(db, "greeting", "hello again", 2)
    assert db.query(SystemPromptVersion).count() == 2


def test_duplicate_prompt_key_is_write_error(db):
    prompts.create_prompt(db, "greeting", "Greeting", "desc", "hello")
    with pytest.raises(WriteError):
        prompts.create_prompt(db, "greeting", "Greeting 2", "desc", "hi")


def test_duplicate_prompt_key_rejected_by_store(db):
    db.add(SystemPrompt(key="greeting", name="a", description="d", content="x"))
    db.commit()
    db.add(SystemPrompt(key="greeting", name="b", description="d", content="y"))
    with pytest.raises(WriteError):
        with translate_store_errors(db):
            db.commit()


def test_versions_newest_first(db):
    for v in (1, 2, 3):
        prompts.record_version(db, "greeting", f"v{v}", v)
    prompts.record_version(db, "other", "x", 9)
    assert [r.version for r in prompts.list_versions(db, "greeting")] == [3, 2, 1]


def test_versions_by_creation_time_can_diverge(db):
    now = datetime.now(timezone.utc)
    # version 2 written after version 3
    for version, offset in ((1, 0), (3, 1), (2, 2)):
        db.add(
            SystemPromptVersion(
                prompt_key="greeting",
                content=f"v{version}",
                version=version,
                created_at=now + timedelta(seconds=offset),
            )
        )
    db.commit()
    assert [r.version for r in prompts.list_versions(db, "greeting")] == [3, 2, 1]
    assert [r.version for r in prompts.list_versions(db, "greeting", order_by="created_at")] == [2, 3, 1]
    assert [r.version for r in prompts.list_versions(db, "greeting", limit=2)] == [3, 2]


def test_create_records_first_version(db):
    p = prompts.create_prompt(db, "greeting", "Greeting", "desc", "hello")
    assert p.version == 1
    assert p.is_active
    versions = prompts.list_versions(db, "greeting")
    assert [(v.version, v.content, v.created_by) for v in versions] == [(1, "hello", "admin")]


def test_update_content_bumps_version(db):
    p = prompts.create_prompt(db, "greeting", "Greeting", "desc", "hello")
    p = prompts.update_prompt(db, p.id, content="hello v2", version_description="tweak")
    assert p.version == 2
    assert p.content == "hello v2"
    latest = prompts.list_versions(db, "greeting", limit=1)[0]
    assert (latest.version, latest.content, latest.description) == (2, "hello v2", "tweak")


def test_update_without_content_change_keeps_version(db):
    p = prompts.create_prompt(db, "greeting", "Greeting", "desc", "hello")
    p = prompts.update_prompt(db, p.id, name="Renamed", content="hello", is_active=False)
    assert p.version == 1
    assert p.name == "Renamed"
    assert not p.is_active
    assert len(prompts.list_versions(db, "greeting")) == 1


def test_get_prompt_by_key_active_only(db):
    p = prompts.create_prompt(db, "greeting", "Greeting", "desc", "hello")
    prompts.update_prompt(db, p.id, is_active=False)
    with pytest.raises(NotFoundError):
        prompts.get_prompt_by_key(db, "greeting")
    assert prompts.get_prompt_by_key(db, "greeting", active_only=False).id == p.id


def test_version_history_excludes_current(db):
    p = prompts.create_prompt(db, "greeting", "Greeting", "desc", "v1")
    prompts.update_prompt(db, p.id, content="v2")
    prompts.update_prompt(db, p.id, content="v3")
    history = prompts.version_history(db, "greeting")
    assert history["current"]["version"] == 3
    assert history["current"]["is_current"]
    assert [v["version"] for v in history["versions"]] == [2, 1]


def test_revert_creates_new_version(db):
    p = prompts.create_prompt(db, "greeting", "Greeting", "desc", "v1")
    prompts.update_prompt(db, p.id, content="v2")
    p = prompts.revert_to_version(db, "greeting", 1)
    assert p.version == 3
    assert p.content == "v1"
    latest = prompts.list_versions(db, "greeting", limit=1)[0]
    assert latest.description == "Reverted to v1"


def test_revert_to_missing_version(db):
    prompts.create_prompt(db, "greeting", "Greeting", "desc", "v1")
    with pytest.raises(NotFoundError):
        prompts.revert_to_version(db, "greeting", 7)


def test_delete_keeps_history(db):
    p = prompts.create_prompt(db, "greeting", "Greeting", "desc", "v1")
    prompts.delete_prompt(db, p.id)
    assert db.query(SystemPrompt).count() == 0
    assert [v.version for v in prompts.list_versions(db, "greeting")] == [1]


def test_initialize_prompt_creates_then_resets(db):
    p, created = prompts.initialize_prompt(db, "chat_assistant")
    assert created
    assert p.content == DEFAULT_PROMPTS["chat_assistant"]["content"]
    prompts.update_prompt(db, p.id, content="custom")
    p, created = prompts.initialize_prompt(db, "chat_assistant")
    assert not created
    assert p.version == 3
    assert p.content == DEFAULT_PROMPTS["chat_assistant"]["content"]


def test_initialize_prompt_unknown_key(db):
    with pytest.raises(ValueError):
        prompts.initialize_prompt(db, "nope")


def test_initialize_default_prompts_only_missing(db):
    prompts.create_prompt(db, "chat_assistant", "mine", "d", "custom")
    created = prompts.initialize_default_prompts(db)
    assert sorted(created) == ["passage_commentary", "question_explanation"]
    assert prompts.get_prompt_by_key(db, "chat_assistant").content == "custom"
    assert prompts.initialize_default_prompts(db) == []


def test_list_versions_limit_zero_returns_nothing(db):
    for v in (1, 2):
        prompts.record_version(db, "greeting", f"v{v}", v)
    assert prompts.list_versions(db, "greeting", limit=0) == []
    assert len(prompts.list_versions(db, "greeting", limit=None)) == 2
