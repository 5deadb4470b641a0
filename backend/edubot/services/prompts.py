"""
System prompts and their version history.

The live SystemPrompt row always holds the latest content; every content change appends a
SystemPromptVersion row carrying that content and the new version number. Version rows are
never updated or deleted here (deleting a prompt keeps its history).
"""
import logging
from typing import Literal

from sqlalchemy import select
from sqlalchemy.orm import Session

from edubot.errors import NotFoundError, WriteError, translate_store_errors
from edubot.models import SystemPrompt, SystemPromptVersion
from edubot.models.types import coerce_uuid
from edubot.services.prompt_helpers import DEFAULT_PROMPTS

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR = "admin"
HISTORY_LIMIT = 10


def record_version(
    db: Session,
    prompt_key: str,
    content: str,
    version: int,
    description: str | None = None,
    created_by: str = DEFAULT_AUTHOR,
    commit: bool = True,
) -> SystemPromptVersion:
    """Append one version row. A second row for the same (prompt_key, version) raises WriteError."""
    row = SystemPromptVersion(
        prompt_key=prompt_key,
        content=content,
        version=version,
        description=description,
        created_by=created_by or DEFAULT_AUTHOR,
    )
    with translate_store_errors(db):
        db.add(row)
        if commit:
            db.commit()
        else:
            db.flush()
    return row


def list_versions(
    db: Session,
    key: str,
    order_by: Literal["version", "created_at"] = "version",
    limit: int | None = None,
) -> list[SystemPromptVersion]:
    """Versions of key, newest first by version number or by creation time."""
    column = SystemPromptVersion.version if order_by == "version" else SystemPromptVersion.created_at
    stmt = (
        select(SystemPromptVersion)
        .where(SystemPromptVersion.prompt_key == key)
        .order_by(column.desc(), SystemPromptVersion.version.desc())
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(db.scalars(stmt))


def list_prompts(db: Session) -> list[SystemPrompt]:
    return list(db.scalars(select(SystemPrompt).order_by(SystemPrompt.key)))


def get_prompt(db: Session, prompt_id) -> SystemPrompt:
    prompt = db.get(SystemPrompt, coerce_uuid(prompt_id))
    if not prompt:
        raise NotFoundError("System prompt not found")
    return prompt


def get_prompt_by_key(db: Session, key: str, active_only: bool = True) -> SystemPrompt:
    stmt = select(SystemPrompt).where(SystemPrompt.key == key)
    if active_only:
        stmt = stmt.where(SystemPrompt.is_active.is_(True))
    prompt = db.scalars(stmt).first()
    if not prompt:
        raise NotFoundError("System prompt not found")
    return prompt


def create_prompt(db: Session, key: str, name: str, description: str, content: str) -> SystemPrompt:
    """Create prompt at version 1 and record that version. Duplicate key raises WriteError."""
    if db.scalars(select(SystemPrompt).where(SystemPrompt.key == key)).first():
        raise WriteError("Prompt with this key already exists")
    prompt = SystemPrompt(key=key, name=name, description=description, content=content, is_active=True, version=1)
    with translate_store_errors(db):
        db.add(prompt)
        db.flush()
        record_version(db, key, content, 1, description="Initial version", commit=False)
        db.commit()
    db.refresh(prompt)
    logger.info("System prompt created key=%s", key)
    return prompt


def _set_content(db: Session, prompt: SystemPrompt, content: str, description: str | None) -> bool:
    """Bump version and append a snapshot when content differs. Returns True if a version was added."""
    if content == prompt.content:
        return False
    prompt.content = content
    prompt.version = (prompt.version or 0) + 1
    record_version(
        db,
        prompt.key,
        content,
        prompt.version,
        description=description or f"Version {prompt.version}",
        commit=False,
    )
    return True


def update_prompt(
    db: Session,
    prompt_id,
    *,
    name: str | None = None,
    description: str | None = None,
    content: str | None = None,
    is_active: bool | None = None,
    version_description: str | None = None,
) -> SystemPrompt:
    """Apply the given fields. Only a content change creates a new version."""
    prompt = get_prompt(db, prompt_id)
    with translate_store_errors(db):
        if name:
            prompt.name = name
        if description:
            prompt.description = description
        if is_active is not None:
            prompt.is_active = is_active
        if content:
            _set_content(db, prompt, content, version_description)
        db.commit()
    db.refresh(prompt)
    return prompt


def delete_prompt(db: Session, prompt_id) -> None:
    prompt = get_prompt(db, prompt_id)
    key = prompt.key
    with translate_store_errors(db):
        db.delete(prompt)
        db.commit()
    logger.info("System prompt deleted key=%s (history kept)", key)


def version_history(db: Session, key: str, limit: int = HISTORY_LIMIT) -> dict:
    """{current, versions}: the live prompt plus up to `limit` earlier versions, newest first."""
    prompt = get_prompt_by_key(db, key, active_only=False)
    current = {
        "version": prompt.version,
        "content": prompt.content,
        "created_at": prompt.updated_at,
        "description": "Current version",
        "is_current": True,
    }
    older = [v for v in list_versions(db, key, limit=limit + 1) if v.version != prompt.version][:limit]
    versions = [
        {
            "version": v.version,
            "content": v.content,
            "created_at": v.created_at,
            "description": v.description,
            "created_by": v.created_by,
            "is_current": False,
        }
        for v in older
    ]
    return {"current": current, "versions": versions}


def revert_to_version(db: Session, key: str, version: int) -> SystemPrompt:
    """Make an earlier version's content current again, as a new version."""
    prompt = get_prompt_by_key(db, key, active_only=False)
    target = db.scalars(
        select(SystemPromptVersion).where(
            SystemPromptVersion.prompt_key == key,
            SystemPromptVersion.version == version,
        )
    ).first()
    if not target:
        raise NotFoundError("Target version not found")
    with translate_store_errors(db):
        _set_content(db, prompt, target.content, f"Reverted to v{version}")
        db.commit()
    db.refresh(prompt)
    return prompt


def initialize_prompt(db: Session, key: str) -> tuple[SystemPrompt, bool]:
    """
    Reset a built-in prompt to its default (creating it if absent).
    Returns (prompt, created). Raises ValueError for a key without a default.
    """
    data = DEFAULT_PROMPTS.get(key)
    if data is None:
        raise ValueError("Invalid prompt key")
    existing = db.scalars(select(SystemPrompt).where(SystemPrompt.key == key)).first()
    if existing is None:
        return create_prompt(db, key, data["name"], data["description"], data["content"]), True
    with translate_store_errors(db):
        existing.name = data["name"]
        existing.description = data["description"]
        existing.is_active = True
        _set_content(db, existing, data["content"], "Reset to default")
        db.commit()
    db.refresh(existing)
    return existing, False


def initialize_default_prompts(db: Session) -> list[str]:
    """Create every missing built-in prompt; existing ones are left alone. Returns keys created."""
    created = []
    for key, data in DEFAULT_PROMPTS.items():
        if db.scalars(select(SystemPrompt).where(SystemPrompt.key == key)).first():
            continue
        create_prompt(db, key, data["name"], data["description"], data["content"])
        created.append(key)
    return created
