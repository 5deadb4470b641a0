"""
System prompts API. Keys identify prompts for readers; ids are used for edits.
Every content change is kept as a version; revert creates a new version with old content.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from edubot.api.errors import raise_http
from edubot.database import get_db
from edubot.errors import NotFoundError, StoreError
from edubot.schemas.common import APIResponse, ContractModel, Pagination
from edubot.schemas.system_prompt import (
    PromptVersionHistory,
    RevertRequest,
    SystemPromptCreate,
    SystemPromptResponse,
    SystemPromptUpdate,
)
from edubot.services import prompts

router = APIRouter(prefix="/admin/system-prompts", tags=["system-prompts"])


class SystemPromptList(ContractModel):
    prompts: list[SystemPromptResponse]
    pagination: Pagination


@router.get("", response_model=APIResponse[SystemPromptList])
def list_prompts(db: Session = Depends(get_db)):
    try:
        rows = prompts.list_prompts(db)
    except StoreError as e:
        raise_http(e, "Failed to fetch system prompts")
    return APIResponse(
        data=SystemPromptList(
            prompts=[SystemPromptResponse.model_validate(p) for p in rows],
            pagination=Pagination.single_page(len(rows)),
        )
    )


@router.post("/initialize-defaults", response_model=APIResponse[list[str]])
def initialize_default_prompts(db: Session = Depends(get_db)):
    """Create the built-in prompts that do not exist yet."""
    try:
        created = prompts.initialize_default_prompts(db)
    except StoreError as e:
        raise_http(e, "Failed to initialize default prompts")
    return APIResponse(data=created, message=f"{len(created)} default prompt(s) created")


@router.get("/{key}", response_model=APIResponse[SystemPromptResponse])
def get_prompt_by_key(key: str, db: Session = Depends(get_db)):
    """Active prompt for key (404 when missing or inactive)."""
    try:
        prompt = prompts.get_prompt_by_key(db, key)
    except (NotFoundError, StoreError) as e:
        raise_http(e, "Failed to fetch system prompt")
    return APIResponse(data=SystemPromptResponse.model_validate(prompt))


@router.post("", response_model=APIResponse[SystemPromptResponse], status_code=status.HTTP_201_CREATED)
def create_prompt(body: SystemPromptCreate, db: Session = Depends(get_db)):
    try:
        prompt = prompts.create_prompt(db, body.key, body.name, body.description, body.content)
    except StoreError as e:
        raise_http(e, "Failed to create system prompt")
    return APIResponse(
        data=SystemPromptResponse.model_validate(prompt),
        message="System prompt created successfully",
    )


@router.put("/{prompt_id}", response_model=APIResponse[SystemPromptResponse])
def update_prompt(prompt_id: UUID, body: SystemPromptUpdate, db: Session = Depends(get_db)):
    try:
        prompt = prompts.update_prompt(
            db,
            prompt_id,
            name=body.name,
            description=body.description,
            content=body.content,
            is_active=body.is_active,
            version_description=body.version_description,
        )
    except (NotFoundError, StoreError) as e:
        raise_http(e, "Failed to update system prompt")
    return APIResponse(
        data=SystemPromptResponse.model_validate(prompt),
        message=f"System prompt updated successfully (v{prompt.version})",
    )


@router.delete("/{prompt_id}", response_model=APIResponse[None])
def delete_prompt(prompt_id: UUID, db: Session = Depends(get_db)):
    try:
        prompts.delete_prompt(db, prompt_id)
    except (NotFoundError, StoreError) as e:
        raise_http(e, "Failed to delete system prompt")
    return APIResponse(message="System prompt deleted successfully")


@router.get("/{key}/versions", response_model=APIResponse[PromptVersionHistory])
def get_prompt_versions(key: str, db: Session = Depends(get_db)):
    try:
        history = prompts.version_history(db, key)
    except (NotFoundError, StoreError) as e:
        raise_http(e, "Failed to fetch prompt versions")
    return APIResponse(data=PromptVersionHistory.model_validate(history))


@router.post("/{key}/revert", response_model=APIResponse[SystemPromptResponse])
def revert_to_version(key: str, body: RevertRequest, db: Session = Depends(get_db)):
    try:
        prompt = prompts.revert_to_version(db, key, body.version)
    except (NotFoundError, StoreError) as e:
        raise_http(e, "Failed to revert to version")
    return APIResponse(
        data=SystemPromptResponse.model_validate(prompt),
        message=f"Reverted to version {body.version} (now v{prompt.version})",
    )


@router.post("/{key}/initialize", response_model=APIResponse[SystemPromptResponse])
def initialize_prompt(key: str, db: Session = Depends(get_db)):
    """Reset a built-in prompt to its default content (creates it when missing)."""
    try:
        prompt, created = prompts.initialize_prompt(db, key)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreError as e:
        raise_http(e, "Failed to initialize prompt")
    message = f"{prompt.name} created" if created else f"{prompt.name} reset to default (v{prompt.version})"
    return APIResponse(data=SystemPromptResponse.model_validate(prompt), message=message)
