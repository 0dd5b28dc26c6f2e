from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse

from employee_registry.api.v1.endpoints.employees import persistence_failed
from employee_registry.api.v1.views import build_draft_view
from employee_registry.core.config import settings
from employee_registry.models.draft import DraftFieldsUpdate, DraftView, SubmitResponse
from employee_registry.services.draft_session import DraftSessionError, DraftValidationError, draft_session
from employee_registry.services.file_intake import FileIntakeError, describe_document, photo_to_data_url
from employee_registry.services.record_store import PersistenceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/draft", tags=["draft"])


@router.get("", response_model=DraftView)
async def get_draft():
    return build_draft_view(draft_session)


@router.patch("", response_model=DraftView)
async def update_draft(update: DraftFieldsUpdate):
    draft_session.update_fields(update.model_dump(exclude_unset=True))
    return build_draft_view(draft_session)


@router.post("/reset", response_model=DraftView)
async def reset_draft():
    draft_session.start_new()
    return build_draft_view(draft_session)


@router.post("/photo", response_model=DraftView)
async def upload_photo(file: UploadFile):
    token = draft_session.begin_photo_read()
    try:
        data = await file.read()
        data_url = photo_to_data_url(data, file.content_type, settings.PHOTO_MAX_BYTES)
    except FileIntakeError as e:
        logger.error("Photo upload failed for file=%s: %s", file.filename, e)
        draft_session.fail_photo_read(token, str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    if not draft_session.finish_photo_read(token, data_url):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A newer photo selection replaced this upload",
        )
    return build_draft_view(draft_session)


@router.delete("/photo", response_model=DraftView)
async def remove_photo():
    draft_session.clear_photo()
    return build_draft_view(draft_session)


@router.post("/documents", response_model=DraftView)
async def upload_documents(files: list[UploadFile]):
    try:
        documents = [describe_document(f.filename, f.size) for f in files]
    except FileIntakeError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    draft_session.add_documents(documents)
    return build_draft_view(draft_session)


@router.delete("/documents/{index}", response_model=DraftView)
async def remove_document(index: int):
    try:
        draft_session.remove_staged_document(index)
    except DraftSessionError as err:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(err),
        ) from err
    return build_draft_view(draft_session)


def _submit(action: str):
    submit = draft_session.submit_create if action == "created" else draft_session.submit_update
    try:
        index = submit()
    except DraftValidationError as err:
        return JSONResponse(
            status_code=422,
            content={
                "message": str(err),
                "errors": {field: sorted(rules) for field, rules in err.errors.items()},
            },
        )
    except PersistenceError as err:
        raise persistence_failed(err) from err
    except DraftSessionError as err:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(err),
        ) from err
    return SubmitResponse(action=action, index=index, draft=build_draft_view(draft_session))


@router.post("/create", response_model=SubmitResponse, status_code=status.HTTP_201_CREATED)
async def submit_create():
    return _submit("created")


@router.post("/update", response_model=SubmitResponse)
async def submit_update():
    return _submit("updated")
