from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from employee_registry.api.v1.views import build_draft_view, build_employee_list, build_employee_view
from employee_registry.models.draft import DraftView
from employee_registry.models.employee import EmployeeView
from employee_registry.services.draft_session import DraftSessionError, draft_session
from employee_registry.services.record_store import PersistenceError, record_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


def persistence_failed(err: PersistenceError) -> HTTPException:
    logger.error("Request left unsaved changes: %s", err)
    return HTTPException(
        status_code=status.HTTP_507_INSUFFICIENT_STORAGE,
        detail=str(err),
    )


@router.get("", response_model=list[EmployeeView])
async def list_employees():
    return build_employee_list(record_store)


@router.post("/sync")
async def sync_employees():
    try:
        record_store.flush()
    except PersistenceError as err:
        raise persistence_failed(err) from err
    return {"saved": len(record_store), "dirty": record_store.dirty}


@router.get("/{index}", response_model=EmployeeView)
async def get_employee(index: int):
    record = record_store.get(index)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee at index {index} not found",
        )
    return build_employee_view(index, record)


@router.delete("/{index}", response_model=list[EmployeeView])
async def delete_employee(index: int):
    try:
        draft_session.delete(index)
    except PersistenceError as err:
        raise persistence_failed(err) from err
    except DraftSessionError as err:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(err),
        ) from err
    return build_employee_list(record_store)


@router.post("/{index}/edit", response_model=DraftView)
async def edit_employee(index: int):
    try:
        draft_session.start_edit(index)
    except DraftSessionError as err:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(err),
        ) from err
    return build_draft_view(draft_session)
