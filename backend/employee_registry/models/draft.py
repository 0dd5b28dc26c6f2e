"""Request and response models for the draft form."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from employee_registry.models.employee import DocumentView


class DraftFieldsUpdate(BaseModel):
    """Partial update of draft form fields. Unset fields are left alone."""

    name: str | None = None
    phone: str | None = None
    email: str | None = None
    national_id: str | None = Field(default=None, alias="nid")
    date_of_birth: str | None = Field(default=None, alias="dob")
    address: str | None = None
    qualification: str | None = None
    religion: str | None = None
    experience: float | str | None = None
    last_work_place: str | None = Field(default=None, alias="lastWorkPlace")
    salary: float | str | None = None

    model_config = {"populate_by_name": True}


class DraftView(BaseModel):
    editing_index: int | None = None
    is_editing: bool = False
    fields: dict[str, Any]
    photo_preview: str | None = None
    documents: list[DocumentView] = []
    errors: dict[str, list[str]] = {}
    touched: list[str] = []
    notice: str | None = None


class SubmitResponse(BaseModel):
    action: str = Field(..., pattern=r"^(created|updated)$")
    index: int
    draft: DraftView
