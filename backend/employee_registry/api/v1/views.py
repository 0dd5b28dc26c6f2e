"""Read models handed to API clients."""

from __future__ import annotations

from employee_registry.models.draft import DraftView
from employee_registry.models.employee import DocumentInfo, DocumentView, Employee, EmployeeView
from employee_registry.services.draft_session import DraftSession
from employee_registry.services.formatting import format_bytes, initials
from employee_registry.services.record_store import RecordStore


def build_document_views(documents: list[DocumentInfo]) -> list[DocumentView]:
    return [DocumentView(name=doc.name, size=doc.size, size_label=format_bytes(doc.size)) for doc in documents]


def build_employee_view(index: int, record: Employee) -> EmployeeView:
    data = record.model_dump(exclude={"documents"})
    return EmployeeView(
        **data,
        index=index,
        initials=initials(record.name),
        documents=build_document_views(record.documents),
    )


def build_employee_list(store: RecordStore) -> list[EmployeeView]:
    return [build_employee_view(i, record) for i, record in enumerate(store.all())]


def build_draft_view(session: DraftSession) -> DraftView:
    return DraftView(
        editing_index=session.editing_index(),
        is_editing=session.is_editing(),
        fields=dict(session.fields()),
        photo_preview=session.photo_preview(),
        documents=build_document_views(session.staged_documents()),
        errors={field: sorted(rules) for field, rules in session.errors().items()},
        touched=sorted(session.touched()),
        notice=session.notice(),
    )
