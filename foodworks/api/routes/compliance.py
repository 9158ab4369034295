"""Compliance document endpoints with version history."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from foodworks.api.dependencies import (
    get_compliance_doc_store,
    get_save_compliance_document_use_case,
)
from foodworks.application.dto.converters import (
    compliance_document_to_response,
    document_version_to_response,
)
from foodworks.application.dto.requests import ComplianceDocumentRequest
from foodworks.application.dto.responses import (
    ComplianceDocumentResponse,
    DocumentVersionResponse,
    ErrorResponse,
    SaveComplianceDocumentResponse,
)
from foodworks.application.use_cases import SaveComplianceDocumentUseCase
from foodworks.infrastructure.storage.sqlite import SQLiteComplianceStore

router = APIRouter(prefix="/api/compliance", tags=["compliance"])


@router.post(
    "/documents",
    response_model=SaveComplianceDocumentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_document(
    request: ComplianceDocumentRequest,
    use_case: SaveComplianceDocumentUseCase = Depends(get_save_compliance_document_use_case),
) -> SaveComplianceDocumentResponse:
    """Create a document; version 1 is written with it."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("/documents", response_model=list[ComplianceDocumentResponse])
async def list_documents(
    doc_status: str | None = Query(default=None, alias="status"),
    category: str | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: SQLiteComplianceStore = Depends(get_compliance_doc_store),
) -> list[ComplianceDocumentResponse]:
    documents = await store.list_documents(
        status=doc_status, category=category, limit=limit, offset=offset
    )
    return [compliance_document_to_response(d) for d in documents]


@router.get("/documents/accreditations", response_model=list[ComplianceDocumentResponse])
async def list_accreditations(
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: SQLiteComplianceStore = Depends(get_compliance_doc_store),
) -> list[ComplianceDocumentResponse]:
    documents = await store.list_documents(accreditations_only=True, limit=limit, offset=offset)
    return [compliance_document_to_response(d) for d in documents]


@router.get("/documents/expiring", response_model=list[ComplianceDocumentResponse])
async def list_expiring(
    days: int = Query(default=30, ge=0, le=3650),
    limit: int = Query(default=100, ge=1, le=1000),
    store: SQLiteComplianceStore = Depends(get_compliance_doc_store),
) -> list[ComplianceDocumentResponse]:
    """Non-archived documents expiring within ``days`` (already expired included)."""
    documents = await store.list_expiring(within_days=days, limit=limit)
    return [compliance_document_to_response(d) for d in documents]


@router.get(
    "/documents/{document_id}",
    response_model=ComplianceDocumentResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_document(
    document_id: int,
    store: SQLiteComplianceStore = Depends(get_compliance_doc_store),
) -> ComplianceDocumentResponse:
    document = await store.get(document_id)
    if not document:
        raise HTTPException(
            status_code=404, detail=f"Compliance document not found: {document_id}"
        )
    return compliance_document_to_response(document)


@router.put(
    "/documents/{document_id}",
    response_model=SaveComplianceDocumentResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_document(
    document_id: int,
    request: ComplianceDocumentRequest,
    use_case: SaveComplianceDocumentUseCase = Depends(get_save_compliance_document_use_case),
) -> SaveComplianceDocumentResponse:
    """Update a document; a new version is written when content changed."""
    result = await use_case.execute(request, document_id=document_id)
    return use_case.to_response(result)


@router.delete(
    "/documents/{document_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_document(
    document_id: int,
    store: SQLiteComplianceStore = Depends(get_compliance_doc_store),
) -> None:
    if not await store.delete(document_id):
        raise HTTPException(
            status_code=404, detail=f"Compliance document not found: {document_id}"
        )


@router.get(
    "/documents/{document_id}/versions",
    response_model=list[DocumentVersionResponse],
    responses={404: {"model": ErrorResponse}},
)
async def list_versions(
    document_id: int,
    store: SQLiteComplianceStore = Depends(get_compliance_doc_store),
) -> list[DocumentVersionResponse]:
    """Version history, newest first."""
    if not await store.get(document_id):
        raise HTTPException(
            status_code=404, detail=f"Compliance document not found: {document_id}"
        )
    versions = await store.list_versions(document_id)
    return [document_version_to_response(v) for v in versions]
