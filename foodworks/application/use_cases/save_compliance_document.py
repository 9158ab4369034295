"""Save Compliance Document Use Case.

Create or edit with version history.
"""

from dataclasses import dataclass

from foodworks.application.dto.converters import (
    compliance_document_to_response,
    document_version_to_response,
)
from foodworks.application.dto.requests import ComplianceDocumentRequest
from foodworks.application.dto.responses import SaveComplianceDocumentResponse
from foodworks.config import get_logger
from foodworks.core.entities.compliance import (
    ComplianceDocument,
    DocumentStatus,
    DocumentVersion,
)
from foodworks.core.exceptions import ComplianceDocumentNotFoundError, ValidationError
from foodworks.core.interfaces.storage import IComplianceStore

logger = get_logger(__name__)


@dataclass
class SaveComplianceDocumentResult:
    document: ComplianceDocument
    version: DocumentVersion | None = None


class SaveComplianceDocumentUseCase:
    """Create or update a compliance document."""

    def __init__(self, compliance_store: IComplianceStore | None = None):
        self._compliance_store = compliance_store

    async def _get_compliance_store(self) -> IComplianceStore:
        if self._compliance_store is None:
            from foodworks.infrastructure.storage.sqlite import get_compliance_store

            self._compliance_store = await get_compliance_store()
        return self._compliance_store

    async def execute(
        self, request: ComplianceDocumentRequest, document_id: int | None = None
    ) -> SaveComplianceDocumentResult:
        if request.is_accreditation and not request.accreditation_type:
            raise ValidationError("accreditation_type", "is required for accreditations")

        document = ComplianceDocument(
            id=document_id,
            title=request.title,
            document_number=request.document_number,
            category=request.category,
            content=request.content,
            status=DocumentStatus(request.status),
            is_accreditation=request.is_accreditation,
            accreditation_type=request.accreditation_type,
            expiry_date=request.expiry_date,
            created_by=request.created_by,
        )

        store = await self._get_compliance_store()
        if document_id is None:
            document = await store.create(document)
            versions = await store.list_versions(document.id)  # type: ignore[arg-type]
            version = versions[0] if versions else None
        else:
            if await store.get(document_id) is None:
                raise ComplianceDocumentNotFoundError(document_id)
            document, version = await store.update(
                document, changes=request.changes, created_by=request.created_by
            )

        logger.info(
            "compliance_document_saved",
            document_id=document.id,
            version=document.current_version,
            new_version=version is not None,
        )
        return SaveComplianceDocumentResult(document=document, version=version)

    def to_response(self, result: SaveComplianceDocumentResult) -> SaveComplianceDocumentResponse:
        return SaveComplianceDocumentResponse(
            document=compliance_document_to_response(result.document),
            version=document_version_to_response(result.version) if result.version else None,
        )
