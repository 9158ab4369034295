"""API tests for compliance document endpoints."""

from datetime import date, timedelta
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from foodworks.api.dependencies import (
    get_compliance_doc_store,
    get_save_compliance_document_use_case,
)
from foodworks.api.main import app
from foodworks.application.use_cases.save_compliance_document import (
    SaveComplianceDocumentResult,
    SaveComplianceDocumentUseCase,
)
from foodworks.core.entities.compliance import ComplianceDocument, DocumentVersion
from foodworks.core.exceptions import ValidationError

DOCUMENT = ComplianceDocument(
    id=1,
    title="Organic Certificate",
    is_accreditation=True,
    accreditation_type="Organic",
    expiry_date=date.today() + timedelta(days=10),
)
VERSION = DocumentVersion(id=1, document_id=1, version_number=1, content="", changes="Initial version")


@pytest.fixture
def mock_compliance_store():
    store = AsyncMock()
    store.get.return_value = DOCUMENT
    store.list_documents.return_value = [DOCUMENT]
    store.list_expiring.return_value = [DOCUMENT]
    store.list_versions.return_value = [VERSION]
    store.delete.return_value = True
    return store


@pytest.fixture
def mock_save_use_case():
    uc = AsyncMock(spec=SaveComplianceDocumentUseCase)
    result = SaveComplianceDocumentResult(document=DOCUMENT, version=VERSION)
    uc.execute.return_value = result
    uc.to_response.return_value = SaveComplianceDocumentUseCase().to_response(result)
    return uc


@pytest.fixture
async def compliance_client(mock_compliance_store, mock_save_use_case):
    app.dependency_overrides[get_compliance_doc_store] = lambda: mock_compliance_store
    app.dependency_overrides[get_save_compliance_document_use_case] = lambda: mock_save_use_case
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_compliance_doc_store, None)
    app.dependency_overrides.pop(get_save_compliance_document_use_case, None)


class TestComplianceAPI:
    async def test_create_returns_version(self, compliance_client: AsyncClient):
        response = await compliance_client.post(
            "/api/compliance/documents",
            json={"title": "Organic Certificate", "is_accreditation": True, "accreditation_type": "Organic"},
        )
        assert response.status_code == 201
        assert response.json()["version"]["version_number"] == 1

    async def test_accreditation_without_type_is_400(
        self, compliance_client: AsyncClient, mock_save_use_case
    ):
        mock_save_use_case.execute.side_effect = ValidationError(
            "accreditation_type", "is required for accreditations"
        )
        response = await compliance_client.post(
            "/api/compliance/documents", json={"title": "Cert", "is_accreditation": True}
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_invalid_status_is_422(self, compliance_client: AsyncClient):
        response = await compliance_client.post(
            "/api/compliance/documents", json={"title": "Cert", "status": "lost"}
        )
        assert response.status_code == 422

    async def test_expiring_not_shadowed_by_document_id(
        self, compliance_client: AsyncClient, mock_compliance_store
    ):
        response = await compliance_client.get("/api/compliance/documents/expiring?days=14")
        assert response.status_code == 200
        assert response.json()[0]["title"] == "Organic Certificate"
        assert mock_compliance_store.list_expiring.call_args.kwargs["within_days"] == 14

    async def test_accreditations_not_shadowed_by_document_id(
        self, compliance_client: AsyncClient, mock_compliance_store
    ):
        response = await compliance_client.get("/api/compliance/documents/accreditations")
        assert response.status_code == 200
        assert mock_compliance_store.list_documents.call_args.kwargs["accreditations_only"] is True

    async def test_versions(self, compliance_client: AsyncClient):
        response = await compliance_client.get("/api/compliance/documents/1/versions")
        assert response.status_code == 200
        assert response.json()[0]["changes"] == "Initial version"

    async def test_versions_of_missing_document(
        self, compliance_client: AsyncClient, mock_compliance_store
    ):
        mock_compliance_store.get.return_value = None
        response = await compliance_client.get("/api/compliance/documents/9/versions")
        assert response.status_code == 404
        assert response.json()["error_code"] == "COMPLIANCE_DOCUMENT_NOT_FOUND"

    async def test_delete(self, compliance_client: AsyncClient, mock_compliance_store):
        assert (await compliance_client.delete("/api/compliance/documents/1")).status_code == 204
        mock_compliance_store.delete.return_value = False
        assert (await compliance_client.delete("/api/compliance/documents/1")).status_code == 404
