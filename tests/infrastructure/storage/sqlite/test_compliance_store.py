"""Tests for SQLite compliance document store."""

from datetime import date, timedelta

import pytest

from foodworks.core.entities import ComplianceDocument
from foodworks.core.entities.compliance import DocumentStatus
from foodworks.core.exceptions import ComplianceDocumentNotFoundError
from foodworks.infrastructure.storage.sqlite.compliance_store import (
    INITIAL_VERSION_NOTE,
    SQLiteComplianceStore,
)


@pytest.fixture
def store(initialized_db) -> SQLiteComplianceStore:
    return SQLiteComplianceStore()


@pytest.fixture
async def haccp(store) -> ComplianceDocument:
    return await store.create(
        ComplianceDocument(
            title="HACCP Plan",
            document_number="QA-001",
            category="haccp",
            content="Critical control points v1",
            created_by="JS",
        )
    )


class TestComplianceStore:
    async def test_create_records_first_version(self, store, haccp):
        assert haccp.current_version == 1

        versions = await store.list_versions(haccp.id)
        assert len(versions) == 1
        assert versions[0].version_number == 1
        assert versions[0].changes == INITIAL_VERSION_NOTE
        assert versions[0].content == "Critical control points v1"

    async def test_content_change_adds_version(self, store, haccp):
        edited = haccp.model_copy(update={"content": "Critical control points v2"})
        saved, version = await store.update(edited, changes="Added CCP4", created_by="AB")

        assert saved.current_version == 2
        assert version.version_number == 2
        assert version.previous_version == 1
        assert version.created_by == "AB"
        assert [v.version_number for v in await store.list_versions(haccp.id)] == [2, 1]

    async def test_metadata_edit_keeps_version(self, store, haccp):
        edited = haccp.model_copy(update={"status": DocumentStatus.PUBLISHED})
        saved, version = await store.update(edited)

        assert version is None
        assert saved.current_version == 1
        assert (await store.get(haccp.id)).status == DocumentStatus.PUBLISHED

    async def test_update_missing(self, store):
        with pytest.raises(ComplianceDocumentNotFoundError):
            await store.update(ComplianceDocument(id=5, title="Nope"))

    async def test_list_expiring_skips_archived(self, store):
        soon = date.today() + timedelta(days=10)
        await store.create(
            ComplianceDocument(
                title="BRC Certificate",
                is_accreditation=True,
                accreditation_type="BRCGS",
                expiry_date=soon,
                status=DocumentStatus.PUBLISHED,
            )
        )
        await store.create(
            ComplianceDocument(title="Old Organic Cert", expiry_date=soon, status=DocumentStatus.ARCHIVED)
        )
        await store.create(
            ComplianceDocument(title="Far Future", expiry_date=date.today() + timedelta(days=400))
        )

        expiring = await store.list_expiring(within_days=30)
        assert [d.title for d in expiring] == ["BRC Certificate"]

        accreditations = await store.list_documents(accreditations_only=True)
        assert [d.accreditation_type for d in accreditations] == ["BRCGS"]

    async def test_delete_removes_versions(self, store, haccp):
        assert await store.delete(haccp.id) is True
        assert await store.get(haccp.id) is None
        assert await store.list_versions(haccp.id) == []
