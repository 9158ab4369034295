"""SQLite implementation of compliance documents and their versions."""

from datetime import date, datetime, timedelta

import aiosqlite

from foodworks.config import get_logger
from foodworks.core.entities.compliance import (
    ComplianceDocument,
    DocumentStatus,
    DocumentVersion,
)
from foodworks.core.exceptions import ComplianceDocumentNotFoundError
from foodworks.core.interfaces.storage import IComplianceStore
from foodworks.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)

INITIAL_VERSION_NOTE = "Initial version"


class SQLiteComplianceStore(IComplianceStore):
    """
    SQLite implementation of compliance documents.

    A new DocumentVersion is written only when the content changed or the
    caller supplied a summary of changes. Other edits leave the version alone.
    """

    async def create(self, document: ComplianceDocument) -> ComplianceDocument:
        now = datetime.utcnow()
        document.created_at = now
        document.updated_at = now
        document.current_version = 1
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO compliance_documents (
                    title, document_number, category, content, status, current_version,
                    is_accreditation, accreditation_type, expiry_date, created_by,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    *self._values(document),
                    document.created_by,
                    document.created_at.isoformat(),
                    document.updated_at.isoformat(),
                ),
            )
            document.id = cursor.lastrowid
            await self._insert_version(
                conn,
                DocumentVersion(
                    document_id=document.id,
                    version_number=1,
                    content=document.content,
                    changes=INITIAL_VERSION_NOTE,
                    created_by=document.created_by,
                ),
            )
            logger.info("compliance_document_created", document_id=document.id, title=document.title)
            return document

    async def get(self, document_id: int) -> ComplianceDocument | None:
        async with get_connection() as conn:
            return await self._load(conn, document_id)

    async def list_documents(
        self,
        status: str | None = None,
        category: str | None = None,
        accreditations_only: bool = False,
        limit: int = 100,
        offset: int = 0,
    ) -> list[ComplianceDocument]:
        clauses: list[str] = []
        params: list = []
        if status:
            clauses.append("status = ?")
            params.append(status)
        if category:
            clauses.append("category = ?")
            params.append(category)
        if accreditations_only:
            clauses.append("is_accreditation = 1")

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM compliance_documents
                {where}
                ORDER BY updated_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_document(row) for row in rows]

    async def list_expiring(self, within_days: int = 30, limit: int = 100) -> list[ComplianceDocument]:
        """Documents with an expiry date on or before today + ``within_days``, soonest first."""
        cutoff = date.today() + timedelta(days=within_days)
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM compliance_documents
                WHERE expiry_date IS NOT NULL AND expiry_date <= ? AND status != ?
                ORDER BY expiry_date, id
                LIMIT ?
                """,
                (cutoff.isoformat(), DocumentStatus.ARCHIVED.value, limit),
            )
            rows = await cursor.fetchall()
            return [self._row_to_document(row) for row in rows]

    async def update(
        self,
        document: ComplianceDocument,
        changes: str | None = None,
        created_by: str | None = None,
    ) -> tuple[ComplianceDocument, DocumentVersion | None]:
        async with get_transaction() as conn:
            existing = await self._load(conn, document.id)  # type: ignore[arg-type]
            if existing is None:
                raise ComplianceDocumentNotFoundError(document.id or 0)

            version = None
            document.current_version = existing.current_version
            document.created_at = existing.created_at
            document.created_by = existing.created_by
            if document.content != existing.content or changes:
                document.current_version = existing.current_version + 1
                version = await self._insert_version(
                    conn,
                    DocumentVersion(
                        document_id=document.id,  # type: ignore[arg-type]
                        version_number=document.current_version,
                        content=document.content,
                        changes=changes,
                        created_by=created_by,
                        previous_version=existing.current_version,
                    ),
                )

            document.updated_at = datetime.utcnow()
            await conn.execute(
                """
                UPDATE compliance_documents SET
                    title = ?,
                    document_number = ?,
                    category = ?,
                    content = ?,
                    status = ?,
                    current_version = ?,
                    is_accreditation = ?,
                    accreditation_type = ?,
                    expiry_date = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (*self._values(document), document.updated_at.isoformat(), document.id),
            )
            logger.info(
                "compliance_document_updated",
                document_id=document.id,
                version=document.current_version,
                new_version=version is not None,
            )
            return document, version

    async def delete(self, document_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM compliance_documents WHERE id = ?", (document_id,)
            )
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("compliance_document_deleted", document_id=document_id)
            return deleted

    async def list_versions(self, document_id: int) -> list[DocumentVersion]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM document_versions
                WHERE document_id = ?
                ORDER BY version_number DESC
                """,
                (document_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_version(row) for row in rows]

    async def _load(
        self, conn: aiosqlite.Connection, document_id: int
    ) -> ComplianceDocument | None:
        cursor = await conn.execute(
            "SELECT * FROM compliance_documents WHERE id = ?", (document_id,)
        )
        row = await cursor.fetchone()
        return self._row_to_document(row) if row else None

    @staticmethod
    async def _insert_version(
        conn: aiosqlite.Connection, version: DocumentVersion
    ) -> DocumentVersion:
        cursor = await conn.execute(
            """
            INSERT INTO document_versions (
                document_id, version_number, content, changes, created_by,
                previous_version, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                version.document_id,
                version.version_number,
                version.content,
                version.changes,
                version.created_by,
                version.previous_version,
                version.created_at.isoformat(),
            ),
        )
        version.id = cursor.lastrowid
        return version

    @staticmethod
    def _values(document: ComplianceDocument) -> tuple:
        return (
            document.title,
            document.document_number,
            document.category,
            document.content,
            document.status.value,
            document.current_version,
            int(document.is_accreditation),
            document.accreditation_type,
            document.expiry_date.isoformat() if document.expiry_date else None,
        )

    @staticmethod
    def _row_to_document(row: aiosqlite.Row) -> ComplianceDocument:
        """Convert a database row to a ComplianceDocument entity."""
        status = DocumentStatus.DRAFT
        try:
            status = DocumentStatus(row["status"])
        except ValueError:
            pass

        expiry_date = None
        if row["expiry_date"]:
            try:
                expiry_date = date.fromisoformat(row["expiry_date"][:10])
            except (ValueError, TypeError):
                pass

        created_at = datetime.utcnow()
        if row["created_at"]:
            try:
                created_at = datetime.fromisoformat(row["created_at"])
            except (ValueError, TypeError):
                pass

        updated_at = datetime.utcnow()
        if row["updated_at"]:
            try:
                updated_at = datetime.fromisoformat(row["updated_at"])
            except (ValueError, TypeError):
                pass

        return ComplianceDocument(
            id=row["id"],
            title=row["title"],
            document_number=row["document_number"],
            category=row["category"],
            content=row["content"],
            status=status,
            current_version=row["current_version"],
            is_accreditation=bool(row["is_accreditation"]),
            accreditation_type=row["accreditation_type"],
            expiry_date=expiry_date,
            created_by=row["created_by"],
            created_at=created_at,
            updated_at=updated_at,
        )

    @staticmethod
    def _row_to_version(row: aiosqlite.Row) -> DocumentVersion:
        created_at = datetime.utcnow()
        if row["created_at"]:
            try:
                created_at = datetime.fromisoformat(row["created_at"])
            except (ValueError, TypeError):
                pass

        return DocumentVersion(
            id=row["id"],
            document_id=row["document_id"],
            version_number=row["version_number"],
            content=row["content"],
            changes=row["changes"],
            created_by=row["created_by"],
            previous_version=row["previous_version"],
            created_at=created_at,
        )
