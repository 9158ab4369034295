"""Compliance document entities with version history."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class DocumentStatus(str, Enum):
    """Publication state of a compliance document."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class ComplianceDocument(BaseModel):
    """
    Controlled document such as a HACCP plan, SOP or accreditation certificate.

    ``current_version`` only moves when a DocumentVersion is recorded.
    """

    id: int | None = None
    title: str
    document_number: str | None = None
    category: str | None = None
    content: str = ""
    status: DocumentStatus = DocumentStatus.DRAFT
    current_version: int = 1
    is_accreditation: bool = False
    accreditation_type: str | None = None
    expiry_date: date | None = None
    created_by: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def is_expired(self) -> bool:
        """Check if the document has expired."""
        if self.expiry_date is None:
            return False
        return self.expiry_date < date.today()

    def days_until_expiry(self) -> int | None:
        if self.expiry_date is None:
            return None
        return (self.expiry_date - date.today()).days


class DocumentVersion(BaseModel):
    """Snapshot of a document's content at one version."""

    id: int | None = None
    document_id: int
    version_number: int
    content: str
    changes: str | None = None
    created_by: str | None = None
    previous_version: int | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
