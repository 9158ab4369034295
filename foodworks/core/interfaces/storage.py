"""Abstract interfaces for reference data storage."""

from abc import ABC, abstractmethod

from foodworks.core.entities.compliance import ComplianceDocument, DocumentVersion
from foodworks.core.entities.equipment import Equipment
from foodworks.core.entities.supplier import Supplier


class ISupplierStore(ABC):
    """Interface for supplier persistence."""

    @abstractmethod
    async def create(self, supplier: Supplier) -> Supplier:
        pass

    @abstractmethod
    async def get(self, supplier_id: int) -> Supplier | None:
        pass

    @abstractmethod
    async def list_suppliers(
        self, approved_only: bool = False, limit: int = 100, offset: int = 0
    ) -> list[Supplier]:
        pass

    @abstractmethod
    async def update(self, supplier: Supplier) -> Supplier:
        pass

    @abstractmethod
    async def delete(self, supplier_id: int) -> bool:
        pass


class IEquipmentStore(ABC):
    """Interface for the equipment register."""

    @abstractmethod
    async def create(self, equipment: Equipment) -> Equipment:
        pass

    @abstractmethod
    async def get(self, equipment_id: int) -> Equipment | None:
        pass

    @abstractmethod
    async def list_equipment(
        self, service_due: bool = False, limit: int = 100, offset: int = 0
    ) -> list[Equipment]:
        pass

    @abstractmethod
    async def update(self, equipment: Equipment) -> Equipment:
        pass

    @abstractmethod
    async def delete(self, equipment_id: int) -> bool:
        pass


class IComplianceStore(ABC):
    """Interface for compliance documents and their version history."""

    @abstractmethod
    async def create(self, document: ComplianceDocument) -> ComplianceDocument:
        """Create a document and its first version row."""
        pass

    @abstractmethod
    async def get(self, document_id: int) -> ComplianceDocument | None:
        pass

    @abstractmethod
    async def list_documents(
        self,
        status: str | None = None,
        category: str | None = None,
        accreditations_only: bool = False,
        limit: int = 100,
        offset: int = 0,
    ) -> list[ComplianceDocument]:
        pass

    @abstractmethod
    async def list_expiring(self, within_days: int = 30, limit: int = 100) -> list[ComplianceDocument]:
        pass

    @abstractmethod
    async def update(
        self,
        document: ComplianceDocument,
        changes: str | None = None,
        created_by: str | None = None,
    ) -> tuple[ComplianceDocument, DocumentVersion | None]:
        """Save a document; records a new version when content or changes warrant it."""
        pass

    @abstractmethod
    async def delete(self, document_id: int) -> bool:
        pass

    @abstractmethod
    async def list_versions(self, document_id: int) -> list[DocumentVersion]:
        pass
