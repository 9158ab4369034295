"""Equipment register entity with service tracking."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class EquipmentStatus(str, Enum):
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    RETIRED = "retired"


class Equipment(BaseModel):
    """A piece of production equipment (scales, mixers, sealers...)."""

    id: int | None = None
    serial_number: str
    description: str
    model: str | None = None
    manufacturer: str | None = None
    value: float | None = None
    purchase_date: date | None = None
    last_service_date: date | None = None
    next_service_date: date | None = None
    service_interval_months: int | None = None
    location: str | None = None
    status: EquipmentStatus = EquipmentStatus.ACTIVE
    condition: str | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def is_service_due(self, on: date | None = None) -> bool:
        """Active equipment whose next service date has been reached."""
        if self.status == EquipmentStatus.RETIRED or self.next_service_date is None:
            return False
        return self.next_service_date <= (on or date.today())
