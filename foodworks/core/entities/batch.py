"""Batch manufacturing record entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class BatchStatus(str, Enum):
    """Lifecycle of a manufacturing run."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


# Checks that are signed off with the operator's initials
INITIALLED_CHECKS = (
    "equipment_clean",
    "followed_gmp",
    "bb_date_match",
    "label_compliance",
)

LABEL_CHECKS = (
    "product_name_accurate",
    "ingredients_listed",
    "net_quantity_displayed",
    "nutritional_info_present",
    "claims_verified",
    "manufacturer_info",
    "storage_conditions",
    "usage_instructions",
    "provenance_verified",
    "certifications_valid",
    "batch_code_applied",
    "artwork_correct",
    "text_clear",
    "packaging_compliant",
    "regulatory_compliant",
)

ALL_CHECKS = INITIALLED_CHECKS + LABEL_CHECKS


class BatchChecklist(BaseModel):
    """Hygiene and labelling compliance checklist for one batch."""

    equipment_clean: bool = False
    equipment_clean_initials: str | None = None
    followed_gmp: bool = False
    followed_gmp_initials: str | None = None
    bb_date_match: bool = False
    bb_date_match_initials: str | None = None
    label_compliance: bool = False
    label_compliance_initials: str | None = None

    product_name_accurate: bool = False
    ingredients_listed: bool = False
    net_quantity_displayed: bool = False
    nutritional_info_present: bool = False
    claims_verified: bool = False
    manufacturer_info: bool = False
    storage_conditions: bool = False
    usage_instructions: bool = False
    provenance_verified: bool = False
    certifications_valid: bool = False
    batch_code_applied: bool = False
    artwork_correct: bool = False
    text_clear: bool = False
    packaging_compliant: bool = False
    regulatory_compliant: bool = False

    notes: dict[str, str] = Field(default_factory=dict)  # keyed by check name

    @property
    def completed_checks(self) -> list[str]:
        return [name for name in ALL_CHECKS if getattr(self, name)]

    @property
    def outstanding_checks(self) -> list[str]:
        """Checks not yet ticked, or ticked without the required initials."""
        outstanding = []
        for name in ALL_CHECKS:
            if not getattr(self, name):
                outstanding.append(name)
            elif name in INITIALLED_CHECKS and not getattr(self, f"{name}_initials"):
                outstanding.append(name)
        return outstanding

    @property
    def is_complete(self) -> bool:
        return not self.outstanding_checks


class BatchIngredient(BaseModel):
    """Raw material lot consumed by a batch."""

    id: int | None = None
    batch_id: int | None = None
    raw_material_id: int | None = None  # FK → raw_materials.id
    raw_material_name: str | None = None
    batch_number: str | None = None  # supplier lot number
    best_before_date: date | None = None
    quantity: float = 0.0

    @property
    def is_valid(self) -> bool:
        """Rows without a material or a positive quantity are not saved."""
        return self.raw_material_id is not None and self.quantity > 0


class BatchManufacturingRecord(BaseModel):
    """One manufacturing run of a finished product."""

    id: int | None = None
    batch_date: date = Field(default_factory=date.today)
    product_id: int | None = None  # FK → final_products.id
    product_name: str | None = None
    product_batch_number: str | None = None
    product_best_before_date: date | None = None
    bags_count: int = 0
    bag_size: float | None = None
    batch_size: float | None = None
    batch_started: datetime | None = None
    batch_finished: datetime | None = None
    scale_id: str | None = None
    scale_target_weight: float | None = None
    scale_actual_reading: float | None = None
    checklist: BatchChecklist = Field(default_factory=BatchChecklist)
    manager_comments: str | None = None
    remedial_actions: str | None = None
    work_undertaken: str | None = None
    ingredients: list[BatchIngredient] = Field(default_factory=list)
    version: int = 1
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @model_validator(mode="after")
    def derive_batch_size(self) -> "BatchManufacturingRecord":
        """batch_size = bags × bag size when both are known."""
        if self.bags_count and self.bag_size:
            self.batch_size = self.bags_count * self.bag_size
        return self

    @property
    def status(self) -> BatchStatus:
        if self.batch_finished is None:
            return BatchStatus.IN_PROGRESS
        return BatchStatus.COMPLETED

    @property
    def is_completed(self) -> bool:
        return self.status == BatchStatus.COMPLETED

    @property
    def produced_quantity(self) -> float:
        """Finished units credited to stock by this batch."""
        return float(self.bags_count) if self.is_completed else 0.0

    def valid_ingredients(self) -> list[BatchIngredient]:
        return [i for i in self.ingredients if i.is_valid]

    def scale_deviation_percent(self) -> float | None:
        """Deviation of the scale reading from its target, in percent."""
        if not self.scale_target_weight or self.scale_actual_reading is None:
            return None
        return abs(self.scale_actual_reading - self.scale_target_weight) / self.scale_target_weight * 100
