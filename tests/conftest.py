"""Pytest configuration and shared fixtures."""

from collections.abc import Generator
from datetime import date, datetime

import pytest

from foodworks.config import reset_settings
from foodworks.core.entities import (
    BatchChecklist,
    BatchIngredient,
    BatchManufacturingRecord,
)


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Reload settings from the environment for every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def complete_checklist() -> BatchChecklist:
    """A checklist with every check ticked and initialled."""
    return BatchChecklist(
        equipment_clean=True,
        equipment_clean_initials="JS",
        followed_gmp=True,
        followed_gmp_initials="JS",
        bb_date_match=True,
        bb_date_match_initials="JS",
        label_compliance=True,
        label_compliance_initials="JS",
        product_name_accurate=True,
        ingredients_listed=True,
        net_quantity_displayed=True,
        nutritional_info_present=True,
        claims_verified=True,
        manufacturer_info=True,
        storage_conditions=True,
        usage_instructions=True,
        provenance_verified=True,
        certifications_valid=True,
        batch_code_applied=True,
        artwork_correct=True,
        text_clear=True,
        packaging_compliant=True,
        regulatory_compliant=True,
    )


@pytest.fixture
def sample_batch() -> BatchManufacturingRecord:
    """In-progress batch of 50 bags using 500 units of material 1."""
    return BatchManufacturingRecord(
        id=1,
        batch_date=date(2024, 3, 15),
        product_id=10,
        product_name="Breakfast Tea",
        product_batch_number="BT-0315",
        product_best_before_date=date(2025, 3, 15),
        bags_count=50,
        bag_size=0.25,
        batch_started=datetime(2024, 3, 15, 9, 0),
        scale_id="SC-1",
        scale_target_weight=12.5,
        scale_actual_reading=12.4,
        ingredients=[
            BatchIngredient(raw_material_id=1, batch_number="LOT-A", quantity=500),
        ],
    )


@pytest.fixture
def batch_payload() -> dict:
    """API body for a new in-progress batch."""
    return {
        "batch_date": "2024-03-15",
        "product_id": 10,
        "product_batch_number": "BT-0315",
        "product_best_before_date": "2025-03-15",
        "bags_count": 50,
        "bag_size": 0.25,
        "batch_started": "2024-03-15T09:00:00",
        "scale_id": "SC-1",
        "scale_target_weight": 12.5,
        "scale_actual_reading": 12.4,
        "ingredients": [{"raw_material_id": 1, "batch_number": "LOT-A", "quantity": 500}],
    }
