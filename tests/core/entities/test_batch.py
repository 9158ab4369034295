"""Tests for batch record entities."""

from datetime import datetime

from foodworks.core.entities.batch import (
    ALL_CHECKS,
    BatchChecklist,
    BatchIngredient,
    BatchManufacturingRecord,
    BatchStatus,
)


class TestBatchManufacturingRecord:
    def test_batch_size_derived(self):
        record = BatchManufacturingRecord(bags_count=40, bag_size=0.5)
        assert record.batch_size == 20.0

    def test_explicit_batch_size_kept_without_bag_size(self):
        record = BatchManufacturingRecord(bags_count=40, batch_size=18.0)
        assert record.batch_size == 18.0

    def test_status_from_finish_time(self, sample_batch):
        assert sample_batch.status == BatchStatus.IN_PROGRESS
        assert sample_batch.produced_quantity == 0.0

        sample_batch.batch_finished = datetime(2024, 3, 15, 17)
        assert sample_batch.status == BatchStatus.COMPLETED
        assert sample_batch.produced_quantity == 50.0

    def test_valid_ingredients(self):
        record = BatchManufacturingRecord(
            ingredients=[
                BatchIngredient(raw_material_id=1, quantity=5),
                BatchIngredient(raw_material_id=None, quantity=5),
                BatchIngredient(raw_material_id=2, quantity=0),
            ]
        )
        assert [i.raw_material_id for i in record.valid_ingredients()] == [1]

    def test_scale_deviation(self, sample_batch):
        assert round(sample_batch.scale_deviation_percent(), 2) == 0.8

    def test_scale_deviation_without_target(self, sample_batch):
        sample_batch.scale_target_weight = None
        assert sample_batch.scale_deviation_percent() is None


class TestBatchChecklist:
    def test_empty_checklist_outstanding(self):
        checklist = BatchChecklist()
        assert checklist.outstanding_checks == list(ALL_CHECKS)
        assert not checklist.is_complete

    def test_initials_required(self, complete_checklist):
        assert complete_checklist.is_complete
        complete_checklist.followed_gmp_initials = None
        assert complete_checklist.outstanding_checks == ["followed_gmp"]

    def test_completed_checks(self):
        checklist = BatchChecklist(text_clear=True, artwork_correct=True)
        assert checklist.completed_checks == ["artwork_correct", "text_clear"]

    def test_notes_round_trip_json(self):
        checklist = BatchChecklist(notes={"text_clear": "reprinted"})
        assert BatchChecklist.model_validate_json(checklist.model_dump_json()) == checklist
