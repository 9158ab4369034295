"""Tests for batch workflow rules."""

from datetime import datetime

import pytest

from foodworks.core.entities.batch import BatchIngredient
from foodworks.core.exceptions import BatchValidationError, InvalidBatchTransitionError
from foodworks.core.services.batch_workflow import (
    check_transition,
    ingredient_totals,
    plan_batch_adjustments,
    validate_batch_edit,
    validate_new_batch,
)


class TestValidateNewBatch:
    def test_valid(self, sample_batch):
        validate_new_batch(sample_batch)

    def test_zero_ingredients_rejected(self, sample_batch):
        sample_batch.ingredients = []
        with pytest.raises(BatchValidationError) as exc_info:
            validate_new_batch(sample_batch)
        assert exc_info.value.details["missing"] == ["ingredients"]

    def test_ingredient_without_quantity_does_not_count(self, sample_batch):
        sample_batch.ingredients = [BatchIngredient(raw_material_id=1, quantity=0)]
        with pytest.raises(BatchValidationError):
            validate_new_batch(sample_batch)

    def test_lists_every_missing_field(self, sample_batch):
        sample_batch.product_batch_number = None
        sample_batch.scale_actual_reading = None
        with pytest.raises(BatchValidationError) as exc_info:
            validate_new_batch(sample_batch)
        assert exc_info.value.details["missing"] == [
            "product_batch_number",
            "scale_actual_reading",
        ]


class TestValidateEdit:
    def test_needs_batch_size(self, sample_batch):
        sample_batch.bags_count = 0
        sample_batch.batch_size = None
        with pytest.raises(BatchValidationError):
            validate_batch_edit(sample_batch)


class TestTransitions:
    def test_cannot_reopen(self, sample_batch):
        finished = sample_batch.model_copy(update={"batch_finished": datetime(2024, 3, 15, 17)})
        with pytest.raises(InvalidBatchTransitionError):
            check_transition(finished, sample_batch)

    def test_can_complete(self, sample_batch):
        finished = sample_batch.model_copy(update={"batch_finished": datetime(2024, 3, 15, 17)})
        check_transition(sample_batch, finished)


class TestPlanBatchAdjustments:
    def test_create_consumes_ingredients(self, sample_batch):
        plan = plan_batch_adjustments(None, sample_batch)
        assert plan.material_deltas == {1: -500}
        assert plan.product_deltas == {}

    def test_create_finished_credits_bags(self, sample_batch):
        sample_batch.batch_finished = datetime(2024, 3, 15, 17)
        plan = plan_batch_adjustments(None, sample_batch)
        assert plan.product_deltas == {10: 50}

    def test_completion_credits_output_only(self, sample_batch):
        finished = sample_batch.model_copy(
            update={"batch_finished": datetime(2024, 3, 15, 17)}, deep=True
        )
        plan = plan_batch_adjustments(sample_batch, finished)
        assert plan.material_deltas == {}
        assert plan.product_deltas == {10: 50}

    def test_bag_count_edit_on_finished_batch(self, sample_batch):
        sample_batch.batch_finished = datetime(2024, 3, 15, 17)
        edited = sample_batch.model_copy(update={"bags_count": 70}, deep=True)
        plan = plan_batch_adjustments(sample_batch, edited)
        assert plan.product_deltas == {10: 20}
        assert plan.material_deltas == {}

    def test_unchanged_save_is_empty(self, sample_batch):
        same = sample_batch.model_copy(deep=True)
        assert plan_batch_adjustments(sample_batch, same).is_empty

    def test_ingredient_decrease_returns_stock(self, sample_batch):
        edited = sample_batch.model_copy(deep=True)
        edited.ingredients = [BatchIngredient(raw_material_id=1, quantity=300)]
        plan = plan_batch_adjustments(sample_batch, edited)
        assert plan.material_deltas == {1: 200}

    def test_ingredient_swap(self, sample_batch):
        edited = sample_batch.model_copy(deep=True)
        edited.ingredients = [BatchIngredient(raw_material_id=2, quantity=100)]
        plan = plan_batch_adjustments(sample_batch, edited)
        assert plan.material_deltas == {1: 500, 2: -100}

    def test_totals_merge_lots(self, sample_batch):
        sample_batch.ingredients.append(
            BatchIngredient(raw_material_id=1, batch_number="LOT-B", quantity=250)
        )
        assert ingredient_totals(sample_batch) == {1: 750}
