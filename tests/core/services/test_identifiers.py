"""Tests for generated identifiers."""

import re
from datetime import date

from foodworks.core.services.identifiers import generate_order_number, generate_sku


class TestGenerateSku:
    def test_format(self):
        assert re.fullmatch(r"TEA-\d{7}", generate_sku("tea"))

    def test_default_category(self):
        assert generate_sku(None).startswith("PRO-")
        assert generate_sku(None, default_category="pack").startswith("PAC-")


class TestOrderNumber:
    def test_format(self):
        assert generate_order_number(date(2024, 3, 15), 1) == "SO-20240315-0001"

    def test_sequence_padding(self):
        assert generate_order_number(date(2024, 12, 1), 42) == "SO-20241201-0042"
