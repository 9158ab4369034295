"""Foodworks: manufacturing back office for food and beverage producers."""

__version__ = "1.0.0"
