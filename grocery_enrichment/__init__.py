"""Nutrition data reconciliation and enrichment for grocery items."""

__version__ = "0.1.0"
