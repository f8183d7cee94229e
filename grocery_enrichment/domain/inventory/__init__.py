"""Inventory entries, fuzzy matching and the item store port."""
