"""Kroger Products API adapter."""
