"""Adapters – persistence-layer integrations (install the matching extra)."""
