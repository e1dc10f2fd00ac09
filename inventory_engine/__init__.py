"""Variant inventory aggregation engine."""
