"""Deterministic garden geometry and per-bed display state."""
