"""Computation engines."""
