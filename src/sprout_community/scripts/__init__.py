"""Operational scripts for Sprout Community."""
