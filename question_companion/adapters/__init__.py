"""Presentation adapters (CLI, web API)."""
