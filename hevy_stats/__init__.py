"""Hevy Stats — CSV/API workout ingestion and training analytics."""
