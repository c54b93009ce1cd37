"""Fishing log service: catch ingestion and season statistics."""
