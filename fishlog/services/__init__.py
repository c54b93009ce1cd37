"""Service layer for catch ingestion and statistics."""
