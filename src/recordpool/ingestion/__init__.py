"""Ingestion helpers that turn dispatcher actions into pool events."""
