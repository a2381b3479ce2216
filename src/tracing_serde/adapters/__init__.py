"""Adapters connecting the core model to storage and to stdlib logging."""
