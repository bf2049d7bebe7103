"""Pydantic request/response models (DTOs)."""
