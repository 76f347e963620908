"""Validation adapters - Untrusted input to domain values."""

from .credentials import PydanticCredentialValidator

__all__ = ["PydanticCredentialValidator"]
