"""Hashing adapters - One-way secret transforms."""

from .bcrypt_hasher import BcryptSecretHasher

__all__ = ["BcryptSecretHasher"]
