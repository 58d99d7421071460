"""Credential primitives shared by models and services."""

from .passwords import PasswordHasher, PasswordPolicyError, hasher_from_config

__all__ = ["PasswordHasher", "PasswordPolicyError", "hasher_from_config"]
