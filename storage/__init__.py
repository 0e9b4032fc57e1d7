"""Credential store backends."""

from .abstract_store import AbstractCredentialStore
from .sql_store import SQLCredentialStore

__all__ = ["AbstractCredentialStore", "SQLCredentialStore"]
