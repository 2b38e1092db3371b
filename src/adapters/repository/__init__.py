"""Repository adapters - Persistence implementations."""

from .memory import InMemoryRegistryPersistence
from .postgres import PostgresRegistryPersistence, run_migrations

__all__ = ["InMemoryRegistryPersistence", "PostgresRegistryPersistence", "run_migrations"]
