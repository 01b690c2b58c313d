"""Storage backends.

A store exposes ``transaction()``, a context manager yielding a transaction
object with the indexed insert/get/update/delete operations used by the board,
column and task modules. The transaction commits when the block exits cleanly
and rolls back when it raises.
"""

from .memory import MemoryStore
from .postgres import PostgresStore


def open_store(settings):
    if settings.store_backend == "memory":
        return MemoryStore()
    return PostgresStore(settings.connection_params())


__all__ = ["MemoryStore", "PostgresStore", "open_store"]
