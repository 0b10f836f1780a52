from typing import ClassVar

from app.config.settings import Settings
from app.store.base import BaseJobReporter, BaseRecordStore
from app.store.flatfile_adapter import FlatfileJobReporter, FlatfileRecordStore, build_http_client
from app.store.memory_adapter import InMemoryJobReporter, InMemoryRecordStore


class RecordStoreFactory:
    """Creates the configured record store and job reporter adapters."""

    SUPPORTED_BACKENDS: ClassVar[tuple[str, ...]] = ("flatfile", "memory")

    @classmethod
    def create(cls, settings: Settings) -> tuple[BaseRecordStore, BaseJobReporter]:
        """Create a store/reporter pair sharing one HTTP client where applicable."""
        backend = settings.store_backend.lower()
        if backend == "memory":
            return InMemoryRecordStore(), InMemoryJobReporter()
        if backend == "flatfile":
            if not settings.flatfile_api_key.strip():
                raise ValueError("flatfile_api_key is required for store_backend=flatfile")
            client = build_http_client(
                base_url=settings.flatfile_api_base_url,
                api_key=settings.flatfile_api_key,
                timeout_seconds=settings.flatfile_timeout_seconds,
            )
            return FlatfileRecordStore(client), FlatfileJobReporter(client)
        raise ValueError(
            f"Unknown store backend '{backend}'. Choose from: {list(cls.SUPPORTED_BACKENDS)}"
        )
