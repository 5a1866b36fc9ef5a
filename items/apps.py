from __future__ import annotations

import threading

from django.apps import AppConfig


class ItemsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "items"
    verbose_name = "Items"

    def ready(self) -> None:
        self._collection = None
        self._collection_lock = threading.Lock()

    @property
    def collection(self):
        """The process-wide collection, seeded on first use."""
        if self._collection is None:
            with self._collection_lock:
                if self._collection is None:
                    from items import conf
                    from items.services.collection import Collection

                    self._collection = Collection.seeded(
                        conf.SEED_COUNT,
                        conf.VALUE_TEMPLATE,
                        search_cache_size=conf.SEARCH_CACHE_SIZE,
                    )
        return self._collection

    @collection.setter
    def collection(self, value) -> None:
        self._collection = value
