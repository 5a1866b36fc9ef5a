import pytest
from django.apps import apps

from items.services.collection import Collection

TEST_SEED_COUNT = 100


@pytest.fixture(autouse=True)
def collection():
    """A small fresh collection served by the items app for each test."""
    config = apps.get_app_config("items")
    previous = config._collection
    config.collection = Collection.seeded(TEST_SEED_COUNT)
    yield config.collection
    config.collection = previous
