from django.conf import settings

SEED_COUNT = int(getattr(settings, "ITEMS_SEED_COUNT", 1_000_000))
VALUE_TEMPLATE = getattr(settings, "ITEMS_VALUE_TEMPLATE", "Item {n}")
DEFAULT_PAGE_SIZE = int(getattr(settings, "ITEMS_DEFAULT_PAGE_SIZE", 20))
SEARCH_CACHE_SIZE = int(getattr(settings, "ITEMS_SEARCH_CACHE_SIZE", 8))
