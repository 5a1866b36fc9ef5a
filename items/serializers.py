"""Request parsing (parse-or-reject) and response shapes for the items API."""

from __future__ import annotations

from rest_framework import serializers

from items import conf
from items.services.errors import MalformedInput
from items.services.inputs import MoveInput, PageQuery, SelectionInput


class StrictIntegerField(serializers.IntegerField):
    """JSON numbers only: no numeric strings, no booleans, no floats."""

    default_error_messages = {"invalid": "A JSON integer is required."}

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, int):
            self.fail("invalid")
        return super().to_internal_value(data)


class PageQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, default=conf.DEFAULT_PAGE_SIZE)
    search = serializers.CharField(allow_blank=True, default="", trim_whitespace=False)

    def to_input(self) -> PageQuery:
        data = self.validated_data
        return PageQuery(page=data["page"], limit=data["limit"], search=data["search"])


class MoveSerializer(serializers.Serializer):
    fromIndex = StrictIntegerField()
    toIndex = StrictIntegerField()

    def to_input(self) -> MoveInput:
        data = self.validated_data
        return MoveInput(from_index=data["fromIndex"], to_index=data["toIndex"])


class SelectionSerializer(serializers.Serializer):
    selectedIds = serializers.ListField(child=StrictIntegerField(), default=list)
    unSelectedIds = serializers.ListField(child=StrictIntegerField(), default=list)

    def to_input(self) -> SelectionInput:
        data = self.validated_data
        return SelectionInput(
            selected_ids=frozenset(data["selectedIds"]),
            unselected_ids=frozenset(data["unSelectedIds"]),
        )


def _flatten(errors, prefix: str = "") -> list[str]:
    if isinstance(errors, dict):
        out = []
        for key, value in errors.items():
            if key == "non_field_errors":
                name = prefix
            elif isinstance(key, int):
                name = f"{prefix}[{key}]"
            else:
                name = f"{prefix}.{key}" if prefix else str(key)
            out.extend(_flatten(value, name))
        return out
    if isinstance(errors, list):
        out = []
        for value in errors:
            out.extend(_flatten(value, prefix))
        return out
    return [f"{prefix}: {errors}" if prefix else str(errors)]


def parse(serializer_class, data):
    """Validate ``data`` and return the frozen input, or raise MalformedInput."""
    if data is None or not hasattr(data, "get"):
        raise MalformedInput("Request body must be a JSON object")
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        raise MalformedInput("; ".join(_flatten(serializer.errors)))
    return serializer.to_input()


class ItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    value = serializers.CharField()
    selected = serializers.BooleanField()
    defaultIndex = serializers.IntegerField(source="default_index")
    reorderedIndex = serializers.IntegerField(source="reordered_index", allow_null=True)


class PagedViewSerializer(serializers.Serializer):
    items = ItemSerializer(many=True)
    totalItems = serializers.IntegerField(source="total_items")
    totalPages = serializers.IntegerField(source="total_pages")
    currentPage = serializers.IntegerField(source="current_page")
    hasMore = serializers.BooleanField(source="has_more")


class StatsSerializer(serializers.Serializer):
    totalItems = serializers.IntegerField(source="total_items")
    selectedItems = ItemSerializer(source="selected_items", many=True)
    reorderedItems = ItemSerializer(source="reordered_items", many=True)
    reorderedCount = serializers.IntegerField(source="reordered_count")
    memoryUsage = serializers.DictField(source="memory_usage", child=serializers.IntegerField())
