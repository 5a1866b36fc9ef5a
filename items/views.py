from __future__ import annotations

from django.apps import apps
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from items.serializers import (
    ItemSerializer,
    MoveSerializer,
    PagedViewSerializer,
    PageQuerySerializer,
    SelectionSerializer,
    StatsSerializer,
    parse,
)


class CollectionAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes: list = []

    @property
    def collection(self):
        return apps.get_app_config("items").collection


class ItemList(CollectionAPIView):
    def get(self, request) -> Response:
        params = parse(PageQuerySerializer, request.query_params)
        view = self.collection.page(params)
        return Response(PagedViewSerializer(view).data)


class SelectedItemList(CollectionAPIView):
    def get(self, request) -> Response:
        items = self.collection.selected_items()
        return Response(
            {"selectedItems": ItemSerializer(items, many=True).data, "count": len(items)}
        )


class SelectionUpdate(CollectionAPIView):
    def patch(self, request) -> Response:
        params = parse(SelectionSerializer, request.data)
        count = self.collection.update_selection(params)
        return Response({"success": True, "selectedCount": count})


class OrderUpdate(CollectionAPIView):
    def patch(self, request) -> Response:
        params = parse(MoveSerializer, request.data)
        self.collection.move(params)
        return Response({"success": True, "message": "Order updated successfully"})


class OrderReset(CollectionAPIView):
    def patch(self, request) -> Response:
        self.collection.reset_order()
        return Response({"success": True, "message": "Custom order reset"})


class StatsView(CollectionAPIView):
    def get(self, request) -> Response:
        return Response(StatsSerializer(self.collection.stats()).data)
