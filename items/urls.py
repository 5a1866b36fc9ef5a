from django.urls import path

from . import views

urlpatterns = [
    path("items", views.ItemList.as_view(), name="item-list"),
    path("items/selected", views.SelectedItemList.as_view(), name="item-selected"),
    path("items/selection", views.SelectionUpdate.as_view(), name="item-selection"),
    path("items/order", views.OrderUpdate.as_view(), name="item-order"),
    path("items/order/reset", views.OrderReset.as_view(), name="item-order-reset"),
    path("stats", views.StatsView.as_view(), name="item-stats"),
]
