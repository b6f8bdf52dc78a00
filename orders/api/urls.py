from django.urls import path
from .views import (
    AvailableOrderListAPIView,
    OrderDetailAPIView,
    OrderListCreateAPIView,
    OrderStatusUpdateAPIView,
)

urlpatterns = [
    path("orders/", OrderListCreateAPIView.as_view(), name="order-list"),
    path("orders/available/", AvailableOrderListAPIView.as_view(), name="order-available"),
    path("orders/<int:pk>/", OrderDetailAPIView.as_view(), name="order-detail"),
    path("orders/<int:pk>/status/", OrderStatusUpdateAPIView.as_view(), name="order-status"),
]
