"""Orders API views.

List and place orders on the same endpoint (the list is scoped to the
caller's role), expose the assignment pool to delivery partners, return a
single order to the parties involved in it, and apply status transitions.
All reads and writes go through an OrderStore instance created per request.
"""

from collections.abc import Mapping

from django.conf import settings
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from orders.models import Order
from orders.store import OrderStore
from profiles.directory import actor_for_user
from profiles.models import Profile
from .permissions import IsCustomerUser, IsPartnerUser
from .serializers import (
    AvailableOrderSerializer,
    OrderCreateSerializer,
    OrderOutputSerializer,
    OrderStatusPatchSerializer,
)


# ----------------------------- helpers (module-level) -----------------------------

def _validate_patch_only_status(data: dict):
    """Allow only 'status' and 'reason'; return a 400 Response otherwise."""
    if not isinstance(data, Mapping):
        return Response(
            {"detail": "Expected a JSON object with 'status' and optional 'reason'."},
            status=status.HTTP_400_BAD_REQUEST,
        )
    allowed = {"status", "reason"}
    extra = set(data.keys()) - allowed
    if extra:
        return Response(
            {"detail": f"Only 'status' and 'reason' may be sent. Invalid fields: {', '.join(sorted(extra))}."},
            status=status.HTTP_400_BAD_REQUEST,
        )
    return None


def _is_offline_partner(user) -> bool:
    prof = getattr(user, "profile", None)
    return getattr(prof, "availability", "") == Profile.Availability.OFFLINE


class OrderStoreMixin:
    """Hands each request its OrderStore and the caller's actor."""

    store_class = OrderStore

    def get_store(self) -> OrderStore:
        return self.store_class()

    def get_actor(self):
        return actor_for_user(self.request.user)


# --------------------------------------- views ---------------------------------------

class OrderListCreateAPIView(OrderStoreMixin, generics.ListCreateAPIView):
    """GET: orders visible to the caller's role, optional ?status= filter.
    POST: place a new order (customer-only).
    """

    queryset = Order.objects.all()

    def get_permissions(self):
        """Customer-only on POST, otherwise just authenticated."""
        if self.request.method == "POST":
            return [IsAuthenticated(), IsCustomerUser()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        """Use output serializer for GET and input serializer for POST."""
        return OrderOutputSerializer if self.request.method == "GET" else OrderCreateSerializer

    # --- GET ---
    def list(self, request, *args, **kwargs):
        """Customers see their own orders, owners their restaurant's, partners
        the ones assigned to them and admins everything."""
        orders = self.get_store().orders_for_actor(
            self.get_actor(), request.query_params.get("status")
        )
        return Response(OrderOutputSerializer(orders, many=True).data, status=status.HTTP_200_OK)

    # --- POST ---
    def create(self, request, *args, **kwargs):
        """Validate and place the order, returning the full order payload."""
        serializer = OrderCreateSerializer(
            data=request.data,
            context={"request": request, "store": self.get_store(), "actor": self.get_actor()},
        )
        serializer.is_valid(raise_exception=True)
        order = serializer.save()
        return Response(OrderOutputSerializer(order).data, status=status.HTTP_201_CREATED)


class AvailableOrderListAPIView(OrderStoreMixin, generics.ListAPIView):
    """GET /api/orders/available/ -> ready orders without a partner (partner-only).

    Offline partners get an empty pool while
    ``settings.ASSIGNMENT_POOL_HIDE_FROM_OFFLINE_PARTNERS`` is on.
    """

    queryset = Order.objects.all()
    serializer_class = AvailableOrderSerializer
    permission_classes = [IsAuthenticated, IsPartnerUser]

    def list(self, request, *args, **kwargs):
        if settings.ASSIGNMENT_POOL_HIDE_FROM_OFFLINE_PARTNERS and _is_offline_partner(request.user):
            return Response([], status=status.HTTP_200_OK)
        orders = self.get_store().available_orders()
        return Response(AvailableOrderSerializer(orders, many=True).data, status=status.HTTP_200_OK)


class OrderDetailAPIView(OrderStoreMixin, generics.RetrieveAPIView):
    """GET /api/orders/{id}/ -> the order, if the caller is involved in it."""

    queryset = Order.objects.all()
    serializer_class = OrderOutputSerializer
    permission_classes = [IsAuthenticated]

    def retrieve(self, request, *args, **kwargs):
        order = self.get_store().get_order_for_actor(int(self.kwargs["pk"]), self.get_actor())
        return Response(OrderOutputSerializer(order).data, status=status.HTTP_200_OK)


class OrderStatusUpdateAPIView(OrderStoreMixin, generics.UpdateAPIView):
    """PATCH/PUT /api/orders/{id}/status/ -> apply one lifecycle transition.

    400 for a bad payload or an illegal transition, 403 when the caller may
    not drive it, 404 for unknown orders, 409 when a concurrent update won.
    """

    queryset = Order.objects.all()
    serializer_class = OrderStatusPatchSerializer
    permission_classes = [IsAuthenticated]

    def update(self, request, *args, **kwargs):
        bad = _validate_patch_only_status(request.data)
        if bad is not None:
            return bad
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = self.get_store().apply_transition(
            int(self.kwargs["pk"]),
            serializer.validated_data["status"],
            self.get_actor(),
            serializer.validated_data.get("reason"),
        )
        return Response(OrderOutputSerializer(order).data, status=status.HTTP_200_OK)
