"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.properties.selectors import find_property
from shared.application.message_bus import message_bus
from shared.exceptions import NotFoundError, RentalCoreError

from .application.command_handlers import CancelBookingCommand
from .models import Booking
from .services import get_active_booking, is_property_booked
from .serializers import BookingCancelSerializer, BookingSerializer


def domain_error_response(exc: RentalCoreError) -> Response:
    """Map a domain error onto an HTTP response."""
    http_status = status.HTTP_404_NOT_FOUND if isinstance(exc, NotFoundError) else status.HTTP_409_CONFLICT
    return Response({"detail": str(exc), "code": exc.code}, status=http_status)


class BookingViewSet(viewsets.ReadOnlyModelViewSet):
    """Tenants see their own bookings, staff see all of them."""

    queryset = Booking.objects.select_related("property", "tenant", "lease").all()
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):  # type: ignore
        user = self.request.user
        qs = super().get_queryset()
        if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
            return qs
        return qs.filter(tenant=user)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        serializer = BookingCancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            booking = message_bus.handle_command(
                CancelBookingCommand(
                    booking_id=booking.pk,
                    reason=serializer.validated_data["reason"] or f"Cancelled by user {request.user.pk}",
                )
            )
        except RentalCoreError as exc:
            return domain_error_response(exc)

        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    @action(detail=False, methods=["get"], url_path="me")
    def me(self, request):  # type: ignore
        """The caller's ACTIVE booking, or ``null`` when there is none."""
        booking = get_active_booking(request.user.pk)
        data = BookingSerializer(booking, context=self.get_serializer_context()).data if booking else None
        return Response({"active": booking is not None, "booking": data})

    @action(
        detail=False,
        methods=["get"],
        url_path=r"property/(?P<property_id>\d{1,18})/status",
        url_name="property-status",
    )
    def property_status(self, request, property_id=None):  # type: ignore
        try:
            property_obj = find_property(int(property_id))
        except NotFoundError as exc:
            return domain_error_response(exc)
        return Response({"property_id": property_obj.pk, "booked": is_property_booked(property_obj.pk)})
