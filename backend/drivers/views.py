from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from accounts.identity import Principal
from accounts.permissions import IsDriver
from common.utils.responses import ride_error_response
from drivers.models import DriverProfile
from drivers.serializers import DriverProfileSerializer
from rides.serializers import AvailableRideSerializer, RideSerializer, serialize_ride_page
from services.ride_management import (
    RideError,
    list_available_rides,
    get_current_driver_ride,
    get_ride_history,
)
from services.stats import get_driver_stats


class DriverProfileView(APIView):
    permission_classes = [IsAuthenticated, IsDriver]

    def get(self, request):
        try:
            profile = request.user.driver_profile
        except DriverProfile.DoesNotExist:
            return Response({"error": "Driver profile not found"}, status=404)

        serializer = DriverProfileSerializer(profile, context={"request": request})
        return Response(serializer.data)


class AvailableRidesView(APIView):
    """Open pool of pending rides. A listed ride may be taken a moment later."""
    permission_classes = [IsAuthenticated, IsDriver]

    def get(self, request):
        try:
            rides = list_available_rides(Principal.from_user(request.user))
        except RideError as exc:
            return ride_error_response(exc)

        serialized = AvailableRideSerializer(rides, many=True)
        return Response({"rides": serialized.data, "count": len(serialized.data)})


class DriverCurrentRideView(APIView):
    permission_classes = [IsAuthenticated, IsDriver]

    def get(self, request):
        try:
            ride = get_current_driver_ride(Principal.from_user(request.user))
        except RideError as exc:
            return ride_error_response(exc)

        if not ride:
            return Response({"message": "No current ride assigned", "ride": None})

        return Response({"ride": RideSerializer(ride).data})


class DriverStatsView(APIView):
    """Earnings and distance for today, this week and all time."""
    permission_classes = [IsAuthenticated, IsDriver]

    def get(self, request):
        try:
            stats = get_driver_stats(Principal.from_user(request.user))
        except RideError as exc:
            return ride_error_response(exc)

        return Response(stats)


class DriverRideHistoryView(APIView):
    permission_classes = [IsAuthenticated, IsDriver]

    def get(self, request):
        try:
            ride_page = get_ride_history(
                Principal.from_user(request.user),
                page=request.query_params.get("page"),
                limit=request.query_params.get("limit"),
            )
        except RideError as exc:
            return ride_error_response(exc)

        return Response(serialize_ride_page(ride_page))
