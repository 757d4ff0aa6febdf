# students/views/rides.py

from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from accounts.identity import Principal
from accounts.permissions import IsStudent
from common.utils.responses import ride_error_response
from rides.serializers import RideSerializer, RideRequestCreateSerializer, serialize_ride_page
from services.ride_management import (
    RideError,
    request_ride,
    cancel_ride,
    get_current_student_ride,
    get_ride_history,
)


class StudentRequestRideView(APIView):
    """
    POST: Student requests a ride.
    """
    permission_classes = [IsAuthenticated, IsStudent]

    def post(self, request):
        serializer = RideRequestCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            result = request_ride(Principal.from_user(request.user), **serializer.validated_data)
        except RideError as exc:
            return ride_error_response(exc)

        return Response({
            "message": result.message,
            "ride": RideSerializer(result.ride).data,
        }, status=status.HTTP_201_CREATED)


class StudentCurrentRideView(APIView):
    """
    GET: Student polling endpoint to get current ride.
    """
    permission_classes = [IsAuthenticated, IsStudent]

    def get(self, request):
        try:
            ride = get_current_student_ride(Principal.from_user(request.user))
        except RideError as exc:
            return ride_error_response(exc)

        if not ride:
            return Response({
                "has_active_ride": False,
                "message": "No active ride found",
                "ride": None,
            })

        resp = {
            "has_active_ride": True,
            "ride": RideSerializer(ride).data,
            "status": ride.status,
            "driver_assigned": ride.driver_id is not None,
        }

        if ride.status == "PENDING":
            resp["message"] = "Waiting for a driver to accept..."
        elif ride.status == "ACCEPTED":
            resp["message"] = "Driver is on the way!"
        else:
            resp["message"] = "Ride in progress."

        return Response(resp)


class StudentCancelRideView(APIView):
    """
    POST: Student cancels a ride (limited per week).
    """
    permission_classes = [IsAuthenticated, IsStudent]

    def post(self, request, ride_id: int):
        try:
            result = cancel_ride(Principal.from_user(request.user), ride_id)
        except RideError as exc:
            return ride_error_response(exc)

        body = {
            "success": True,
            "message": result.message,
            "ride": RideSerializer(result.ride).data,
        }
        if result.warning:
            body["warning"] = result.warning

        return Response(body)


class StudentRideHistoryView(APIView):
    """
    GET: Paginated ride history (?page=1&limit=10), newest first.
    """
    permission_classes = [IsAuthenticated, IsStudent]

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
