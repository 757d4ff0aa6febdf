from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from accounts.identity import Principal
from accounts.permissions import IsDriver
from common.utils.responses import ride_error_response
from services.ride_management import (
    RideError,
    accept_ride as accept_ride_service,
    reject_ride as reject_ride_service,
    update_ride_status as update_ride_status_service,
    get_ride,
)
from .serializers import RideSerializer, RideStatusUpdateSerializer


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def ride_detail(request, ride_id):
    """Get ride details with student and driver info"""
    try:
        ride = get_ride(Principal.from_user(request.user), ride_id)
    except RideError as exc:
        return ride_error_response(exc)

    return Response(RideSerializer(ride).data)


# ==================== Driver Ride Actions ====================

@api_view(['POST'])
@permission_classes([IsAuthenticated, IsDriver])
def accept_ride(request, ride_id):
    """
    Accept a pending ride.

    Only one driver can win a ride. Losing a race returns 409 so the app can
    refresh the available list and try another ride.
    """
    try:
        result = accept_ride_service(Principal.from_user(request.user), ride_id)
    except RideError as exc:
        return ride_error_response(exc)

    return Response({
        'success': True,
        'message': result.message,
        'ride': RideSerializer(result.ride).data,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsDriver])
def reject_ride(request, ride_id):
    """Decline a pending ride, leaving it open for other drivers."""
    try:
        result = reject_ride_service(Principal.from_user(request.user), ride_id)
    except RideError as exc:
        return ride_error_response(exc)

    return Response({
        'success': True,
        'message': result.message,
        'ride': RideSerializer(result.ride).data,
    })


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def update_ride_status(request, ride_id):
    """
    Update ride status - CALLED BY ASSIGNED DRIVER OR ADMIN

    Body: {"status": "IN_PROGRESS" | "COMPLETED" | "CANCELLED"}
    """
    serializer = RideStatusUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        result = update_ride_status_service(
            Principal.from_user(request.user),
            ride_id,
            serializer.validated_data['status'],
        )
    except RideError as exc:
        return ride_error_response(exc)

    return Response({
        'success': True,
        'message': result.message,
        'ride': RideSerializer(result.ride).data,
    })
