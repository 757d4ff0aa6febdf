from rest_framework import serializers
from django.contrib.auth import get_user_model
from .models import Ride

from students.serializers import StudentBasicSerializer

User = get_user_model()


class DriverBasicSerializer(serializers.ModelSerializer):
    """
    Lite version of driver info for ride details
    (sent to students once a ride is accepted).
    """
    plate_number = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'phone_number', 'plate_number']

    def get_plate_number(self, obj):
        profile = getattr(obj, 'driver_profile', None)
        return profile.plate_number if profile else None


class RideSerializer(serializers.ModelSerializer):
    """Serializer for Rides"""
    student = StudentBasicSerializer(read_only=True)
    driver = DriverBasicSerializer(read_only=True)

    class Meta:
        model = Ride
        fields = ['id', 'student', 'driver', 'pickup', 'destination',
                  'distance_km', 'duration_mins', 'price_naira',
                  'status', 'created_at', 'updated_at']
        read_only_fields = fields


class AvailableRideSerializer(serializers.ModelSerializer):
    """What a driver sees when browsing the open pool"""
    student = StudentBasicSerializer(read_only=True)

    class Meta:
        model = Ride
        fields = ['id', 'pickup', 'destination', 'distance_km', 'duration_mins',
                  'price_naira', 'created_at', 'student']
        read_only_fields = fields


class RideRequestCreateSerializer(serializers.Serializer):
    """
    Shape of a ride request body.

    Pickup/destination presence is enforced by the lifecycle service so the
    same rule applies outside HTTP.
    """
    pickup = serializers.CharField(required=False, allow_blank=True, default="")
    destination = serializers.CharField(required=False, allow_blank=True, default="")
    distance_km = serializers.FloatField(required=False, allow_null=True, min_value=0)
    duration_mins = serializers.IntegerField(
        required=False, allow_null=True, min_value=0, max_value=2147483647
    )
    price_naira = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True, min_value=0
    )


class RideStatusUpdateSerializer(serializers.Serializer):
    """Serializer for the status override endpoint"""
    status = serializers.CharField()


def serialize_ride_page(ride_page):
    """History response body: page, limit, totalPages, totalRides, rides."""
    return {
        'page': ride_page.page,
        'limit': ride_page.limit,
        'totalPages': ride_page.total_pages,
        'totalRides': ride_page.total_rides,
        'rides': RideSerializer(ride_page.rides, many=True).data,
    }
