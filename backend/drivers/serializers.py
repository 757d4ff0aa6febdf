from rest_framework import serializers
from drivers.models import DriverProfile
from accounts.serializers import UserSerializer


class DriverProfileSerializer(serializers.ModelSerializer):
    """
    Full driver profile serializer
    """
    user = UserSerializer(read_only=True)

    class Meta:
        model = DriverProfile
        fields = [
            "id",
            "user",
            "plate_number",
            "created_at",
        ]
        read_only_fields = fields
