from rest_framework import serializers
from django.contrib.auth import get_user_model

User = get_user_model()


class StudentBasicSerializer(serializers.ModelSerializer):
    """
    Basic student representation used inside ride responses.
    """
    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'phone_number']
