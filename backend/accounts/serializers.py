from django.contrib.auth import authenticate
from django.db import transaction
from rest_framework import serializers

from .models import User
from .profiles import profile_for


class UserSerializer(serializers.ModelSerializer):
    profile = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "email",
            "role",
            "phone_number",
            "date_joined",
            "profile",
        ]
        read_only_fields = ["id", "email", "role", "date_joined", "profile"]

    def get_profile(self, obj):
        """Role specific details (plate number for drivers, nothing for students)."""
        return profile_for(obj.role).describe(obj)


class UserUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["name", "phone_number"]


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, data):
        # username mirrors email, see RegisterSerializer.create
        user = authenticate(username=data["email"].lower(), password=data["password"])
        if not user:
            raise serializers.ValidationError("Invalid credentials")
        return user


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES)
    plate_number = serializers.CharField(required=False, allow_blank=True)

    class Meta:
        model = User
        fields = ['name', 'email', 'password', 'role', 'phone_number', 'plate_number']

    def validate_email(self, value):
        value = value.lower()
        if User.objects.filter(email=value).exists():
            raise serializers.ValidationError("Email already exists")
        return value

    def validate(self, data):
        return profile_for(data['role']).validate(data)

    @transaction.atomic
    def create(self, validated_data):
        profile_data = {'plate_number': validated_data.pop('plate_number', None)}

        user = User.objects.create_user(
            username=validated_data['email'],
            email=validated_data['email'],
            password=validated_data['password'],
            name=validated_data['name'],
            role=validated_data['role'],
            phone_number=validated_data.get('phone_number', ''),
        )
        profile_for(user.role).create(user, profile_data)

        return user
