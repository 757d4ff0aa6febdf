"""
Role -> profile record lookup.

Each role stores its profile differently: drivers carry a DriverProfile row
(plate number), students and admins are fully described by the user row.
Callers ask `profile_for(role)` for a handle and use the common interface
instead of switching on the role themselves.
"""

import re

from django.apps import apps
from rest_framework import serializers

from .models import User

PLATE_NUMBER_RE = re.compile(r'^[A-Z]{3}-\d{3}[A-Z]{2}$')


class UserRecordProfile:
    """Profile handle for roles with no extra profile table."""

    def validate(self, data):
        return data

    def create(self, user, data):
        return user

    def describe(self, user):
        return {}


class DriverProfileRecord:
    """Profile handle backed by drivers.DriverProfile."""

    @property
    def model(self):
        return apps.get_model('drivers', 'DriverProfile')

    def validate(self, data):
        plate_number = (data.get('plate_number') or '').strip().upper()
        if not PLATE_NUMBER_RE.match(plate_number):
            raise serializers.ValidationError({
                'plate_number': 'Plate number is required for drivers and must be in the format ABC-123DE'
            })
        if self.model.objects.filter(plate_number=plate_number).exists():
            raise serializers.ValidationError({'plate_number': 'Plate number already registered'})
        data['plate_number'] = plate_number
        return data

    def create(self, user, data):
        return self.model.objects.create(user=user, plate_number=data['plate_number'])

    def describe(self, user):
        profile = self.model.objects.filter(user=user).first()
        return {'plate_number': profile.plate_number if profile else None}


PROFILE_HANDLES = {
    User.STUDENT: UserRecordProfile(),
    User.DRIVER: DriverProfileRecord(),
    User.ADMIN: UserRecordProfile(),
}


def profile_for(role):
    try:
        return PROFILE_HANDLES[role]
    except KeyError:
        raise ValueError(f"Unknown role: {role}")
