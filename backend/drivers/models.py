from django.db import models
from django.utils import timezone
from django.conf import settings

User = settings.AUTH_USER_MODEL

class DriverProfile(models.Model):
    """Driver-specific details"""

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='driver_profile')

    # Vehicle details (format ABC-123DE, validated on registration)
    plate_number = models.CharField(max_length=20, unique=True)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'driver_profiles'

    def __str__(self):
        return f"{self.user.username} - {self.plate_number}"
