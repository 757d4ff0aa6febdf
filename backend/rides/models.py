from django.db import models
from django.conf import settings
from django.utils import timezone


class Ride(models.Model):
    """One trip request moving through the ride lifecycle"""

    PENDING = 'PENDING'
    ACCEPTED = 'ACCEPTED'
    IN_PROGRESS = 'IN_PROGRESS'
    COMPLETED = 'COMPLETED'
    CANCELLED = 'CANCELLED'

    STATUS_CHOICES = [
        (PENDING, 'Pending'),
        (ACCEPTED, 'Accepted'),
        (IN_PROGRESS, 'In Progress'),
        (COMPLETED, 'Completed'),
        (CANCELLED, 'Cancelled'),
    ]

    TERMINAL_STATUSES = (COMPLETED, CANCELLED)
    ACTIVE_DRIVER_STATUSES = (ACCEPTED, IN_PROGRESS)

    # Foreign keys
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='requested_rides'
    )

    driver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='driven_rides'
    )

    # Locations are free-form descriptions
    pickup = models.CharField(max_length=255)
    destination = models.CharField(max_length=255)

    # Trip metadata supplied with the request, never recomputed here
    distance_km = models.FloatField(null=True, blank=True)
    duration_mins = models.PositiveIntegerField(null=True, blank=True)
    price_naira = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)

    # Timestamps are written explicitly so an injected clock is honoured
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'rides'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='rides_status_created_idx'),
            models.Index(fields=['student', 'status', 'updated_at'], name='rides_student_status_idx'),
            models.Index(fields=['driver', 'status'], name='rides_driver_status_idx'),
        ]

    def __str__(self):
        return f"Ride #{self.id} - {self.student} - {self.status}"

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES
