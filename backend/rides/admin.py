"""Tells what to show in the Django admin interface for rides app"""

from django.contrib import admin
from .models import Ride

@admin.register(Ride)
class RideAdmin(admin.ModelAdmin):
    """Ride admin"""
    list_display = ['id', 'student', 'driver', 'status', 'pickup', 'destination', 'price_naira', 'created_at', 'updated_at']
    list_filter = ['status', 'created_at']
    search_fields = ['student__username', 'driver__username', 'pickup', 'destination']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'
