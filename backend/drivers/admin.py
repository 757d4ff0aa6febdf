from django.contrib import admin
from .models import DriverProfile


@admin.register(DriverProfile)
class DriverProfileAdmin(admin.ModelAdmin):
    """Driver profile admin"""
    list_display = ['user', 'plate_number', 'created_at']
    search_fields = ['user__username', 'user__name', 'plate_number']
    readonly_fields = ['created_at']
