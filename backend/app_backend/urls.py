from django.contrib import admin
from django.urls import path, include

from .views import health_check

urlpatterns = [
    path('admin/', admin.site.urls),
    path("health/", health_check), # Health check endpoint

    # Authentication endpoints (at /api/auth/)
    path('api/auth/', include('accounts.urls')),  # register, login, refresh, me

    # Student APIs (request, current ride, cancel, history)
    path('api/student/', include('students.urls')),

    # Driver APIs (available rides, current ride, stats, history)
    path('api/driver/', include('drivers.urls')),

    # Rides endpoints (at /api/rides/): details, accept/reject, status updates
    path('api/rides/', include('rides.urls')),
]
