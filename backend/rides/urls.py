from django.urls import path
from . import views

app_name = 'rides'

urlpatterns = [
    path('<int:ride_id>/', views.ride_detail, name='ride-detail'),
    path('<int:ride_id>/status/', views.update_ride_status, name='ride-status'),

    # Driver Ride Actions
    path('handle/<int:ride_id>/accept/', views.accept_ride, name='accept-ride'),
    path('handle/<int:ride_id>/reject/', views.reject_ride, name='reject-ride'),
]
