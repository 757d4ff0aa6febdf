"""
Services package - Business logic layer.

This package contains all business logic services that operate on Django models
but are decoupled from the HTTP layer.

Modules:
    - ride_management: Core ride lifecycle operations
    - stats: Driver earnings and distance rollups
"""
