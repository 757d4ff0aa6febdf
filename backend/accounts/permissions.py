# accounts/permissions.py
from rest_framework.permissions import BasePermission

from .models import User


class HasRole(BasePermission):
    """
    Allows access only to authenticated users whose role matches `role`.
    Keeps role check logic centralized.
    """
    role = None
    message = "You are not allowed to perform this action."

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return False
        return getattr(user, "role", None) == self.role


class IsStudent(HasRole):
    role = User.STUDENT
    message = "Only students can perform this action."


class IsDriver(HasRole):
    role = User.DRIVER
    message = "Only drivers can perform this action."
