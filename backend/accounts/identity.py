"""
Authenticated principal handed to the ride services.

The services never look at tokens, sessions or passwords. Whatever
authenticated the request (simplejwt in the API, a plain user object in
tests and management commands) is reduced to an ``{id, role}`` pair here.
"""

from dataclasses import dataclass

from .models import User


@dataclass(frozen=True)
class Principal:
    id: int
    role: str

    @classmethod
    def from_user(cls, user) -> "Principal":
        return cls(id=user.pk, role=user.role)

    @property
    def is_student(self) -> bool:
        return self.role == User.STUDENT

    @property
    def is_driver(self) -> bool:
        return self.role == User.DRIVER

    @property
    def is_admin(self) -> bool:
        return self.role == User.ADMIN
