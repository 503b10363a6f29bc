"""The requesting user, as seen by the ordering core.

Registration and login live outside this package; only the identifier and
role reach the order query path.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import ValidationError


class Role(Enum):
    ADMIN = "Admin"
    USER = "User"

    @staticmethod
    def parse(raw: str) -> Role:
        for role in Role:
            if role.value.lower() == raw.strip().lower():
                return role
        raise ValidationError(f"Unknown role: {raw!r}")


@dataclass(frozen=True)
class Requester:
    user_id: str
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
