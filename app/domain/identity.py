# app/domain/identity.py
from dataclasses import dataclass
from typing import Optional

from app.domain.errors import Forbidden, Unauthorized
from app.utils.settings import ADMIN_ROLES


@dataclass(frozen=True)
class Identity:
    """Kto wola operacje. Przekazywane jawnie do serwisow, nigdy globalnie."""

    user_id: Optional[int] = None
    role: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.role in ADMIN_ROLES

    def check_authenticated(self) -> None:
        if not self.is_authenticated:
            raise Unauthorized("Authentication required")

    def check_admin(self) -> None:
        self.check_authenticated()
        if not self.is_admin:
            raise Forbidden("Admin role required")
