from dataclasses import dataclass

from flask_jwt_extended import get_jwt, get_jwt_identity

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Identity:
    """Caller identity handed explicitly to every ledger/report call."""

    user_id: int
    username: str
    role: str

    def __str__(self):
        return f"{self.username}#{self.user_id}"


def is_authorized_admin(identity) -> bool:
    return identity is not None and identity.role == ADMIN_ROLE


def current_identity() -> Identity:
    # JWT zaten doğrulanmış olmalı (verify_jwt_in_request / jwt_required)
    claims = get_jwt() or {}
    return Identity(
        user_id=int(get_jwt_identity()),
        username=claims.get("username", ""),
        role=claims.get("role", ""),
    )
