from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token

from library_app.errors import InvalidRequest
from library_app.models.user import User
from library_app.repositories.user_repo import UserRepo

class AuthService:
    @staticmethod
    def register(username: str, email: str, password: str, role: str = "user"):
        if not username or not email or not password:
            raise InvalidRequest("username/email/password zorunlu")
        if UserRepo.get_by_username(username) or UserRepo.get_by_email(email):
            raise InvalidRequest("Kullanıcı adı veya e-posta zaten kayıtlı")

        user = User(
            username=username,
            email=email,
            password_hash=generate_password_hash(password),
            role=role
        )
        UserRepo.create(user)
        current_app.logger.info(f"[auth] user registered {username} role={role}")
        return user

    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(
            identity=str(user.id),
            additional_claims={"role": user.role, "username": user.username}
        )

    @staticmethod
    def login(username: str, password: str):
        user = UserRepo.get_by_username(username)
        if not user or not check_password_hash(user.password_hash, password):
            current_app.logger.warning(f"[auth] failed login for {username!r}")
            raise ValueError("Hatalı kullanıcı adı veya şifre")

        return AuthService.issue_token(user), user
