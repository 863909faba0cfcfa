from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from library_app.services.auth_service import AuthService
from library_app.repositories.user_repo import UserRepo
from library_app.utils.auth import current_identity, is_authorized_admin

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/login", endpoint="auth_login")
def login():
    data = request.get_json(silent=True) or {}
    try:
        token, user = AuthService.login(
            (data.get("username") or "").strip(),
            (data.get("password") or "").strip()
        )
        return jsonify({
            "success": True,
            "access_token": token,
            "user": {"id": user.id, "username": user.username, "role": user.role}
        })
    except ValueError as e:
        return jsonify({"success": False, "message": str(e)}), 401


@auth_bp.get("/me", endpoint="auth_me")
@jwt_required()
def me():
    identity = current_identity()
    user = UserRepo.get_by_id(identity.user_id)
    if not user:
        return jsonify({"success": False, "message": "Kullanıcı bulunamadı"}), 404

    return jsonify({
        "success": True,
        "user": {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "role": identity.role or user.role,
            "is_admin": is_authorized_admin(identity),
        }
    })
