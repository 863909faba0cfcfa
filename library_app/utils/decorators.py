from functools import wraps
from flask_jwt_extended import verify_jwt_in_request
from flask import jsonify

from library_app.utils.auth import current_identity, is_authorized_admin

def admin_required(fn):
    """
    JWT doğrular, kimliği admin kapısından geçirir ve view'e
    ``identity`` keyword argümanı olarak verir.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        identity = current_identity()
        if not is_authorized_admin(identity):
            return jsonify({"success": False, "message": "Yetkisiz"}), 403
        return fn(*args, identity=identity, **kwargs)
    return wrapper
