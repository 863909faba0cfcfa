import logging

import click
from flask import Flask, jsonify

from library_app.config import Config
from library_app.extensions import db, migrate, jwt


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO))

    # 1) Önce db init (db.engine / db.session için şart)
    db.init_app(app)

    # 2) Diğer extension'lar
    migrate.init_app(app, db)
    jwt.init_app(app)

    # modeller metadata'ya kayıtlı olsun (create_all / migrate)
    from library_app import models  # noqa: F401

    if app.config.get("AUTO_CREATE_TABLES"):
        with app.app_context():
            db.create_all()

    # 3) API blueprintleri
    from library_app.controllers.auth_controller import auth_bp
    from library_app.controllers.book_controller import book_bp
    from library_app.controllers.student_controller import student_bp
    from library_app.controllers.borrow_controller import borrow_bp
    from library_app.controllers.stats_controller import stats_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(book_bp, url_prefix="/books")
    app.register_blueprint(student_bp, url_prefix="/students")
    app.register_blueprint(borrow_bp, url_prefix="/borrow")
    app.register_blueprint(stats_bp, url_prefix="/stats")

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    @app.cli.command("create-admin")
    @click.argument("username")
    @click.argument("email")
    @click.password_option()
    def create_admin(username, email, password):
        """Yönetici hesabı oluşturur."""
        from library_app.services.auth_service import AuthService
        user = AuthService.register(username=username, email=email, password=password, role="admin")
        click.echo(f"admin created: {user.username} (id={user.id})")

    app.logger.info("[app] library ledger service ready")
    return app
