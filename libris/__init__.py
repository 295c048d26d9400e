from flask import Flask, jsonify

from libris.config import Config
from libris.db_objects import ensure_db_objects
from libris.extensions import db, jwt, mail, migrate


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # db first: ensure_db_objects needs db.engine
    db.init_app(app)
    ensure_db_objects(app)

    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)

    from libris.controllers.admin_controller import admin_bp
    from libris.controllers.book_controller import book_bp
    from libris.controllers.users_controller import users_bp
    from libris.controllers.web_controller import web_bp
    app.register_blueprint(web_bp)
    app.register_blueprint(book_bp, url_prefix="/book")
    app.register_blueprint(users_bp, url_prefix="/users")
    app.register_blueprint(admin_bp, url_prefix="/admin")

    from libris.utils.responses import register_error_handlers
    register_error_handlers(app)

    from libris.commands import register_commands
    register_commands(app)

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    from libris.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
