from libris.extensions import db


def ensure_db_objects(app):
    """Create missing tables and indexes, including the partial unique index
    that allows only one open rental per book."""
    if not app.config.get("AUTO_CREATE_TABLES", False):
        return False

    import libris.models  # noqa: F401  register every table on db.metadata

    with app.app_context():
        try:
            db.create_all()
            app.logger.info(f"[db_objects] Tables ensured on {db.engine.url.get_backend_name()}.")
        except Exception as e:
            app.logger.error(f"[db_objects] Could not create tables: {e}")
            raise
    return True
