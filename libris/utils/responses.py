"""Content negotiation shared by every blueprint.

A handler builds one semantic payload and calls ``respond``; browsers get a
template (or a redirect), API clients get the payload as JSON. Errors from
``libris.errors`` go through the same decision in ``register_error_handlers``.
"""
from __future__ import annotations

import enum

from flask import flash, jsonify, redirect, render_template, request, url_for
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from libris.errors import Forbidden, Internal, ServiceError, Unauthenticated

JSON_MIMETYPE = "application/json"
HTML_MIMETYPE = "text/html"


class Preference(enum.Enum):
    HTML = "html"
    JSON = "json"


def preferred_format() -> Preference:
    accept = request.accept_mimetypes
    json_q = accept[JSON_MIMETYPE]
    html_q = accept[HTML_MIMETYPE]
    if json_q > html_q:
        return Preference.JSON
    if html_q > json_q:
        return Preference.HTML
    # tie (no Accept header, */*): a JSON body means an API client
    return Preference.JSON if request.is_json else Preference.HTML


def wants_json() -> bool:
    return preferred_format() is Preference.JSON


def api_first_format() -> Preference:
    """HTML only for callers that rank it above JSON; ties answer JSON."""
    accept = request.accept_mimetypes
    if accept[HTML_MIMETYPE] > accept[JSON_MIMETYPE]:
        return Preference.HTML
    return Preference.JSON


def request_data() -> dict:
    """JSON body or form fields, whichever the caller sent."""
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form.to_dict()


def respond(payload, template: str | None = None, redirect_to: str | None = None,
            status: int = 200, preference: Preference | None = None,
            message: str | None = None, **context):
    preference = preference or preferred_format()
    if preference is Preference.JSON:
        if payload is None:
            return "", status
        return jsonify(payload), status
    if message:
        flash(message, "success")
    if redirect_to:
        return redirect(redirect_to)
    return render_template(template, data=payload, **context), status


def fail(error: ServiceError, redirect_to: str, json_key: str = "message",
         status: int | None = None, preference: Preference | None = None):
    """Answer a failed form/API call: JSON error body, or flash + redirect."""
    preference = preference or preferred_format()
    if preference is Preference.JSON:
        return jsonify({json_key: error.message}), status or error.status_code
    flash(error.message, "danger")
    return redirect(redirect_to)


def _render_error(error: ServiceError):
    if wants_json():
        return jsonify({"message": error.message}), error.status_code

    if isinstance(error, Unauthenticated):
        flash(error.message, "danger")
        return redirect(url_for("users.login_page"))
    if isinstance(error, Forbidden):
        flash(error.message, "danger")
        return redirect(url_for("web.index"))
    return render_template("error.html", message=error.message,
                           status=error.status_code), error.status_code


def register_error_handlers(app):
    from libris.extensions import db

    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        db.session.rollback()
        if isinstance(error, Internal):
            app.logger.error(f"[errors] {request.method} {request.path}: {error.message}")
        return _render_error(error)

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(error):
        db.session.rollback()
        app.logger.exception(f"[errors] Database failure on {request.method} {request.path}: {error}")
        return _render_error(Internal())

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if wants_json():
            return jsonify({"message": error.description}), error.code
        return render_template("error.html", message=error.description,
                               status=error.code), error.code
