from flask import Blueprint, current_app, jsonify, render_template, session, url_for
from flask_jwt_extended import create_access_token

from libris.errors import ServiceError, Unauthenticated, ValidationError
from libris.repositories.gateway import current_gateway
from libris.services.auth_service import AuthService
from libris.services.rental_service import RentalService
from libris.utils.auth import current_context
from libris.utils.decorators import login_required
from libris.utils.responses import api_first_format, fail, request_data, respond

users_bp = Blueprint("users", __name__)


def _rentals() -> RentalService:
    return RentalService(current_gateway(), rental_days=current_app.config["RENTAL_DAYS"])


# -----------------------------
# Login / logout
# -----------------------------
@users_bp.get("/login")
def login_page():
    return render_template("users/login.html", title="Login")


@users_bp.post("/login")
def login():
    data = request_data()
    try:
        user = AuthService(current_gateway()).authenticate(data.get("email"), data.get("password"))
    except Unauthenticated as e:
        # scripted clients (no Accept, */*) get a 401 body, not a redirect
        return fail(e, url_for("users.login_page"), preference=api_first_format())

    session.clear()
    session.permanent = True
    session["user_id"] = user.id

    token = create_access_token(identity=user.id, additional_claims={"is_admin": bool(user.is_admin)})
    return respond({"message": "ok", "access_token": token},
                   redirect_to=url_for("book.list_books", page=1))


@users_bp.get("/logout")
def logout():
    session.clear()
    return respond({"message": "ok"}, redirect_to=url_for("users.login_page"))


# -----------------------------
# Registration
# -----------------------------
@users_bp.get("/register")
def register_page():
    return render_template("users/register.html", title="Register")


@users_bp.post("/register")
def register():
    data = request_data()
    try:
        AuthService(current_gateway()).register(
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
        )
    except ServiceError as e:
        current_app.logger.info(f"[auth] Registration rejected: {e.message}")
        return fail(e, url_for("users.register_page"), json_key="reason", status=400)

    return respond(None, redirect_to=url_for("users.login_page"),
                   message="Registration complete. Please log in.")


# -----------------------------
# Rental history / returns
# -----------------------------
@users_bp.get("/history")
@login_required
def history():
    rows = _rentals().history(current_context())
    return respond({"history": rows}, template="users/history.html", title="History")


@users_bp.get("/return")
@login_required
def return_page():
    rows = _rentals().pending_returns(current_context())
    return respond({"rentals": rows}, template="users/return.html", title="Return books")


@users_bp.put("/return")
@login_required
def return_book():
    data = request_data()
    result = _rentals().return_book(current_context(), data.get("id"))
    return respond(result, redirect_to=url_for("users.return_page"), message="Book returned")


# -----------------------------
# Name change
# -----------------------------
@users_bp.get("/change")
@login_required
def change_page():
    return render_template("users/change.html", title="Change name", user_name=current_context().name)


@users_bp.put("/change")
def change():
    ctx = current_context()
    if not ctx.is_authenticated:
        return jsonify({"reason": "Not logged in"}), 401

    try:
        AuthService(current_gateway()).rename(ctx, request_data().get("name"))
    except ValidationError as e:
        return jsonify({"reason": e.message}), 400
    return jsonify({"message": "Updated"}), 200
