from flask import Blueprint, url_for

from libris.errors import ServiceError, ValidationError
from libris.repositories.gateway import current_gateway
from libris.services.directory_service import DirectoryService
from libris.utils.auth import current_context
from libris.utils.decorators import admin_required
from libris.utils.responses import fail, request_data, respond

admin_bp = Blueprint("admin", __name__)


def _directory() -> DirectoryService:
    return DirectoryService(current_gateway())


# -----------------------------
# Authors
# -----------------------------
@admin_bp.get("/author")
@admin_required
def author_page():
    authors = _directory().list_authors(current_context())
    return respond({"authors": authors}, template="admin/author.html", title="Authors")


@admin_bp.post("/author")
@admin_required
def author_create():
    try:
        created = _directory().create_author(current_context(), request_data())
    except ValidationError as e:
        return fail(e, url_for("admin.author_page", error="failed"))
    return respond(created, redirect_to=url_for("admin.author_page"))


@admin_bp.put("/author")
@admin_required
def author_update():
    data = request_data()
    updated = _directory().update_author(current_context(), data.get("id"), data)
    return respond(updated, redirect_to=url_for("admin.author_page"))


@admin_bp.delete("/author")
@admin_required
def author_delete():
    result = _directory().delete_author(current_context(), request_data().get("id"))
    return respond(result, redirect_to=url_for("admin.author_page"))


# -----------------------------
# Publishers
# -----------------------------
@admin_bp.get("/publisher")
@admin_required
def publisher_page():
    publishers = _directory().list_publishers(current_context())
    return respond({"publishers": publishers}, template="admin/publisher.html", title="Publishers")


@admin_bp.post("/publisher")
@admin_required
def publisher_create():
    try:
        created = _directory().create_publisher(current_context(), request_data())
    except ValidationError as e:
        return fail(e, url_for("admin.publisher_page", error="failed"))
    return respond(created, redirect_to=url_for("admin.publisher_page"))


@admin_bp.put("/publisher")
@admin_required
def publisher_update():
    data = request_data()
    updated = _directory().update_publisher(current_context(), data.get("id"), data)
    return respond(updated, redirect_to=url_for("admin.publisher_page"))


@admin_bp.delete("/publisher")
@admin_required
def publisher_delete():
    result = _directory().delete_publisher(current_context(), request_data().get("id"))
    return respond(result, redirect_to=url_for("admin.publisher_page"))


# -----------------------------
# Books
# -----------------------------
@admin_bp.get("/book")
@admin_required
def book_page():
    ctx = current_context()
    directory = _directory()
    books = directory.list_books(ctx)
    # pick-lists for the create form; JSON callers only get the books
    return respond({"books": books}, template="admin/book.html", title="Books",
                   authors=directory.list_authors(ctx),
                   publishers=directory.list_publishers(ctx))


@admin_bp.post("/book")
@admin_required
def book_create():
    try:
        result = _directory().create_book(current_context(), request_data())
    except ServiceError as e:
        return fail(e, url_for("admin.book_page", error="failed"))
    return respond(result, redirect_to=url_for("admin.book_page"))


@admin_bp.put("/book")
@admin_required
def book_update():
    data = request_data()
    result = _directory().update_book(current_context(), data.get("isbn"), data)
    return respond(result, redirect_to=url_for("admin.book_page"))


@admin_bp.delete("/book")
@admin_required
def book_delete():
    result = _directory().delete_book(current_context(), request_data().get("isbn"))
    return respond(result, redirect_to=url_for("admin.book_page"))
