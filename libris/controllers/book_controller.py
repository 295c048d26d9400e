from flask import Blueprint, current_app, jsonify, request, url_for

from libris.errors import Conflict, NotFound, ValidationError
from libris.repositories.gateway import current_gateway
from libris.services.catalog_service import CatalogService
from libris.services.rental_service import RentalService
from libris.utils.auth import current_context
from libris.utils.decorators import login_required
from libris.utils.parsing import parse_page
from libris.utils.responses import fail, request_data, respond

book_bp = Blueprint("book", __name__)


def _catalog() -> CatalogService:
    return CatalogService(current_gateway(), page_size=current_app.config["BOOKS_PER_PAGE"])


def _keyword() -> str:
    # query string, or a JSON body on GET for API callers
    keyword = request.args.get("keyword")
    if keyword is None:
        keyword = request_data().get("keyword")
    return keyword or ""


# -----------------------------
# Search
# -----------------------------
@book_bp.get("/search/author")
def search_author():
    return jsonify({"authors": _catalog().search_authors(_keyword())})


@book_bp.get("/search/publisher")
def search_publisher():
    return jsonify({"publishers": _catalog().search_publishers(_keyword())})


@book_bp.post("/search/internal")
def search_internal():
    data = request_data()
    search_type = data.get("type")
    keyword = data.get("keyword") or ""

    if search_type == "author":
        return jsonify({"type": "author", "results": _catalog().search_authors(keyword)})
    if search_type == "publisher":
        return jsonify({"type": "publisher", "results": _catalog().search_publishers(keyword)})
    return jsonify({"message": "Invalid type"}), 400


# -----------------------------
# Listing / detail
# -----------------------------
@book_bp.get("/list")
@book_bp.get("/list/<page>")
def list_books(page="1"):
    result = _catalog().list_books(parse_page(page))
    return respond(result.to_dict(), template="book/list.html", title="Books")


@book_bp.get("/detail/<isbn>")
def detail(isbn):
    book = _catalog().get_book_detail(isbn)
    return respond(book, template="book/detail.html", title=f"Detail: {book['title']}")


# -----------------------------
# Rental
# -----------------------------
@book_bp.post("/rental")
@login_required
def rental():
    data = request_data()
    book_id = data.get("book_id")
    try:
        result = RentalService(
            current_gateway(), rental_days=current_app.config["RENTAL_DAYS"]
        ).checkout(current_context(), book_id)
    except (ValidationError, NotFound, Conflict) as e:
        back = url_for("book.detail", isbn=book_id) if book_id else url_for("book.list_books", page=1)
        return fail(e, back)

    return respond(result, redirect_to=url_for("users.history"),
                   message=f"Checked out, due {result['due_date'][:10]}")
