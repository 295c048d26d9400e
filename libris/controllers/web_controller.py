from flask import Blueprint, redirect, url_for

web_bp = Blueprint("web", __name__)


@web_bp.get("/")
def index():
    return redirect(url_for("book.list_books", page=1))
