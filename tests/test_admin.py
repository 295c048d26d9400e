import pytest

from libris.extensions import db
from libris.models import Author, Book

JSON = {"Accept": "application/json"}

ADMIN_ENDPOINTS = [
    ("get", "/admin/author"),
    ("post", "/admin/author"),
    ("put", "/admin/author"),
    ("delete", "/admin/author"),
    ("get", "/admin/publisher"),
    ("post", "/admin/publisher"),
    ("put", "/admin/publisher"),
    ("delete", "/admin/publisher"),
    ("get", "/admin/book"),
    ("post", "/admin/book"),
    ("put", "/admin/book"),
    ("delete", "/admin/book"),
]


@pytest.mark.parametrize("method,url", ADMIN_ENDPOINTS)
def test_anonymous_caller_is_forbidden(client, method, url):
    res = getattr(client, method)(url, json={}, headers=JSON)
    assert res.status_code == 403


@pytest.mark.parametrize("method,url", ADMIN_ENDPOINTS)
def test_regular_user_is_forbidden(app, make_user, login, method, url):
    make_user("Reader", "reader@example.com")
    c = app.test_client()
    login(c, "reader@example.com")
    res = getattr(c, method)(url, json={}, headers=JSON)
    assert res.status_code == 403


def test_anonymous_browser_is_sent_home(client):
    res = client.get("/admin/author", headers={"Accept": "text/html"})
    assert res.status_code == 302
    assert res.headers["Location"] == "/"


# -----------------------------
# Authors / publishers
# -----------------------------
def test_author_crud(app, admin_client):
    res = admin_client.post("/admin/author", json={"name": "Mori Ogai"}, headers=JSON)
    assert res.status_code == 200
    created = res.get_json()
    assert created["name"] == "Mori Ogai"

    admin_client.post("/admin/author", json={"name": "Akutagawa"}, headers=JSON)
    names = [a["name"] for a in admin_client.get("/admin/author", headers=JSON).get_json()["authors"]]
    assert names == ["Akutagawa", "Mori Ogai"]

    res = admin_client.put("/admin/author", json={"id": created["id"], "name": "Ogai Mori"}, headers=JSON)
    assert res.status_code == 200
    assert res.get_json() == {"id": created["id"], "name": "Ogai Mori"}

    res = admin_client.delete("/admin/author", json={"id": created["id"]}, headers=JSON)
    assert res.status_code == 200

    names = [a["name"] for a in admin_client.get("/admin/author", headers=JSON).get_json()["authors"]]
    assert names == ["Akutagawa"]

    # soft delete: the row is still there
    with app.app_context():
        row = db.session.get(Author, created["id"])
        assert row is not None and row.is_deleted


def test_deleted_author_is_hidden_from_search(admin_client, client):
    created = admin_client.post("/admin/author", json={"name": "Dazai"}, headers=JSON).get_json()
    admin_client.delete("/admin/author", json={"id": created["id"]}, headers=JSON)

    res = client.get("/book/search/author?keyword=Dazai")
    assert res.get_json()["authors"] == []


def test_author_requires_name(admin_client):
    res = admin_client.post("/admin/author", json={"name": "  "}, headers=JSON)
    assert res.status_code == 400


def test_author_form_error_redirects_back(admin_client):
    res = admin_client.post("/admin/author", data={"name": ""}, headers={"Accept": "text/html"})
    assert res.status_code == 302
    assert "error=failed" in res.headers["Location"]


def test_update_or_delete_unknown_author_is_not_found(admin_client):
    assert admin_client.put("/admin/author", json={"id": "nope", "name": "X"}, headers=JSON).status_code == 404
    assert admin_client.delete("/admin/author", json={"id": "nope"}, headers=JSON).status_code == 404


@pytest.mark.parametrize("bad_id", [{"x": 1}, [1, 2], True])
@pytest.mark.parametrize("url", ["/admin/author", "/admin/publisher"])
def test_malformed_ids_are_rejected(admin_client, url, bad_id):
    res = admin_client.put(url, json={"id": bad_id, "name": "N"}, headers=JSON)
    assert res.status_code == 400
    assert "message" in res.get_json()
    assert admin_client.delete(url, json={"id": bad_id}, headers=JSON).status_code == 400


def test_book_with_malformed_author_id_is_rejected(admin_client, book_fields):
    res = admin_client.post("/admin/book", json={**book_fields, "author_id": ["a"]}, headers=JSON)
    assert res.status_code == 400


def test_publisher_crud(admin_client, client):
    created = admin_client.post("/admin/publisher", json={"name": "Shinchosha"}, headers=JSON).get_json()
    listed = admin_client.get("/admin/publisher", headers=JSON).get_json()["publishers"]
    assert listed == [created]

    admin_client.put("/admin/publisher", json={"id": created["id"], "name": "Kodansha"}, headers=JSON)
    assert client.get("/book/search/publisher?keyword=Koda").get_json()["publishers"][0]["id"] == created["id"]

    admin_client.delete("/admin/publisher", json={"id": created["id"]}, headers=JSON)
    assert admin_client.get("/admin/publisher", headers=JSON).get_json()["publishers"] == []

    # deleting twice: already gone
    res = admin_client.delete("/admin/publisher", json={"id": created["id"]}, headers=JSON)
    assert res.status_code == 404


# -----------------------------
# Books
# -----------------------------
@pytest.fixture
def book_fields(author, publisher):
    return {
        "isbn": "9784101010014",
        "title": "Kokoro",
        "author_id": author,
        "publisher_id": publisher,
        "publication_year": "1914",
        "publication_month": "4",
    }


def test_create_and_list_book(admin_client, book_fields):
    res = admin_client.post("/admin/book", json=book_fields, headers=JSON)
    assert res.status_code == 200

    books = admin_client.get("/admin/book", headers=JSON).get_json()["books"]
    assert len(books) == 1
    assert books[0]["isbn"] == "9784101010014"
    assert books[0]["authorName"] == "Natsume Soseki"
    assert books[0]["publisherName"] == "Iwanami"
    assert books[0]["publication_year_month"] == "1914.4"
    assert (books[0]["year"], books[0]["month"]) == (1914, 4)


@pytest.mark.parametrize("field", ["isbn", "title", "author_id", "publisher_id",
                                   "publication_year", "publication_month"])
def test_create_book_requires_every_field(admin_client, book_fields, field):
    book_fields.pop(field)
    res = admin_client.post("/admin/book", json=book_fields, headers=JSON)
    assert res.status_code == 400


@pytest.mark.parametrize("field,value", [
    ("isbn", "978-4101"),
    ("publication_month", "13"),
    ("publication_year", "nineteen"),
    ("author_id", "missing-author"),
])
def test_create_book_validates_fields(admin_client, book_fields, field, value):
    book_fields[field] = value
    res = admin_client.post("/admin/book", json=book_fields, headers=JSON)
    assert res.status_code == 400


def test_duplicate_isbn_conflicts(admin_client, book_fields):
    admin_client.post("/admin/book", json=book_fields, headers=JSON)
    res = admin_client.post("/admin/book", json=book_fields, headers=JSON)
    assert res.status_code == 409


def test_create_over_soft_deleted_book_revives_it(app, admin_client, book_fields):
    admin_client.post("/admin/book", json=book_fields, headers=JSON)
    admin_client.delete("/admin/book", json={"isbn": book_fields["isbn"]}, headers=JSON)

    book_fields["title"] = "Kokoro (new edition)"
    res = admin_client.post("/admin/book", json=book_fields, headers=JSON)
    assert res.status_code == 200

    with app.app_context():
        book = db.session.get(Book, 9784101010014)
        assert book.title == "Kokoro (new edition)"
        assert book.is_deleted is False


def test_update_book_changes_only_given_fields(app, admin_client, book_fields):
    admin_client.post("/admin/book", json=book_fields, headers=JSON)
    res = admin_client.put("/admin/book", json={"isbn": book_fields["isbn"], "publication_month": 9},
                           headers=JSON)
    assert res.status_code == 200

    with app.app_context():
        book = db.session.get(Book, 9784101010014)
        assert book.publication_month == 9
        assert book.title == "Kokoro"


def test_update_book_errors(admin_client, book_fields):
    admin_client.post("/admin/book", json=book_fields, headers=JSON)

    res = admin_client.put("/admin/book", json={"isbn": "not-a-number", "title": "X"}, headers=JSON)
    assert res.status_code == 400

    res = admin_client.put("/admin/book", json={"isbn": "1", "title": "X"}, headers=JSON)
    assert res.status_code == 404

    res = admin_client.put("/admin/book", json={"isbn": book_fields["isbn"], "title": ""}, headers=JSON)
    assert res.status_code == 400


def test_deleted_book_disappears_from_catalog(admin_client, client, book_fields):
    admin_client.post("/admin/book", json=book_fields, headers=JSON)
    res = admin_client.delete("/admin/book", json={"isbn": book_fields["isbn"]}, headers=JSON)
    assert res.status_code == 200

    assert admin_client.get("/admin/book", headers=JSON).get_json()["books"] == []
    assert client.get("/book/list", headers=JSON).get_json()["books"] == []
    assert client.get(f"/book/detail/{book_fields['isbn']}", headers=JSON).status_code == 404

    res = admin_client.post("/book/rental", json={"book_id": book_fields["isbn"]}, headers=JSON)
    assert res.status_code == 404


def test_admin_book_page_renders(admin_client, book_fields):
    admin_client.post("/admin/book", json=book_fields, headers=JSON)
    res = admin_client.get("/admin/book", headers={"Accept": "text/html"})
    assert res.status_code == 200
    text = res.get_data(as_text=True)
    assert "Kokoro" in text
    assert "Natsume Soseki" in text
