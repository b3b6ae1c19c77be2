import httpx
import pytest

from frontend.router import create_application


@pytest.fixture
def browser(notes_app):
    transport = httpx.WSGITransport(app=create_application(notes_app))
    with httpx.Client(transport=transport, base_url="http://frontend.test") as c:
        yield c


def test_index_loads_both_lists(browser, api):
    api.notes = [{"id": 1, "title": "First note", "tags": "a,b"}]
    api.reviews = [{"id": 1, "title": "First note"}]

    r = browser.get("/")

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert r.text.count("First note") == 2
    assert 'id="pdf-empty"' in r.text
    assert api.count("GET", "/api/notes") == 1
    assert api.count("GET", "/api/reviews") == 1


def test_index_shows_api_error(browser, api):
    api.fail[("GET", "/api/notes")] = (500, {"error": "database is locked"})
    r = browser.get("/")
    assert r.status_code == 200
    assert "database is locked" in r.text


def test_submit_with_pdf(browser, api):
    r = browser.post(
        "/notes",
        data={"title": "T", "tags": "x, y", "content": "body"},
        files={"pdf": ("doc.pdf", b"%PDF-1.4 fake", "application/pdf")},
    )

    assert r.status_code == 302
    assert r.headers["location"] == "/"
    assert api.calls.index(("POST", "/api/upload")) < api.calls.index(("POST", "/api/notes"))
    assert api.created == [{"title": "T", "tags": "x, y", "content": "body", "pdfPath": "/uploads/doc.pdf"}]
    assert b"%PDF-1.4 fake" in api.uploads[0]


def test_submit_with_empty_file_part(browser, api):
    r = browser.post(
        "/notes",
        data={"title": "T"},
        files={"pdf": ("", b"", "application/octet-stream")},
    )
    assert r.status_code == 302
    assert ("POST", "/api/upload") not in api.calls
    assert api.created[0]["pdfPath"] == ""


def test_submit_error_keeps_form(browser, api):
    api.fail[("POST", "/api/notes")] = (400, {"error": "Missing title"})
    r = browser.post(
        "/notes",
        data={"title": "", "tags": "keep-me", "content": "still here"},
        files={"pdf": ("", b"", "application/octet-stream")},
    )
    assert r.status_code == 200
    assert "Missing title" in r.text
    assert 'value="keep-me"' in r.text
    assert "still here" in r.text


def test_review_action(browser, api):
    r = browser.post("/actions", data={"action": "review", "target": "1"})
    assert r.status_code == 302
    assert api.calls == [("POST", "/api/notes/1/review"), ("GET", "/api/notes"), ("GET", "/api/reviews")]


def test_delete_action(browser, api):
    api.notes = [{"id": 1, "title": "Gone"}]
    r = browser.post("/actions", data={"action": "delete", "target": "1"})
    assert r.status_code == 302
    assert api.notes == []
    assert api.count("GET", "/api/notes") == 1


def test_unknown_action_is_noop(browser, api):
    r = browser.post("/actions", data={"action": "launch", "target": "1"})
    assert r.status_code == 302
    assert api.calls == []


def test_preview_action_and_image(browser, api, pdf_factory):
    assert browser.get("/preview.png").status_code == 404

    api.files["/uploads/doc.pdf"] = pdf_factory()
    r = browser.post("/actions", data={"action": "preview", "target": "/uploads/doc.pdf"})
    assert r.status_code == 302
    assert r.headers["location"] == "/#preview"

    img = browser.get("/preview.png")
    assert img.status_code == 200
    assert img.headers["content-type"] == "image/png"
    assert img.content.startswith(b"\x89PNG")

    page = browser.get("/")
    assert 'id="pdf-canvas"' in page.text
    assert 'id="pdf-empty"' not in page.text


def test_preview_of_broken_pdf_shows_error(browser, api):
    api.files["/uploads/bad.pdf"] = b"nope"
    r = browser.post("/actions", data={"action": "preview", "target": "/uploads/bad.pdf"})
    assert r.status_code == 200
    assert "bad.pdf" in r.text
    assert 'id="pdf-empty"' not in r.text


def test_refresh_single_list(browser, api):
    r = browser.get("/refresh/reviews")
    assert r.status_code == 302
    assert api.calls == [("GET", "/api/reviews")]

    r = browser.get("/refresh/notes")
    assert api.calls[-1] == ("GET", "/api/notes")


def test_not_found(browser):
    assert browser.get("/nope").status_code == 404
    assert browser.put("/notes").status_code == 404


@pytest.mark.parametrize("target", ["http://169.254.169.254/latest/meta-data", "//evil.test/x.pdf"])
def test_preview_foreign_url_makes_no_request(browser, api, target):
    r = browser.post("/actions", data={"action": "preview", "target": target})
    assert r.status_code == 200
    assert "Недопустимый путь" in r.text
    assert api.calls == []
    assert browser.get("/preview.png").status_code == 404


def test_submit_not_a_form(browser, api):
    r = browser.post("/notes", content=b"title=x", headers={"Content-Type": "text/plain"})
    assert r.status_code == 400
    assert "Некорректные данные формы" in r.text
    assert api.calls == []


def test_submit_without_content_type(browser, api):
    r = browser.post("/notes", content=b"title=x")
    assert r.status_code == 400
    assert api.calls == []


def test_submit_multipart_without_boundary(browser, api):
    r = browser.post("/notes", content=b"--x--", headers={"Content-Type": "multipart/form-data"})
    assert r.status_code == 400
    assert api.calls == []
