import json

import fitz
import httpx
import pytest

from frontend.api_client import NotesApiClient
from frontend.notes_app import NotesApp


def make_pdf(width=200, height=100, text="hello"):
    doc = fitz.open()
    page = doc.new_page(width=width, height=height)
    page.insert_text((10, 20), text)
    data = doc.tobytes()
    doc.close()
    return data


class FakeApi:
    """Notes API in memory, plugged into httpx.MockTransport."""

    def __init__(self):
        self.calls = []
        self.notes = []
        self.reviews = []
        self.created = []
        self.uploads = []
        self.files = {}
        self.fail = {}
        self.upload_path = "/uploads/doc.pdf"
        self.next_id = 1

    def count(self, method, path):
        return self.calls.count((method, path))

    def handler(self, request: httpx.Request) -> httpx.Response:
        method, path = request.method, request.url.path
        self.calls.append((method, path))

        if (method, path) in self.fail:
            status, body = self.fail[(method, path)]
            if isinstance(body, bytes):
                return httpx.Response(status, content=body)
            return httpx.Response(status, json=body)

        if method == "GET" and path == "/api/notes":
            return httpx.Response(200, json={"notes": self.notes})
        if method == "GET" and path == "/api/reviews":
            return httpx.Response(200, json={"notes": self.reviews})
        if method == "POST" and path == "/api/upload":
            self.uploads.append(request.content)
            return httpx.Response(201, json={"path": self.upload_path})
        if method == "POST" and path == "/api/notes":
            payload = json.loads(request.content)
            self.created.append(payload)
            note = {
                "id": self.next_id,
                "createdAt": "2024-01-01T00:00:00Z",
                "nextReviewAt": "2024-01-02T00:00:00Z",
                **payload,
            }
            self.next_id += 1
            self.notes.insert(0, note)
            return httpx.Response(201, json=note)
        if method == "POST" and path.startswith("/api/notes/") and path.endswith("/review"):
            return httpx.Response(200, json={"id": path.split("/")[3]})
        if method == "DELETE" and path.startswith("/api/notes/"):
            note_id = path.split("/")[3]
            self.notes = [n for n in self.notes if str(n["id"]) != note_id]
            return httpx.Response(200, json={"ok": True})
        if method == "GET" and path in self.files:
            return httpx.Response(200, content=self.files[path])
        return httpx.Response(404, json={"error": "Not found"})


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def client(api):
    http = httpx.Client(base_url="http://api.test", transport=httpx.MockTransport(api.handler))
    yield NotesApiClient(http)
    http.close()


@pytest.fixture
def notes_app(client):
    return NotesApp(client)


@pytest.fixture
def pdf_factory():
    return make_pdf
