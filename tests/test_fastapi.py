import unittest

import fastapi
from fastapi.testclient import TestClient

from reqext import ABSENT, Request
from reqext.fastapi import augmented_request, request_target


def make_app() -> fastapi.FastAPI:
    app = fastapi.FastAPI()

    @app.post("/{path:path}")
    async def echo(req: Request = fastapi.Depends(augmented_request)):
        body = req.body
        if body is ABSENT:
            body = "<absent>"
        elif isinstance(body, bytes):
            body = body.decode("latin-1")
        return {
            "url": req.url,
            "body": body,
            "xhr": req.xhr,
            "cookies": req.cookies,
            "query": req.url_fields.query,
        }

    return app


class TestFastAPI(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(make_app())

    def test_json_body(self):
        resp = self.client.post(
            "/a/b?x=1",
            content=b'[1, 2, 3]',
            headers={"Content-Type": "application/json", "Cookie": "a=1; b=2"},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {
                "url": "/a/b?x=1",
                "body": [1, 2, 3],
                "xhr": True,
                "cookies": {"a": "1", "b": "2"},
                "query": {"x": "1"},
            },
        )

    def test_empty_json_body(self):
        resp = self.client.post("/", headers={"Content-Type": "application/json"})
        self.assertEqual(resp.json()["body"], "<absent>")

    def test_form_body(self):
        resp = self.client.post(
            "/",
            content=b"tag=a&tag=b",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        self.assertEqual(resp.json()["body"], {"tag": ["a", "b"]})

    def test_raw_body(self):
        resp = self.client.post("/", content=b"plain")
        self.assertEqual(resp.json()["body"], "plain")

    def test_invalid_json_body(self):
        resp = self.client.post(
            "/", content=b"{bad", headers={"Content-Type": "application/json"}
        )
        self.assertEqual(resp.status_code, 400)
        detail = resp.json()["detail"]
        self.assertEqual(detail["code"], "invalid_argument")


def test_request_target_without_query():
    request = fastapi.Request(
        {"type": "http", "path": "/x", "raw_path": b"/x", "query_string": b""}
    )
    assert request_target(request) == "/x"


def test_request_target_without_raw_path():
    request = fastapi.Request({"type": "http", "path": "/y", "query_string": b"a=1"})
    assert request_target(request) == "/y?a=1"
