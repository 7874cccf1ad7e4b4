"""In-process ``requests`` transport routed to a Flask test client."""

from __future__ import annotations

from collections import Counter
from urllib.parse import urlsplit

from requests.adapters import BaseAdapter
from requests.models import PreparedRequest, Response
from requests.structures import CaseInsensitiveDict

BASE_URL = "http://testserver"


class FlaskTestAdapter(BaseAdapter):
    """Send prepared requests to ``app.test_client()`` instead of the network.

    ``calls`` counts requests per ``(method, path)`` so tests can assert how
    many times an endpoint was hit.
    """

    def __init__(self, app) -> None:
        super().__init__()
        self.client = app.test_client()
        self.calls: Counter[tuple[str, str]] = Counter()

    def send(self, request: PreparedRequest, **kwargs) -> Response:
        parts = urlsplit(request.url)
        method = (request.method or "GET").upper()
        self.calls[(method, parts.path)] += 1

        headers = {k: v for k, v in request.headers.items() if k.lower() != "content-length"}
        flask_resp = self.client.open(
            parts.path,
            method=method,
            query_string=parts.query,
            headers=headers,
            data=request.body,
        )

        resp = Response()
        resp.status_code = flask_resp.status_code
        resp._content = flask_resp.get_data()
        resp.headers = CaseInsensitiveDict(dict(flask_resp.headers))
        resp.encoding = "utf-8"
        resp.url = request.url
        resp.request = request
        resp.reason = flask_resp.status.partition(" ")[2]
        return resp

    def close(self) -> None:
        pass

    def count(self, method: str, path: str) -> int:
        return self.calls[(method.upper(), path)]
