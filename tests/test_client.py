import numpy as np
import pytest

from strassen_lib import client
from strassen_lib.errors import RemoteMultiplyError


class _FakeResponse:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self._body = body
        self.text = str(body)

    def json(self):
        return self._body


def test_posts_lists_and_returns_result(monkeypatch):
    seen = {}

    def fake_post(url, json=None, timeout=None):
        seen.update(url=url, json=json, timeout=timeout)
        return _FakeResponse(200, {"result": [[19, 22], [43, 50]], "n": 2})

    monkeypatch.setattr(client.requests, "post", fake_post)
    A = np.array([[1, 2], [3, 4]], dtype=np.int32)
    result = client.post_matrices("http://example/api", A, [[5, 6], [7, 8]], timeout=5, parallel=True)
    assert result == [[19, 22], [43, 50]]
    assert seen["url"] == "http://example/api"
    assert seen["json"] == {"matrix_a": [[1, 2], [3, 4]], "matrix_b": [[5, 6], [7, 8]], "parallel": True}
    assert seen["timeout"] == 5


def test_error_status_raises(monkeypatch):
    def fake_post(url, json=None, timeout=None):
        return _FakeResponse(422, {"error": "Addition overflow for a = 1 b = 2"})

    monkeypatch.setattr(client.requests, "post", fake_post)
    with pytest.raises(RemoteMultiplyError) as exc:
        client.post_matrices("http://example/api", [[1]], [[2]])
    assert exc.value.status_code == 422
    assert "overflow" in str(exc.value)
