import requests

from fitlab import notify


class _Resp:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self._body = body
        self.text = str(body)

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


def test_disabled_without_url(monkeypatch):
    monkeypatch.setattr(notify, "ADMIN_WEBHOOK_URL", "")

    def fail(*a, **kw):
        raise AssertionError("should not post")

    monkeypatch.setattr(notify.requests, "post", fail)
    assert notify.notify_admin("class_created", "hi") == {"ok": False, "status_code": 0, "response": "disabled"}


def test_posts_payload(monkeypatch):
    sent = {}
    monkeypatch.setattr(notify, "ADMIN_WEBHOOK_URL", "https://hooks.example.test/admin")

    def fake_post(url, json, timeout):
        sent.update(url=url, json=json, timeout=timeout)
        return _Resp(200, {"received": True})

    monkeypatch.setattr(notify.requests, "post", fake_post)
    result = notify.notify_admin("class_created", "✅ Class created", session_id=4)

    assert result["ok"] is True
    assert sent["json"] == {"event": "class_created", "text": "✅ Class created", "details": {"session_id": 4}}


def test_non_json_error_response(monkeypatch):
    monkeypatch.setattr(notify, "ADMIN_WEBHOOK_URL", "https://hooks.example.test/admin")
    monkeypatch.setattr(notify.requests, "post", lambda *a, **kw: _Resp(503, ValueError("no json")))
    result = notify.notify_admin("class_deleted", "gone")
    assert result["ok"] is False
    assert result["status_code"] == 503


def test_network_error_does_not_raise(monkeypatch):
    monkeypatch.setattr(notify, "ADMIN_WEBHOOK_URL", "https://hooks.example.test/admin")

    def boom(*a, **kw):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(notify.requests, "post", boom)
    result = notify.notify_admin("class_deleted", "gone")
    assert result["ok"] is False and result["status_code"] == 0
