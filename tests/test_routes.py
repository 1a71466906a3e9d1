"""End-to-end tests for the Flask routes."""

import json

from polljoy.config import config

from .conftest import CHROME_UA, backend_reply

HEADERS = {"User-Agent": CHROME_UA, "X-Appengine-User-Ip": "1.2.3.4"}


def sent_form(backend):
    return backend.call_args.kwargs["data"]


class TestRegister:
    def test_registers_and_stores_session(self, client, backend):
        backend.return_value = backend_reply({"session": {"appId": "X", "token": "T"}})

        resp = client.post("/polljoy?register=1", headers=HEADERS)

        assert resp.status_code == 200
        assert resp.get_json() == {"session": {"token": "T"}}
        assert sent_form(backend)["appId"] == "app-123"
        with client.session_transaction() as sess:
            assert json.loads(sess["current_session"]) == {"session": {"token": "T"}}
            assert sess["device_id"] == sent_form(backend)["deviceId"]

    def test_reuses_stored_session(self, client, backend):
        stored = json.dumps({"session": {"token": "OLD"}})
        with client.session_transaction() as sess:
            sess["device_id"] = "abc"
            sess["current_session"] = stored

        resp = client.post("/polljoy?register=1", headers=HEADERS, json={"deviceId": "abc"})

        assert resp.status_code == 200
        assert resp.get_data(as_text=True) == stored
        backend.assert_not_called()

    def test_other_device_invalidates(self, client, backend):
        backend.return_value = backend_reply({"session": {"token": "NEW"}})
        with client.session_transaction() as sess:
            sess["device_id"] = "abc"
            sess["current_session"] = json.dumps({"session": {"token": "OLD"}})

        resp = client.post("/polljoy?register=1", headers=HEADERS, data={"deviceId": "xyz"})

        assert resp.get_json() == {"session": {"token": "NEW"}}
        assert backend.call_count == 1
        assert sent_form(backend)["deviceId"] == "xyz"
        with client.session_transaction() as sess:
            assert sess["device_id"] == "xyz"

    def test_numeric_device_id_reuses_session(self, client, backend):
        backend.return_value = backend_reply({"session": {"token": "T"}})

        client.post("/polljoy?register=1", headers=HEADERS, json={"deviceId": 123})
        resp = client.post("/polljoy?register=1", headers=HEADERS, json={"deviceId": 123})

        assert resp.status_code == 200
        assert backend.call_count == 1
        assert sent_form(backend)["deviceId"] == "123"
        with client.session_transaction() as sess:
            assert sess["device_id"] == "123"

    def test_backend_failure(self, client, backend):
        backend.return_value = backend_reply("bad gateway", status_code=502)

        resp = client.post("/polljoy?register=1", headers=HEADERS)

        assert resp.status_code == 500
        assert "error" in resp.get_json()
        with client.session_transaction() as sess:
            assert "current_session" not in sess

    def test_malformed_backend_body(self, client, backend):
        backend.return_value = backend_reply("not json")
        resp = client.post("/polljoy?register=1", headers=HEADERS)
        assert resp.status_code == 500


class TestSmartget:
    def test_shapes_and_sanitizes(self, client, backend):
        backend.return_value = backend_reply(
            {"polls": {"p1": {"PollRequest": {"appId": "X", "id": 1}}}}
        )

        resp = client.post("/polljoy?sg=1", headers=HEADERS, data={"tags": "   "})

        assert resp.get_json() == {"polls": {"p1": {"PollRequest": {"id": 1}}}}
        url = backend.call_args.args[0]
        assert url == "https://api.polljoy.com/3.0/poll/smartget.json"
        form = sent_form(backend)
        assert "tags" not in form
        assert form["userType"] == "Non-Pay"
        assert form["deviceModel"] == "desktop"
        assert form["platform"] == "web"

    def test_uses_stored_device_id(self, client, backend):
        backend.return_value = backend_reply({"polls": {}})
        with client.session_transaction() as sess:
            sess["device_id"] = "abc"

        client.post("/polljoy?sg=1", headers=HEADERS)

        assert sent_form(backend)["deviceId"] == "abc"


class TestResponse:
    def test_submits_to_token_path(self, client, backend):
        backend.return_value = backend_reply({"status": 0, "appId": "kept"})

        resp = client.post("/polljoy?response=1&token=tok9", headers=HEADERS, data={"response": "Yes"})

        assert resp.get_json() == {"status": 0, "appId": "kept"}
        assert backend.call_args.args[0].endswith("/response/tok9.json")
        assert sent_form(backend)["response"] == "Yes"
        assert "token" not in sent_form(backend)

    def test_token_cannot_leave_response_path(self, client, backend):
        backend.return_value = backend_reply({"status": 0})

        client.post("/polljoy?response=1&token=../registerSession", headers=HEADERS)

        url = backend.call_args.args[0]
        assert url == "https://api.polljoy.com/3.0/poll/response/..%2FregisterSession.json"

    def test_missing_token(self, client, backend):
        resp = client.post("/polljoy?response=1", headers=HEADERS)
        assert resp.status_code == 400
        backend.assert_not_called()


class TestDispatch:
    def test_register_wins_over_smartget(self, client, backend):
        backend.return_value = backend_reply({"session": {}})
        client.post("/polljoy?register=1&sg=1", headers=HEADERS)
        assert backend.call_count == 1
        assert backend.call_args.args[0].endswith("/registerSession.json")

    def test_no_marker_is_acknowledged(self, client, backend):
        resp = client.post("/polljoy", headers=HEADERS)
        assert resp.status_code == 200
        assert resp.get_json() == {"ok": True}
        backend.assert_not_called()

    def test_path_app_id_persists(self, app, client, backend):
        backend.return_value = backend_reply({"polls": {}})

        client.post("/polljoy/other-app?sg=1", headers=HEADERS)
        assert sent_form(backend)["appId"] == "other-app"

        client.post("/polljoy?sg=1", headers=HEADERS)
        assert sent_form(backend)["appId"] == "other-app"
        assert app.polljoy.app_id == "other-app"

    def test_disabled(self, client, backend):
        config.enabled = False
        resp = client.post("/polljoy?register=1", headers=HEADERS)
        assert resp.get_json() == {"ok": True}
        backend.assert_not_called()

    def test_get_not_allowed(self, client):
        assert client.get("/polljoy").status_code == 405
