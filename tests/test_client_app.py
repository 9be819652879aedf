import pytest

from client.api import ApiError
from client.app import DELETE_ERROR, DELETE_PROMPT, SAVE_ERROR, ContactApp


@pytest.fixture
def alerts():
    return []


@pytest.fixture
def app(api, alerts):
    return ContactApp(api, alert=alerts.append)


def _fill(app, name="Ann", email="a@b.com", phone="1234567890"):
    app.change("name", name)
    app.change("email", email)
    app.change("phone", phone)


def test_submit_creates_and_refetches(app, api):
    _fill(app)
    assert app.submit()
    assert [c[0] for c in api.calls] == ["create", "list"]
    assert app.state.contacts[0]["name"] == "Ann"
    assert app.state.form.name == ""


def test_second_create_is_listed_first(app):
    _fill(app, name="First")
    app.submit()
    _fill(app, name="Second")
    app.submit()
    assert [c["name"] for c in app.state.contacts] == ["Second", "First"]


def test_closed_gate_makes_no_call(app, api):
    _fill(app, phone="12345")
    assert not app.submit()
    assert api.calls == []


def test_submit_while_editing_updates(app, api):
    _fill(app)
    app.submit()
    contact_id = app.state.contacts[0]["id"]
    app.start_edit(contact_id)
    assert app.state.phase == "editing"
    app.change("message", "hello")
    assert app.submit()
    assert api.calls[-2][:2] == ("update", contact_id)
    assert app.state.contacts[0]["message"] == "hello"
    assert app.state.phase == "idle"


def test_cancel_edit_makes_no_call(app, api):
    _fill(app)
    app.submit()
    api.calls.clear()
    app.start_edit(app.state.contacts[0]["id"])
    app.cancel_edit()
    assert api.calls == []
    assert app.state.form.name == ""
    assert app.state.phase == "idle"


def test_save_failure_alerts_and_keeps_form(app, api, alerts):
    api.fail.add("create")
    _fill(app)
    assert not app.submit()
    assert alerts == [SAVE_ERROR]
    assert app.state.form.name == "Ann"
    assert not app.state.loading


def test_delete_requires_confirmation(api, alerts):
    prompts = []

    def confirm(prompt):
        prompts.append(prompt)
        return False

    app = ContactApp(api, confirm=confirm, alert=alerts.append)
    api.rows.append({"id": "9", "name": "Ann", "email": "a@b.com", "phone": "1234567890"})
    assert not app.delete("9")
    assert prompts == [DELETE_PROMPT]
    assert api.calls == []


def test_delete_twice_raises_no_alert(app, api, alerts):
    _fill(app)
    app.submit()
    contact_id = app.state.contacts[0]["id"]
    assert app.delete(contact_id)
    assert app.delete(contact_id)
    assert alerts == []
    assert app.state.contacts == ()


def test_delete_failure_alerts(app, api, alerts):
    api.fail.add("delete")
    assert not app.delete("1")
    assert alerts == [DELETE_ERROR]


def test_refresh_failure_propagates(app, api):
    api.fail.add("list")
    with pytest.raises(ApiError):
        app.refresh()


def test_search_narrows_visible(app):
    _fill(app, name="Ann")
    app.submit()
    _fill(app, name="Bob", phone="5550001111")
    app.submit()
    app.search("bo")
    assert [c["name"] for c in app.visible()] == ["Bob"]
    app.clear_search()
    assert len(app.visible()) == 2
