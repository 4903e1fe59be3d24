import types

import pytest

import src.footcare.store.firebase as m
from src.footcare.config.settings import StoreConfig
from src.footcare.errors import StoreConnectionError

CONFIG = StoreConfig(database_url="https://demo.firebaseio.com", project_id="demo")


@pytest.fixture(autouse=True)
def fresh_handle(monkeypatch):
    m.reset()
    calls = {"init": 0}

    def no_app(*args, **kwargs):
        raise ValueError("The default Firebase app does not exist.")

    def initialize_app(cred, options):
        calls["init"] += 1
        calls["options"] = options
        return types.SimpleNamespace(name="[DEFAULT]")

    monkeypatch.setattr(m.firebase_admin, "get_app", no_app)
    monkeypatch.setattr(m.firebase_admin, "initialize_app", initialize_app)
    monkeypatch.setattr(m.credentials, "ApplicationDefault", lambda: object())
    yield calls
    m.reset()


def test_connect_is_idempotent(fresh_handle):
    first = m.connect(CONFIG)
    second = m.connect(StoreConfig(database_url="https://demo.firebaseio.com", project_id="demo"))
    assert first is second
    assert fresh_handle["init"] == 1
    assert fresh_handle["options"] == {"databaseURL": CONFIG.database_url, "projectId": "demo"}


def test_connect_with_other_config_fails():
    m.connect(CONFIG)
    with pytest.raises(StoreConnectionError):
        m.connect(StoreConfig(database_url="https://other.firebaseio.com"))


def test_connect_reuses_existing_firebase_app(monkeypatch, fresh_handle):
    app = types.SimpleNamespace(name="[DEFAULT]")
    monkeypatch.setattr(m.firebase_admin, "get_app", lambda: app)
    assert m.connect(CONFIG).app is app
    assert fresh_handle["init"] == 0


def test_bad_credentials_raise_connection_error(monkeypatch):
    def bad_cert(path):
        raise OSError(f"no such file: {path}")

    monkeypatch.setattr(m.credentials, "Certificate", bad_cert)
    with pytest.raises(StoreConnectionError) as exc:
        m.connect(StoreConfig(database_url="https://x.firebaseio.com", credentials_path="/missing.json"))
    assert str(exc.value) == "Failed to initialize Firebase"


class FakeRef:
    def __init__(self, value=None, get_error=None, listen_error=None):
        self.value = value
        self.get_error = get_error
        self.listen_error = listen_error
        self.callback = None

    def get(self):
        if self.get_error:
            raise self.get_error
        return self.value

    def listen(self, callback):
        if self.listen_error:
            raise self.listen_error
        self.callback = callback
        return types.SimpleNamespace(closed=False, close=lambda: None)


def subscribe(monkeypatch, ref):
    monkeypatch.setattr(m.db, "reference", lambda path, app=None: ref)
    got, errors = [], []
    token = m.connect(CONFIG).subscribe("adddelete", got.append, errors.append)
    return token, got, errors


def test_subscribe_delivers_full_node(monkeypatch):
    ref = FakeRef(value={"g": {"patients": {"p": {}}}})
    token, got, errors = subscribe(monkeypatch, ref)
    assert token is not None

    ref.callback(types.SimpleNamespace(event_type="put", path="/", data={"g": {}}))
    ref.callback(types.SimpleNamespace(event_type="patch", path="/g/patients", data={"p": {}}))
    assert got == [{"g": {}}, {"g": {"patients": {"p": {}}}}]
    assert errors == []


def test_subscribe_reports_read_errors(monkeypatch):
    ref = FakeRef(get_error=m.FirebaseError("unavailable", "backend down"))
    _, got, errors = subscribe(monkeypatch, ref)
    ref.callback(types.SimpleNamespace(event_type="patch", path="/g", data={}))
    assert got == []
    assert errors == ["backend down"]


def test_subscribe_reports_listen_errors(monkeypatch):
    ref = FakeRef(listen_error=ValueError("Invalid database URL"))
    token, got, errors = subscribe(monkeypatch, ref)
    assert token is None
    assert errors == ["Invalid database URL"]


def test_unsubscribe_closes_listener():
    closed = []
    store = m.connect(CONFIG)
    store.unsubscribe(types.SimpleNamespace(close=lambda: closed.append(True)))
    store.unsubscribe(None)
    assert closed == [True]
