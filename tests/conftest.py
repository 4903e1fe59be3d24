import itertools

import pytest


class FakeStore:
    """Store double whose notifications are fired by hand from the test."""

    def __init__(self):
        self._ids = itertools.count(1)
        self.subs = {}          # token -> (path, on_data, on_error)
        self.calls = []         # every subscribed path, in order
        self.unsubscribed = []

    def subscribe(self, path, on_data, on_error):
        token = next(self._ids)
        self.subs[token] = (path, on_data, on_error)
        self.calls.append(path)
        return token

    def unsubscribe(self, token):
        self.unsubscribed.append(token)
        self.subs.pop(token, None)

    def active(self, path):
        return [t for t, (p, _, _) in self.subs.items() if p == path]

    def push(self, path, data):
        for token in self.active(path):
            self.subs[token][1](data)

    def fail(self, path, message):
        for token in self.active(path):
            self.subs[token][2](message)


@pytest.fixture
def store():
    return FakeStore()


def patient(name="Ana", pressure=115, temp=30, **extra):
    rec = {"info": {"name": name, "age": 60, "gender": "F", "condition": "T2D", "lastCheckup": "2026-01-01"}}
    if pressure is not None or temp is not None:
        rec["sensorData"] = {"footHealth": {"footPressure": pressure, "footTemp": temp}}
    rec.update(extra)
    return rec


@pytest.fixture
def make_patient():
    return patient
