from src.footcare.store.memory import MemoryStore


def test_get_nested_and_missing():
    s = MemoryStore({"root": {"g": {"patients": {"p": {"x": 1}}}}})
    assert s.get("root/g/patients/p") == {"x": 1}
    assert s.get("root/nope") is None
    assert s.get("/root/g/patients/p/x") == 1


def test_subscribe_delivers_current_value():
    s = MemoryStore({"root": {"a": 1}})
    got = []
    s.subscribe("root", got.append, lambda msg: None)
    assert got == [{"a": 1}]


def test_set_notifies_ancestors_and_descendants_only():
    s = MemoryStore({"root": {"g1": {"v": 1}, "g2": {"v": 2}}})
    root, g1, g2 = [], [], []
    s.subscribe("root", root.append, lambda m: None)
    s.subscribe("root/g1", g1.append, lambda m: None)
    s.subscribe("root/g2", g2.append, lambda m: None)

    s.set("root/g1/v", 5)
    assert root[-1] == {"g1": {"v": 5}, "g2": {"v": 2}}
    assert g1[-1] == {"v": 5}
    assert len(g2) == 1


def test_set_none_deletes():
    s = MemoryStore({"root": {"g": {"v": 1}}})
    s.set("root/g", None)
    assert s.get("root/g") is None


def test_returned_values_are_copies():
    s = MemoryStore({"root": {"g": {"v": 1}}})
    s.get("root")["g"]["v"] = 99
    assert s.get("root/g/v") == 1


def test_fail_and_unsubscribe():
    s = MemoryStore()
    errors = []
    token = s.subscribe("root", lambda d: None, errors.append)
    s.fail("root", "down")
    assert errors == ["down"]
    s.unsubscribe(token)
    s.fail("root", "again")
    assert errors == ["down"]
    assert s.subscriber_count == 0
