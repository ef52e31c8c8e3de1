from attendance_dashboard.common.preferences import InMemoryPreferenceStore, JsonFilePreferenceStore


def test_json_file_store_round_trip(tmp_path):
    path = tmp_path / "prefs" / "dashboard.json"
    store = JsonFilePreferenceStore(path)

    store.save("currentEmployeeId", "E002")
    store.save("attendanceFilters", {"wfh": "true"})

    reopened = JsonFilePreferenceStore(path)
    assert reopened.load("currentEmployeeId") == "E002"
    assert reopened.load("attendanceFilters") == {"wfh": "true"}
    assert reopened.load("missing", "fallback") == "fallback"


def test_corrupt_file_falls_back_to_default(tmp_path):
    path = tmp_path / "dashboard.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFilePreferenceStore(path)

    assert store.load("currentEmployeeId") is None
    # save does not raise either
    store.save("currentEmployeeId", "E001")


def test_in_memory_store():
    store = InMemoryPreferenceStore({"a": 1})
    store.save("b", 2)
    assert (store.load("a"), store.load("b"), store.load("c")) == (1, 2, None)
