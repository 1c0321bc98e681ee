import json
from config import Settings
from utils.store import JsonFileStore, SETTINGS_KEY, load_settings, save_settings

def test_values_survive_reopen(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    store = JsonFileStore(str(path))
    store.set("a", {"b": 1})
    assert JsonFileStore(str(path)).get("a") == {"b": 1}

def test_missing_key_default(tmp_path):
    store = JsonFileStore(str(tmp_path / "s.json"))
    assert store.get("nope") is None
    assert store.get("nope", 3) == 3

def test_corrupt_file_starts_empty(tmp_path):
    path = tmp_path / "s.json"
    path.write_text("{not json", encoding="utf-8")
    assert JsonFileStore(str(path)).get(SETTINGS_KEY) is None
    path.write_text("[1, 2]", encoding="utf-8")
    assert JsonFileStore(str(path)).get(SETTINGS_KEY) is None

def test_settings_under_fixed_key(tmp_path):
    path = tmp_path / "s.json"
    store = JsonFileStore(str(path))
    save_settings(store, Settings(offset_frames=2, scroll_speed=500, gutter=True))
    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk == {SETTINGS_KEY: {"offset_frames": 2, "scroll_speed": 500, "gutter": True}}
    assert load_settings(JsonFileStore(str(path))) == Settings(2.0, 500.0, True)

def test_load_settings_defaults(tmp_path):
    store = JsonFileStore(str(tmp_path / "s.json"))
    assert load_settings(store) == Settings()
    store.set(SETTINGS_KEY, {"scroll_speed": "fast"})
    assert load_settings(store) == Settings()
    store.set(SETTINGS_KEY, {"gutter": "yes"})
    assert load_settings(store).gutter is False
