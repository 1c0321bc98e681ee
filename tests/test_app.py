import types
import pygame
import pytest
from app import App
from config import AppConfig, RenderConfig, Settings
from notes.ranges import DEFAULT_PRESETS
from utils.store import JsonFileStore, SETTINGS_KEY

def stub_renderer():
    return types.SimpleNamespace(button_rects={}, field_rects={}, gutter_rect=pygame.Rect(0, 0, 0, 0))

@pytest.fixture
def store(tmp_path):
    return JsonFileStore(str(tmp_path / "settings.json"))

@pytest.fixture
def app(store):
    return App(AppConfig(), store, renderer=stub_renderer())

def key(k, text=""):
    return pygame.event.Event(pygame.KEYDOWN, key=k, unicode=text, mod=0)

def test_stored_settings_are_loaded(store):
    store.set(SETTINGS_KEY, Settings(offset_frames=4, scroll_speed=420, gutter=True).to_dict())
    app = App(AppConfig(), store, renderer=stub_renderer())
    assert app.form.values["scroll_speed"] == "420"
    assert app.form.gutter is True

def test_enter_then_g_starts_track(app, store):
    app.handle_event(key(pygame.K_RETURN))
    assert app.form.values["ranges"] == DEFAULT_PRESETS[0][1]
    app.handle_event(key(pygame.K_g, "g"))
    assert len(app.track.notes) == 4
    assert app.surface.visible
    assert store.get(SETTINGS_KEY) == {"offset_frames": 0.0, "scroll_speed": 300.0, "gutter": False}

def test_reset_with_empty_ranges_is_reported(app):
    assert app.on_reset() is False
    assert app._msg
    assert not app.track.is_active

def test_step_advances_track(app):
    app.form.set_field("ranges", "60-120")
    assert app.on_reset()
    app.step(10.0)
    app.step(10.2)
    assert app.track.elapsed_time == pytest.approx(0.2)
    assert "note:0" in app.surface.rects

def test_step_clamps_long_stalls(app):
    app.form.set_field("ranges", "60-120")
    app.on_reset()
    app.step(0.0)
    app.step(100.0)
    assert app.track.elapsed_time == pytest.approx(AppConfig().loop.max_dt)

def test_initial_ranges_and_single_slot(store):
    cfg = AppConfig(render=RenderConfig(note_slots="single"), initial_ranges="1-2")
    app = App(cfg, store, renderer=stub_renderer())
    assert app.form.values["ranges"] == "1-2"
    app.on_reset()
    app.step(0.0)
    assert "note" in app.surface.rects

def test_typing_into_focused_field(app):
    app.handle_event(key(pygame.K_TAB))
    for ch in "12-34":
        app.handle_event(key(0, ch))
    app.handle_event(key(pygame.K_BACKSPACE))
    assert app.form.values["ranges"] == "12-3"

def test_save_settings(app, store):
    app.form.set_field("scroll_speed", "600")
    assert app.on_save_config()
    assert store.get(SETTINGS_KEY)["scroll_speed"] == 600.0
    assert not app.form.settings_dirty
    app.form.set_field("scroll_speed", "")
    assert app.on_save_config() is False

def test_button_click(app):
    app.renderer.button_rects["LOAD PRESET"] = pygame.Rect(0, 0, 50, 20)
    app.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10)))
    assert not app.form.inputs_dirty

def test_field_click_focuses(app):
    app.renderer.field_rects["offset"] = pygame.Rect(100, 100, 50, 20)
    app.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(110, 110)))
    assert app.form.focus == "offset"
    app.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(500, 500)))
    assert app.form.focus is None

def test_quit(app):
    app.running = True
    app.handle_event(pygame.event.Event(pygame.QUIT))
    assert app.running is False

def test_bad_midi_file(app, tmp_path):
    bad = tmp_path / "x.mid"
    bad.write_bytes(b"not midi")
    assert app.load_midi(str(bad)) is False
    assert app.form.values["ranges"] == ""

def test_overflowing_offset_is_reported(app):
    app.form.set_field("ranges", "100-160")
    app.form.set_field("offset", "9" * 400)
    assert app.on_reset() is False
    assert "offset" in app._msg
    app.step(0.0)
    app.step(0.1)
    assert not app.track.is_active

def test_giant_range_draws_without_error(app):
    app.form.set_field("ranges", "0-9999999999999999999999")
    assert app.on_reset()
    app.step(0.0)
    app.step(0.1)
    assert app.track.is_active
