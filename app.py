import pygame, logging
from typing import Dict, Optional
from config import AppConfig
from render.renderer import Renderer
from render.surface import PygameSurface
from timeline.track import TrackSimulation
from timeline.loop import LoopDriver
from ui.form import Form
from input.keymap import DEFAULT_BINDINGS
from midi.parser import midi_to_range_text
from utils.store import load_settings, save_settings
from utils.crashlog import log_exception
from errors import TrainerError

def pick_file_dialog(title: str, patterns: list[tuple[str, str]]) -> Optional[str]:
    try:
        import tkinter as tk
        from tkinter import filedialog
        root = tk.Tk(); root.withdraw()
        file = filedialog.askopenfilename(title=title, filetypes=patterns)
        root.update(); root.destroy()
        return file or None
    except Exception:
        logging.warning("File dialog unavailable", exc_info=True)
        return None

class App:
    """Owns one track and everything around it: form, settings store, frame loop.

    ``store`` is any object with get(key, default) / set(key, value).
    """
    def __init__(self, cfg: AppConfig, store, bindings: Optional[Dict[int, str]] = None,
                 renderer: Optional[Renderer] = None):
        self.cfg = cfg
        self.store = store
        self.bindings: Dict[int, str] = dict(bindings if bindings is not None else DEFAULT_BINDINGS)
        self.renderer = renderer if renderer is not None else Renderer(cfg.render)

        self.form = Form()
        self.form.set_values(load_settings(store))
        if cfg.initial_ranges:
            self.form.set_field("ranges", cfg.initial_ranges)

        self.surface = PygameSurface()
        r = cfg.render
        self.track = TrackSimulation(r.track_x, r.track_y, r.track_w, r.track_h,
                                     self.surface, note_slots=r.note_slots)
        self.loop = LoopDriver(cfg.loop.max_dt)
        self.running = False

        # UI 訊息（toast）
        self._msg = ""
        self._msg_time = 0.0

    # ---------- UI 訊息 ----------
    def _toast(self, msg: str, secs: float = 4.0):
        self._msg = msg
        self._msg_time = max(self._msg_time, secs)

    def _expire_toast(self, dt: float):
        if self._msg_time > 0:
            self._msg_time -= dt
            if self._msg_time <= 0:
                self._msg_time = 0
                self._msg = ""

    # ---------- commands ----------
    def on_reset(self) -> bool:
        """Persist settings, parse the form and restart the track."""
        try:
            self._persist()
            config = self.form.parse()
            self.track.reset(config)
        except TrainerError as e:
            logging.warning("Reset rejected: %s", e)
            self._toast(str(e), 6.0)
            return False
        self.loop.reset_clock()
        return True

    def on_save_config(self) -> bool:
        try:
            settings = self.form.save_settings()
        except TrainerError as e:
            logging.warning("Save rejected: %s", e)
            self._toast(str(e), 6.0)
            return False
        save_settings(self.store, settings)
        logging.info("Settings saved: %r", settings)
        self._toast("saved", 2.0)
        return True

    def _persist(self):
        save_settings(self.store, self.form.persisted_values())

    def load_preset(self):
        self.form.load_selected_preset()
        self._toast(f"loaded {self.form.selected_preset[0]}", 2.0)

    def load_midi_interactive(self) -> bool:
        path = pick_file_dialog("Select a MIDI file", [("MIDI files", "*.mid *.midi"), ("All files", "*.*")])
        if not path:
            return False
        return self.load_midi(path)

    def load_midi(self, path: str) -> bool:
        try:
            text = midi_to_range_text(path)
        except TrainerError as e:
            logging.warning("MIDI import rejected: %s", e)
            self._toast(str(e), 6.0)
            return False
        except Exception as e:
            log_exception("load_midi", e)
            logging.error("Failed to load MIDI %s", path, exc_info=True)
            self._toast("Failed to load MIDI (see logs)", 6.0)
            return False
        self.form.set_field("ranges", text)
        self._toast("Loaded MIDI ✓", 2.0)
        return True

    def dispatch(self, action: str):
        if action == "start":
            self.on_reset()
        elif action == "load_preset":
            self.load_preset()
        elif action == "preset_prev":
            self.form.select_preset(-1)
        elif action == "preset_next":
            self.form.select_preset(+1)
        elif action == "save_settings":
            self.on_save_config()
        elif action == "load_midi":
            self.load_midi_interactive()
        elif action == "toggle_gutter":
            self.form.toggle_gutter()
        elif action == "next_field":
            self.form.focus_next()
        elif action == "blur":
            self.form.blur()
        elif action == "quit":
            self.running = False
        else:
            logging.warning("Unknown action: %s", action)

    # ---------- events ----------
    def handle_event(self, e):
        if e.type == pygame.QUIT:
            self.running = False
            return

        if e.type == pygame.KEYDOWN:
            if e.key in self.bindings:
                self.dispatch(self.bindings[e.key]); return
            if e.key == pygame.K_BACKSPACE:
                self.form.backspace(); return
            self.form.type_text(getattr(e, "unicode", ""))
            return

        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            self._click(e.pos)

    def _click(self, pos):
        for label, rect in self.renderer.button_rects.items():
            if rect.collidepoint(pos):
                self.dispatch({
                    "START": "start",
                    "LOAD PRESET": "load_preset",
                    "SAVE SETTINGS": "save_settings",
                    "LOAD MIDI": "load_midi",
                    "QUIT": "quit",
                }[label])
                return
        for field, rect in self.renderer.field_rects.items():
            if rect.collidepoint(pos):
                self.form.focus = field; return
        if self.renderer.gutter_rect.collidepoint(pos):
            self.form.toggle_gutter(); return
        self.form.blur()

    # ---------- frame ----------
    def step(self, now: float) -> float:
        """One tick: measure dt, advance the track, emit placements."""
        dt = self.loop.tick(now, self.track.update)
        self.track.draw()
        self._expire_toast(dt)
        return dt

    def render(self):
        r = self.renderer
        r.begin_frame()
        info = f"t={self.track.elapsed_time:6.2f}s  notes={len(self.track.notes)}"
        r.draw_status_bar(right_info_text=info, dirty={
            "LOAD PRESET": self.form.inputs_dirty,
            "SAVE SETTINGS": self.form.settings_dirty,
        })
        r.draw_track(self.surface)
        r.draw_form(self.form, self._msg)
        r.end_frame()

    def run(self):
        self.running = True
        while self.running:
            self.renderer.tick(self.cfg.render.fps)
            for e in pygame.event.get():
                self.handle_event(e)
            if not self.running:
                break
            self.step(pygame.time.get_ticks() / 1000.0)
            self.render()
        pygame.quit()
