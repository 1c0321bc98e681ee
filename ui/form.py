# ui/form.py
import math, logging
from typing import List, Optional, Tuple
from config import GAME_FPS, Settings, TrackConfig
from notes.ranges import DEFAULT_PRESETS, parse_ranges
from errors import InvalidSettingError

FIELDS = ("ranges", "offset", "scroll_speed")
ALLOWED_CHARS = {
    "ranges": set("0123456789-, "),
    "offset": set("0123456789.-"),
    "scroll_speed": set("0123456789."),
}

def _to_float(field: str, text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise InvalidSettingError(field, text) from None
    if not math.isfinite(value):
        raise InvalidSettingError(field, text)
    return value

class Form:
    """Field values, preset selection and the two dirty flags of the side panel."""
    def __init__(self, presets: Optional[List[Tuple[str, str]]] = None):
        self.presets = list(presets if presets is not None else DEFAULT_PRESETS)
        self.preset_idx = 0
        self.values = {"ranges": "", "offset": "0", "scroll_speed": "300"}
        self.gutter = False
        self.focus: Optional[str] = None

        self.inputs_dirty = False
        self.settings_dirty = False
        self.mark_inputs_dirty()

    # ---- presets ----
    @property
    def selected_preset(self) -> Tuple[str, str]:
        return self.presets[self.preset_idx]

    def select_preset(self, delta: int):
        if not self.presets:
            return
        self.preset_idx = (self.preset_idx + delta) % len(self.presets)
        self.mark_inputs_dirty()

    def load_selected_preset(self):
        if not self.presets:
            return
        name, frames = self.selected_preset
        self.values["ranges"] = frames
        self.inputs_dirty = False
        logging.info("Preset loaded: %s", name)

    # ---- dirty flags ----
    def mark_inputs_dirty(self):
        self.inputs_dirty = True

    def mark_settings_dirty(self):
        self.settings_dirty = True

    # ---- editing ----
    def focus_next(self):
        if self.focus is None:
            self.focus = FIELDS[0]
        else:
            i = FIELDS.index(self.focus) + 1
            self.focus = FIELDS[i] if i < len(FIELDS) else None

    def blur(self):
        self.focus = None

    def type_text(self, text: str) -> bool:
        if self.focus is None or not text:
            return False
        allowed = ALLOWED_CHARS[self.focus]
        accepted = "".join(ch for ch in text if ch in allowed)
        if not accepted:
            return False
        self.values[self.focus] += accepted
        self._touched(self.focus)
        return True

    def backspace(self) -> bool:
        if self.focus is None or not self.values[self.focus]:
            return False
        self.values[self.focus] = self.values[self.focus][:-1]
        self._touched(self.focus)
        return True

    def set_field(self, field: str, text: str):
        if field not in FIELDS:
            raise KeyError(field)
        self.values[field] = text
        self._touched(field)

    def toggle_gutter(self):
        self.gutter = not self.gutter
        self.mark_settings_dirty()

    def _touched(self, field: str):
        if field == "ranges":
            self.mark_inputs_dirty()
        else:
            self.mark_settings_dirty()

    # ---- values ----
    def set_values(self, settings: Settings):
        self.values["offset"] = f"{settings.offset_frames:g}"
        self.values["scroll_speed"] = f"{settings.scroll_speed:g}"
        self.gutter = settings.gutter is True

    def persisted_values(self) -> Settings:
        return Settings(
            offset_frames=_to_float("offset", self.values["offset"]),
            scroll_speed=_to_float("scroll_speed", self.values["scroll_speed"]),
            gutter=self.gutter,
        )

    def save_settings(self) -> Settings:
        settings = self.persisted_values()
        self.settings_dirty = False
        return settings

    def parse(self) -> TrackConfig:
        settings = self.persisted_values()
        return TrackConfig(
            ranges=tuple(parse_ranges(self.values["ranges"])),
            offset=settings.offset_frames / GAME_FPS,
            scroll_speed=settings.scroll_speed,
            gutter=settings.gutter,
        )
