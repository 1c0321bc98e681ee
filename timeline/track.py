# timeline/track.py
import math, logging
from typing import List, Optional
from config import TrackConfig
from notes.model import Note
from errors import EmptyRangesError, InvalidSettingError, InvalidSpeedError, InvalidTickError

TARGET_RATIO = 0.85   # target line sits at 85% of the base width
GRACE_WINDOW = 0.3    # seconds a note survives past its end_time
TAIL_MARGIN = 1.0     # seconds added after the last end_time
CULLER_W = 200

SLOT_SINGLE = "single"
SLOT_PER_NOTE = "per_note"

def _is_number(v) -> bool:
    return not isinstance(v, bool) and isinstance(v, (int, float)) and math.isfinite(v)

class TrackSimulation:
    """Owns the track geometry, the active notes and the elapsed time.

    The caller drives it: ``reset(config)`` once per run, then
    ``update(dt)`` and ``draw()`` once per tick. Placement commands go to
    ``surface`` (anything with place_rectangle / set_visible / remove_rectangle).
    """
    def __init__(self, x: int, y: int, w: int, h: int, surface, note_slots: str = SLOT_PER_NOTE):
        if note_slots not in (SLOT_SINGLE, SLOT_PER_NOTE):
            raise ValueError(f"unknown note_slots mode: {note_slots!r}")
        self.x, self.y, self.w, self.h = x, y, w, h
        self.surface = surface
        self.note_slots = note_slots

        self.config: Optional[TrackConfig] = None
        self.target_x = x + math.floor(w * TARGET_RATIO)
        self.display_width = w
        self.scroll_speed = 0.0
        self.elapsed_time = 0.0
        self.t_max = 0.0
        self.notes: List[Note] = []
        self._slots: set[str] = set()

        self.visible = False
        self.surface.set_visible(False)

    @property
    def is_active(self) -> bool:
        return bool(self.notes)

    # ---------- reset ----------
    def reset(self, config: TrackConfig):
        speed = config.scroll_speed
        if not _is_number(speed) or speed <= 0:
            raise InvalidSpeedError(speed)
        if not config.ranges:
            raise EmptyRangesError("reset needs at least one range")
        if not _is_number(config.offset):
            raise InvalidSettingError("offset", config.offset)
        for rng in config.ranges:
            if not all(_is_number(s) for s in rng):
                raise InvalidSettingError("ranges", rng)

        # notes 先建好再動狀態，失敗時保留上一輪
        target_x = self.x + math.floor(self.w * TARGET_RATIO)
        notes = [self._build_note(i, r, config.offset, float(speed), target_x)
                 for i, r in enumerate(config.ranges)]
        for note in notes:
            if not all(math.isfinite(v) for v in (note.x, note.w, note.end_time)):
                raise InvalidSettingError("ranges", config.ranges[note.index])

        x, y, h = self.x, self.y, self.h
        self.config = config
        self.target_x = target_x
        w = self.w if config.gutter else math.floor(self.w * TARGET_RATIO)
        self.display_width = w

        self.surface.place_rectangle("frame", x, y, w, h)
        self.surface.place_rectangle("target", self.target_x, y, 0, h)
        self.surface.place_rectangle("culler", x + w, y, CULLER_W, h)
        self._release_slots()

        self.elapsed_time = 0.0
        self.scroll_speed = float(speed)
        self.t_max = max(n.end_time for n in notes) + TAIL_MARGIN
        self.notes = notes

        self.visible = True
        self.surface.set_visible(True)
        logging.info("Track reset: %d notes, target_x=%d, width=%d, t_max=%.3fs, speed=%.1fpx/s",
                     len(self.notes), self.target_x, w, self.t_max, self.scroll_speed)

    def _build_note(self, index: int, rng, offset: float, v: float, target_x: int) -> Note:
        start, end = rng[0] + offset, rng[1] + offset
        return Note(x=target_x - v * end, y=self.y,
                    w=(end - start) * v, h=self.h,
                    v=v, end_time=end, index=index)

    # ---------- tick ----------
    def update(self, dt: float):
        if not _is_number(dt) or dt < 0:
            raise InvalidTickError(dt)

        self.elapsed_time += dt
        if self.elapsed_time > self.t_max or not self.notes:
            return

        alive: List[Note] = []
        for note in self.notes:
            note.update(dt)
            # elapsed == end + grace 時仍保留
            if self.elapsed_time > note.end_time + GRACE_WINDOW:
                self._release_note(note)
            else:
                alive.append(note)
        self.notes = alive

    def draw(self):
        if self.notes:
            if self.note_slots == SLOT_SINGLE:
                self.notes[0].draw(self.surface, "note")
                self._slots.add("note")
            else:
                for note in self.notes:
                    slot = self.slot_id(note)
                    note.draw(self.surface, slot)
                    self._slots.add(slot)
        elif self.visible:
            self.visible = False
            self.surface.set_visible(False)
            logging.debug("Track idle at t=%.3fs", self.elapsed_time)

    # ---------- slots ----------
    def slot_id(self, note: Note) -> str:
        if self.note_slots == SLOT_SINGLE:
            return "note"
        return f"note:{note.index}"

    def _release_note(self, note: Note):
        # single 模式共用同一個 slot，不移除
        if self.note_slots != SLOT_PER_NOTE:
            return
        slot = self.slot_id(note)
        if slot in self._slots:
            self._slots.discard(slot)
            self.surface.remove_rectangle(slot)

    def _release_slots(self):
        for slot in sorted(self._slots):
            self.surface.remove_rectangle(slot)
        self._slots.clear()
