# ========================= config.py =========================
from dataclasses import dataclass, field
from typing import Optional, Tuple

GAME_FPS = 60  # source material frame rate; range text is in these frames

@dataclass
class RenderConfig:
    window_w: int = 720
    window_h: int = 380
    fps: int = 60
    track_x: int = 4
    track_y: int = 44       # below the status bar
    track_w: int = 500
    track_h: int = 76
    note_slots: str = "per_note"  # or "single"

@dataclass
class LoopConfig:
    max_dt: Optional[float] = 0.25  # None = never clamp

@dataclass(frozen=True)
class TrackConfig:
    ranges: Tuple[Tuple[float, float], ...]  # seconds
    offset: float = 0.0                      # seconds
    scroll_speed: float = 300.0              # px/s
    gutter: bool = False

@dataclass
class Settings:
    offset_frames: float = 0.0
    scroll_speed: float = 300.0
    gutter: bool = False

    def to_dict(self) -> dict:
        return {"offset_frames": self.offset_frames,
                "scroll_speed": self.scroll_speed,
                "gutter": self.gutter}

    @classmethod
    def from_dict(cls, obj: dict) -> "Settings":
        base = cls()
        return cls(
            offset_frames=float(obj.get("offset_frames", base.offset_frames)),
            scroll_speed=float(obj.get("scroll_speed", base.scroll_speed)),
            gutter=obj.get("gutter") is True,
        )

@dataclass
class AppConfig:
    render: RenderConfig = field(default_factory=RenderConfig)
    loop: LoopConfig = field(default_factory=LoopConfig)
    initial_ranges: str = ""
