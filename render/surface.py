# render/surface.py
import pygame, logging
from typing import Dict, Protocol

class RenderSurface(Protocol):
    def place_rectangle(self, rect_id: str, x: float, y: float, w: float, h: float) -> None: ...
    def set_visible(self, flag: bool) -> None: ...
    def remove_rectangle(self, rect_id: str) -> None: ...

ROLE_COLORS = {
    "frame":  (40, 40, 46),
    "note":   (80, 200, 120),
    "culler": (12, 12, 14),   # same as the window background
    "target": (255, 90, 90),
}
FRAME_BORDER = (90, 90, 100)
RECT_LIMIT = 2**30  # pygame.Rect stores C ints

def role_of(rect_id: str) -> str:
    return rect_id.split(":", 1)[0]

def _clamp(v: float) -> int:
    if v != v:  # nan
        return 0
    if v >= RECT_LIMIT:
        return RECT_LIMIT
    if v <= -RECT_LIMIT:
        return -RECT_LIMIT
    return round(v)

class PygameSurface:
    """Keeps the latest placement of every rectangle and paints them on demand."""
    def __init__(self):
        self.rects: Dict[str, pygame.Rect] = {}
        self.visible = False

    def place_rectangle(self, rect_id: str, x: float, y: float, w: float, h: float):
        if role_of(rect_id) not in ROLE_COLORS:
            raise ValueError(f"unknown rectangle role: {rect_id!r}")
        x, y = _clamp(x), _clamp(y)
        w = min(max(0, _clamp(w)), RECT_LIMIT, RECT_LIMIT - x)
        h = min(max(0, _clamp(h)), RECT_LIMIT, RECT_LIMIT - y)
        self.rects[rect_id] = pygame.Rect(x, y, w, h)

    def remove_rectangle(self, rect_id: str):
        self.rects.pop(rect_id, None)

    def set_visible(self, flag: bool):
        if bool(flag) != self.visible:
            logging.debug("Track surface %s", "shown" if flag else "hidden")
        self.visible = bool(flag)

    def paint(self, screen: pygame.Surface):
        if not self.visible:
            return
        frame = self.rects.get("frame")
        culler = self.rects.get("culler")
        if frame is not None:
            pygame.draw.rect(screen, ROLE_COLORS["frame"], frame)

        # notes 只畫在 frame + culler 範圍內
        clip_prev = screen.get_clip()
        if frame is not None:
            clip = frame.union(culler) if culler is not None else frame
            screen.set_clip(clip)
        for rect_id, rect in self.rects.items():
            if role_of(rect_id) == "note":
                pygame.draw.rect(screen, ROLE_COLORS["note"], rect)
        screen.set_clip(clip_prev)

        if culler is not None:
            pygame.draw.rect(screen, ROLE_COLORS["culler"], culler)
        if frame is not None:
            pygame.draw.rect(screen, FRAME_BORDER, frame, 1)
        target = self.rects.get("target")
        if target is not None:
            pygame.draw.line(screen, ROLE_COLORS["target"],
                             (target.x, target.y), (target.x, target.bottom - 1), 2)
