# notes/model.py
from dataclasses import dataclass

@dataclass
class Note:
    """A marker scrolling in +x at constant speed.

    Built so that x reaches the target line exactly at ``end_time``.
    """
    x: float
    y: float
    w: float
    h: float
    v: float          # px/s
    end_time: float   # seconds
    index: int = 0    # position in the input range list

    def update(self, dt: float):
        self.x += dt * self.v

    def draw(self, surface, slot_id: str):
        # 完全在原點左側時不重畫，slot 保留上一次的位置
        if self.x + self.w < 0:
            return
        surface.place_rectangle(slot_id, self.x, self.y, self.w, self.h)
