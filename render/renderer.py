# render/renderer.py
import os, pygame, logging
from config import RenderConfig
from render.surface import PygameSurface
from ui.form import Form, FIELDS

STATUS_H = 36
BTN_PAD_X = 12
BTN_GAP = 10
BUTTONS = ["START", "LOAD PRESET", "SAVE SETTINGS", "LOAD MIDI", "QUIT"]
FIELD_LABELS = {"ranges": "frames", "offset": "offset (frames)", "scroll_speed": "scroll speed (px/s)"}

class Renderer:
    def __init__(self, cfg: RenderConfig):
        pygame.init()
        self.cfg = cfg
        self.screen = pygame.display.set_mode((cfg.window_w, cfg.window_h))
        pygame.display.set_caption("frame timing trainer")
        try:
            icon_path = os.path.join(os.path.dirname(__file__), "..", "static", "img", "icon", "icon.png")
            if os.path.exists(icon_path):
                pygame.display.set_icon(pygame.image.load(icon_path))
        except pygame.error as e:
            logging.warning("set_icon failed: %s", e)
        self.font = pygame.font.SysFont("consolas", 18)
        self.font_small = pygame.font.SysFont("consolas", 14)
        self.clock = pygame.time.Clock()
        self.button_rects: dict[str, pygame.Rect] = {}
        self.field_rects: dict[str, pygame.Rect] = {}
        self.gutter_rect = pygame.Rect(0, 0, 0, 0)

    def tick(self, fps=60) -> float:
        return self.clock.tick(fps) / 1000.0

    def begin_frame(self):
        self.screen.fill((12, 12, 14))

    def end_frame(self):
        pygame.display.flip()

    def draw_status_bar(self, right_info_text: str = "", dirty: dict[str, bool] | None = None):
        dirty = dirty or {}
        pygame.draw.rect(self.screen, (24, 24, 28), (0, 0, self.cfg.window_w, STATUS_H))
        pygame.draw.line(self.screen, (60, 60, 66), (0, STATUS_H), (self.cfg.window_w, STATUS_H), 1)

        x = 10; self.button_rects.clear()
        for label in BUTTONS:
            surf = self.font_small.render(label, True, (220, 220, 230))
            rect = surf.get_rect(); rect.topleft = (x + BTN_PAD_X, (STATUS_H - rect.height)//2)
            box = pygame.Rect(x, 4, rect.width + BTN_PAD_X*2, STATUS_H - 8)
            # 有未套用的變更時按鈕標紅
            fill = (120, 36, 36) if dirty.get(label) else (40, 40, 46)
            pygame.draw.rect(self.screen, fill, box, border_radius=6)
            pygame.draw.rect(self.screen, (75, 75, 85), box, 1, border_radius=6)
            self.screen.blit(surf, rect)
            self.button_rects[label] = box
            x += box.width + BTN_GAP

        if right_info_text:
            right = self.font_small.render(right_info_text, True, (180, 180, 190))
            self.screen.blit(right, (self.cfg.window_w - right.get_width() - 10,
                                     (STATUS_H - right.get_height())//2))

    def draw_track(self, surface: PygameSurface):
        surface.paint(self.screen)

    def draw_form(self, form: Form, message: str = ""):
        top = self.cfg.track_y + self.cfg.track_h + 16
        left = 10
        line_h = 26

        # preset list
        for i, (name, _) in enumerate(form.presets):
            selected = i == form.preset_idx
            color = (255, 240, 170) if selected else (170, 170, 180)
            surf = self.font_small.render(("> " if selected else "  ") + name, True, color)
            self.screen.blit(surf, (left, top + i * 20))

        fx = left + 190
        field_w = self.cfg.window_w - fx - 10
        self.field_rects.clear()
        for row, field in enumerate(FIELDS):
            y = top + row * (line_h + 18)
            label = self.font_small.render(FIELD_LABELS[field], True, (170, 170, 180))
            self.screen.blit(label, (fx, y))
            box = pygame.Rect(fx, y + 16, field_w, line_h)
            focused = form.focus == field
            pygame.draw.rect(self.screen, (34, 34, 40), box, border_radius=4)
            pygame.draw.rect(self.screen, (255, 200, 120) if focused else (70, 70, 80), box, 1, border_radius=4)
            text = form.values[field] + ("_" if focused else "")
            surf = self.font_small.render(text, True, (220, 220, 230))
            clip_prev = self.screen.get_clip()
            self.screen.set_clip(box.inflate(-6, 0))
            # 太長時靠右顯示游標所在的尾端
            tx = min(box.x + 6, box.right - 6 - surf.get_width())
            self.screen.blit(surf, (tx, box.y + (line_h - surf.get_height())//2))
            self.screen.set_clip(clip_prev)
            self.field_rects[field] = box

        gy = top + len(FIELDS) * (line_h + 18)
        gutter_text = f"[{'x' if form.gutter else ' '}] gutter"
        surf = self.font_small.render(gutter_text, True, (220, 220, 230))
        self.gutter_rect = surf.get_rect(topleft=(fx, gy))
        self.screen.blit(surf, self.gutter_rect)

        if message:
            msg = self.font_small.render(message, True, (255, 170, 120))
            self.screen.blit(msg, (left, self.cfg.window_h - msg.get_height() - 8))

