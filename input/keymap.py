# ========================= input/keymap.py =========================
import pygame
from typing import Dict

ACTIONS = (
    "start", "load_preset", "preset_prev", "preset_next", "save_settings",
    "load_midi", "toggle_gutter", "next_field", "blur", "quit",
)

# 預設快捷鍵（可用 --bindings 的 JSON 覆蓋）
DEFAULT_BINDINGS: Dict[int, str] = {
    pygame.K_g: "start",
    pygame.K_RETURN: "load_preset",
    pygame.K_KP_ENTER: "load_preset",
    pygame.K_UP: "preset_prev",
    pygame.K_DOWN: "preset_next",
    pygame.K_F2: "save_settings",
    pygame.K_F3: "load_midi",
    pygame.K_F4: "toggle_gutter",
    pygame.K_TAB: "next_field",
    pygame.K_ESCAPE: "blur",
}

def keycode_to_name(k: int) -> str:
    try:
        return pygame.key.name(k)
    except Exception:
        return str(k)

def name_to_keycode(name: str) -> int:
    """把 'g', 'return' 等名稱轉回 pygame 的 keycode。"""
    try:
        return pygame.key.key_code(name)
    except Exception:
        # 允許純數字 keycode
        try:
            return int(name)
        except ValueError:
            raise ValueError(f"Unknown key name: {name}") from None

def serialize_bindings(bindings: Dict[int, str]) -> dict:
    return {keycode_to_name(k): action for k, action in bindings.items()}

def deserialize_bindings(obj: dict) -> Dict[int, str]:
    out: Dict[int, str] = {}
    for kname, action in obj.items():
        if action not in ACTIONS:
            raise ValueError(f"Unknown action {action!r} for key {kname!r}")
        out[name_to_keycode(str(kname))] = action
    return out
