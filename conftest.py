import os, sys, tempfile

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("FRAME_TRAINER_LOG_DIR", tempfile.mkdtemp(prefix="trainer-logs-"))

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
