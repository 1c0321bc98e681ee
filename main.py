# main.py
import sys, os
sys.path.append(os.path.dirname(__file__))  # 確保能找到 config.py

from utils.crashlog import setup_crashlog, log_exception, log_dir
setup_crashlog()

import argparse, json
import logging, traceback
from logging.handlers import RotatingFileHandler
from config import AppConfig, RenderConfig, LoopConfig
from input.keymap import DEFAULT_BINDINGS, deserialize_bindings
from utils.store import JsonFileStore

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

def _init_logging(debug: bool = False):
    if logging.getLogger().handlers:
        return
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, encoding="utf-8")
    try:
        fh = RotatingFileHandler(os.path.join(log_dir(), "app.log"),
                                 maxBytes=2*1024*1024, backupCount=3, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(fh)
    except OSError:
        logging.warning("File logging disabled", exc_info=True)

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Frame-range reaction timing trainer")
    ap.add_argument('--settings', default=os.path.join(os.getcwd(), "settings.json"),
                    help="JSON file holding the persisted settings")
    ap.add_argument('--bindings', default=None, help="JSON file {key name: action}")
    ap.add_argument('--fps', type=int, default=60)
    ap.add_argument('--max-dt', type=float, default=0.25,
                    help="ceiling for one tick's dt in seconds, 0 disables it")
    ap.add_argument('--single-slot', action='store_true',
                    help="draw only the earliest active note")
    ap.add_argument('--ranges', default="", help="initial frame ranges, e.g. '100-160, 200-210'")
    ap.add_argument('--debug', action='store_true')
    return ap

def build_config(args) -> AppConfig:
    return AppConfig(
        render=RenderConfig(fps=args.fps, note_slots="single" if args.single_slot else "per_note"),
        loop=LoopConfig(max_dt=args.max_dt if args.max_dt > 0 else None),
        initial_ranges=args.ranges,
    )

def load_bindings(path):
    if not path:
        return dict(DEFAULT_BINDINGS)
    with open(path, "r", encoding="utf-8") as f:
        return deserialize_bindings(json.load(f))

def main(argv=None):
    args = build_parser().parse_args(argv)
    _init_logging(args.debug)
    logging.info("應用程式啟動")

    from app import App
    App(build_config(args), JsonFileStore(args.settings), bindings=load_bindings(args.bindings)).run()

def run(argv=None) -> int:
    try:
        main(argv)
    except Exception as e:
        try:
            log_exception("Top-level exception", e)
        except OSError:
            pass
        logging.error("未捕捉的例外：%s", e, exc_info=True)
        print("程式發生錯誤，請到 logs/ 資料夾看 app.log 與 error-*.txt")
        traceback.print_exc()
        return 1
    return 0

if __name__ == '__main__':
    sys.exit(run())
