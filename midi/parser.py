# midi/parser.py
import mido, logging
from typing import List, Optional, Tuple
from config import GAME_FPS
from notes.ranges import format_ranges
from errors import EmptyRangesError

def parse_midi_to_ranges(path: str, channel: Optional[int] = None) -> List[Tuple[int, int]]:
    """Note on/off pairs of a MIDI file -> (start_frame, end_frame), onset order."""
    mid = mido.MidiFile(path)
    tpb = mid.ticks_per_beat
    tempo = 500000  # default 120 bpm
    time_sec = 0.0
    active = {}
    spans: List[Tuple[float, float]] = []

    for msg in mido.merge_tracks(mid.tracks):
        time_sec += mido.tick2second(msg.time, tpb, tempo)
        if msg.is_meta:
            if msg.type == 'set_tempo':
                tempo = msg.tempo
            continue
        if channel is not None and getattr(msg, "channel", None) != channel:
            continue
        if msg.type == 'note_on' and msg.velocity > 0:
            active.setdefault((msg.channel, msg.note), time_sec)
        elif msg.type == 'note_off' or (msg.type == 'note_on' and msg.velocity == 0):
            st = active.pop((msg.channel, msg.note), None)
            if st is not None:
                spans.append((st, time_sec))
    # close dangling
    for st in active.values():
        spans.append((st, time_sec))

    spans.sort()
    frames = [(round(st * GAME_FPS), round(en * GAME_FPS)) for st, en in spans]
    logging.debug("MIDI %s: %d ranges", path, len(frames))
    return frames

def midi_to_range_text(path: str, channel: Optional[int] = None) -> str:
    frames = parse_midi_to_ranges(path, channel)
    if not frames:
        raise EmptyRangesError(f"no notes found in {path}")
    return format_ranges(frames)
