import pytest


class RecordingSurface:
    def __init__(self):
        self.calls = []
        self.rects = {}
        self.visible = None

    def place_rectangle(self, rect_id, x, y, w, h):
        self.calls.append(("place", rect_id, x, y, w, h))
        self.rects[rect_id] = (x, y, w, h)

    def set_visible(self, flag):
        self.calls.append(("visible", flag))
        self.visible = flag

    def remove_rectangle(self, rect_id):
        self.calls.append(("remove", rect_id))
        self.rects.pop(rect_id, None)


@pytest.fixture
def surface():
    return RecordingSurface()
