import pytest
from timeline.loop import LoopDriver

def test_first_tick_is_zero():
    loop = LoopDriver()
    assert loop.measure(12.5) == 0.0

def test_measures_delta():
    loop = LoopDriver()
    loop.measure(1.0)
    assert loop.measure(1.25) == pytest.approx(0.25)
    assert loop.measure(1.5) == pytest.approx(0.25)

def test_backwards_clock_gives_zero():
    loop = LoopDriver()
    loop.measure(2.0)
    assert loop.measure(1.0) == 0.0
    assert loop.measure(1.5) == pytest.approx(0.5)

def test_unclamped_by_default():
    loop = LoopDriver()
    loop.measure(0.0)
    assert loop.measure(30.0) == 30.0

def test_ceiling():
    loop = LoopDriver(max_dt=1/60)
    loop.measure(0.0)
    assert loop.measure(5.0) == pytest.approx(1/60)
    assert loop.clamped_ticks == 1
    assert loop.measure(5.01) == pytest.approx(0.01)
    assert loop.clamped_ticks == 1

def test_reset_clock():
    loop = LoopDriver()
    loop.measure(1.0)
    loop.reset_clock()
    assert loop.measure(9.0) == 0.0

def test_tick_forwards_dt():
    seen = []
    loop = LoopDriver()
    loop.tick(0.5, seen.append)
    dt = loop.tick(0.75, seen.append)
    assert seen == [0.0, 0.25]
    assert dt == 0.25

@pytest.mark.parametrize("bad", [0, -1.0])
def test_bad_ceiling(bad):
    with pytest.raises(ValueError):
        LoopDriver(max_dt=bad)

def test_non_finite_timestamp():
    with pytest.raises(ValueError):
        LoopDriver().measure(float("nan"))
