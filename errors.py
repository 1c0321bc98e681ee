# errors.py


class TrainerError(Exception):
    """Base class for everything the trainer reports back to the UI."""


class MalformedRangeError(TrainerError, ValueError):
    def __init__(self, token: str, reason: str = "expected <int>-<int>"):
        self.token = token
        super().__init__(f"malformed range {token!r}: {reason}")


class EmptyRangesError(TrainerError, ValueError):
    def __init__(self, msg: str = "no ranges given"):
        super().__init__(msg)


class InvalidSpeedError(TrainerError, ValueError):
    def __init__(self, speed):
        self.speed = speed
        super().__init__(f"scroll speed must be a positive number, got {speed!r}")


class InvalidTickError(TrainerError, ValueError):
    def __init__(self, dt):
        self.dt = dt
        super().__init__(f"tick delta must be a finite non-negative number, got {dt!r}")


class InvalidSettingError(TrainerError, ValueError):
    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"{field}: not a number: {value!r}")
