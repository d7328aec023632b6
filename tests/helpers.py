"""Shared test helpers for RingTimer."""


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Settable wall clock in seconds."""

    def __init__(self, start: float = 0.0):
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> float:
        self.current += seconds
        return self.current


class FakeHandle:
    def __init__(self, callback, delay_ms):
        self.callback = callback
        self.delay_ms = delay_ms
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Records frame requests; tests fire them by hand."""

    def __init__(self):
        self.requests: list[FakeHandle] = []

    def schedule_next_frame(self, callback, delay_ms=16):
        handle = FakeHandle(callback, delay_ms)
        self.requests.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeHandle]:
        return [h for h in self.requests if not h.cancelled]

    @property
    def last(self) -> FakeHandle | None:
        return self.requests[-1] if self.requests else None

    def fire_pending(self) -> int:
        """Run every frame that is still pending; returns how many ran."""
        due = self.pending
        for handle in due:
            handle.cancelled = True
            handle.callback()
        return len(due)


def run_until_complete(engine, clock, step: float = 1.0, limit: int = 100000) -> int:
    """Advance the clock and tick until the engine stops running."""
    ticks = 0
    while engine.is_running and ticks < limit:
        clock.advance(step)
        engine.tick()
        ticks += 1
    return ticks
