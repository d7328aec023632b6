"""RingTimer — a countdown timer with a depleting progress ring."""

__version__ = "0.1.0"
