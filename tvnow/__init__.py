"""tvnow: terminal program guide for bangumi.org schedules."""

__version__ = "0.1.0"
