"""
Shared dataclasses used across the guide pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from tvnow.errors import ParseStructureError


class SlotKind(str, Enum):
    """Slot tag as marked up by the provider (CSS class suffix)"""
    CURRENT = "current"
    FUTURE = "future"


@dataclass(slots=True, frozen=True)
class ProgramSlot:
    """One program in a channel's schedule, covering [start, end)."""
    start: datetime
    end: datetime
    title: str
    kind: SlotKind

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ParseStructureError(
                f"Slot '{self.title}' ends before it starts ({self.start:%Y%m%d%H%M} >= {self.end:%Y%m%d%H%M})"
            )


@dataclass(slots=True, frozen=True)
class ChannelSchedule:
    """A channel paired with its slots, in document order."""
    channel: str
    slots: tuple[ProgramSlot, ...] = ()

    def slots_of(self, kind: SlotKind) -> list[ProgramSlot]:
        return [slot for slot in self.slots if slot.kind is kind]


@dataclass(slots=True, frozen=True)
class ScheduleDocument:
    """Parsed result of one schedule page.

    channels[i] and slot_lists[i] describe the same channel; the two lists
    always have equal length.
    """
    channels: tuple[str, ...] = ()
    slot_lists: tuple[tuple[ProgramSlot, ...], ...] = field(default=())

    def __post_init__(self) -> None:
        if len(self.channels) != len(self.slot_lists):
            raise ParseStructureError(
                f"Found {len(self.channels)} channels but {len(self.slot_lists)} program lists"
            )

    def __iter__(self):
        for channel, slots in zip(self.channels, self.slot_lists):
            yield ChannelSchedule(channel, slots)

    def __len__(self) -> int:
        return len(self.channels)


__all__ = ["SlotKind", "ProgramSlot", "ChannelSchedule", "ScheduleDocument"]
