"""
Guide rendering

Three views over parsed schedule pages, one record per output line:

- Snapshot: what each channel is airing now
- FullDay: the rest of today's programs, grouped under a channel header
- Weekly: every upcoming program over the week, one flat line each

Channel names are color-tagged in Snapshot and FullDay only.
"""
from contextlib import contextmanager
import io
import logging
from typing import Iterator, Sequence, TextIO

from tvnow.schemas import ChannelColor, ViewMode
from tvnow.services.guide_types import ProgramSlot, ScheduleDocument, SlotKind


logger = logging.getLogger(__name__)

NOT_BROADCASTING = "現在放送していません"


def colorize(text: str, color: ChannelColor | None) -> str:
    """Wrap text in an ANSI color sequence, or return it unchanged when color is None."""
    if color is None:
        return text
    return f"\033[{color.value}m{text}\033[0m"


@contextmanager
def _buffered(out: TextIO) -> Iterator[io.StringIO]:
    buf = io.StringIO()
    try:
        yield buf
        out.write(buf.getvalue())
    finally:
        out.flush()


def _clock(slot: ProgramSlot) -> str:
    return f"{slot.start:%H:%M} ~ {slot.end:%H:%M}"


def _week_clock(slot: ProgramSlot) -> str:
    return f"{slot.start:%a %H:%M} ~ {slot.end:%a %H:%M}"


def render_snapshot(document: ScheduleDocument, out: TextIO, *, color: ChannelColor | None = None) -> None:
    """Write '<channel> <title>' for the program airing now on each channel."""
    with _buffered(out) as buf:
        for schedule in document:
            current = schedule.slots_of(SlotKind.CURRENT)
            if current:
                buf.write(f"{colorize(schedule.channel, color)} {current[0].title}\n")
            else:
                buf.write(f"{schedule.channel} {NOT_BROADCASTING}\n")


def render_full_day(document: ScheduleDocument, out: TextIO, *, color: ChannelColor | None = None) -> None:
    """Write a header per channel followed by 'HH:MM ~ HH:MM <title>' for each upcoming slot."""
    with _buffered(out) as buf:
        for schedule in document:
            buf.write(f"{colorize(schedule.channel, color)}\n")
            for slot in schedule.slots_of(SlotKind.FUTURE):
                buf.write(f"{_clock(slot)} {slot.title}\n")


def render_weekly(documents: Sequence[ScheduleDocument], out: TextIO) -> None:
    """
    Write every upcoming slot of every page as a single line

    Lines read '<channel> <Wkd HH:MM> ~ <Wkd HH:MM> <title>'. Pages are
    written in the order given. Channel names stay uncolored.
    """
    with _buffered(out) as buf:
        for document in documents:
            for schedule in document:
                for slot in schedule.slots_of(SlotKind.FUTURE):
                    buf.write(f"{schedule.channel} {_week_clock(slot)} {slot.title}\n")


def render(
    mode: ViewMode,
    documents: Sequence[ScheduleDocument],
    out: TextIO,
    *,
    color: ChannelColor | None = None,
) -> None:
    """
    Render parsed pages with the strategy for `mode`

    Args:
        mode: View to render
        documents: One page for Snapshot/FullDay, the week's pages for Weekly
        out: Text sink
        color: Channel color, None when the sink does not take color

    Raises:
        ValueError: If a single-page view is given other than exactly one page
    """
    logger.debug("Rendering %s view over %s page(s)", mode.value, len(documents))

    if mode is ViewMode.WEEKLY:
        render_weekly(documents, out)
        return

    if len(documents) != 1:
        raise ValueError(f"{mode.value} view renders exactly one page, got {len(documents)}")

    if mode is ViewMode.SNAPSHOT:
        render_snapshot(documents[0], out, color=color)
    else:
        render_full_day(documents[0], out, color=color)
