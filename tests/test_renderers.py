import io
from datetime import datetime

import pytest

from tvnow.schemas import ChannelColor, ViewMode
from tvnow.services.guide_types import ProgramSlot, ScheduleDocument, SlotKind
from tvnow.services.renderers import (
    NOT_BROADCASTING,
    colorize,
    render,
    render_full_day,
    render_snapshot,
    render_weekly,
)
from tvnow.services.schedule_parser import parse_schedule


def slot(start: str, end: str, title: str, kind: SlotKind = SlotKind.FUTURE) -> ProgramSlot:
    return ProgramSlot(
        start=datetime.strptime(start, "%Y%m%d%H%M"),
        end=datetime.strptime(end, "%Y%m%d%H%M"),
        title=title,
        kind=kind,
    )


class FlushCountingSink(io.StringIO):
    def __init__(self):
        super().__init__()
        self.flushes = 0

    def flush(self):
        self.flushes += 1
        super().flush()


def test_snapshot_without_current_slot():
    document = ScheduleDocument(
        channels=("3 NHK Eテレ",),
        slot_lists=((slot("202401101000", "202401101100", "Later"),),),
    )
    out = io.StringIO()
    render_snapshot(document, out, color=ChannelColor.BRIGHT_YELLOW)
    assert out.getvalue() == "3 NHK Eテレ 現在放送していません\n"
    assert NOT_BROADCASTING == "現在放送していません"


def test_snapshot_colors_channel_of_current_program():
    document = ScheduleDocument(
        channels=("1",),
        slot_lists=((slot("202401100930", "202401101000", "News", SlotKind.CURRENT),),),
    )
    out = io.StringIO()
    render_snapshot(document, out, color=ChannelColor.BRIGHT_CYAN)
    assert out.getvalue() == "\033[96m1\033[0m News\n"


def test_full_day_slot_line():
    document = ScheduleDocument(
        channels=("1",),
        slot_lists=((slot("202401100930", "202401101000", "News"),),),
    )
    out = io.StringIO()
    render_full_day(document, out)
    assert out.getvalue().splitlines() == ["1", "09:30 ~ 10:00 News"]


def test_full_day_skips_current_slot_and_keeps_empty_headers():
    document = ScheduleDocument(
        channels=("1", "2"),
        slot_lists=(
            (slot("202401100930", "202401101000", "Now", SlotKind.CURRENT),),
            (),
        ),
    )
    out = io.StringIO()
    render_full_day(document, out, color=ChannelColor.BRIGHT_YELLOW)
    assert out.getvalue() == "\033[93m1\033[0m\n\033[93m2\033[0m\n"


def test_full_day_golden(today_html, full_day_golden):
    out = io.StringIO()
    render_full_day(parse_schedule(today_html), out)
    assert out.getvalue() == full_day_golden


def test_snapshot_golden(today_html):
    out = io.StringIO()
    render_snapshot(parse_schedule(today_html), out)
    assert out.getvalue() == (
        "1 NHK総合 News\n"
        "4 日テレ 現在放送していません\n"
        "8 フジテレビ 現在放送していません\n"
    )


def test_weekly_lines_are_uncolored_and_span_days():
    first = ScheduleDocument(
        channels=("BS1",),
        slot_lists=((
            slot("202401100930", "202401101000", "Now", SlotKind.CURRENT),
            slot("202401102330", "202401110030", "Late"),
        ),),
    )
    second = ScheduleDocument(
        channels=("BS1",),
        slot_lists=((slot("202401110500", "202401110600", "Early"),),),
    )
    out = io.StringIO()
    render_weekly([first, second], out)
    assert out.getvalue().splitlines() == [
        "BS1 Wed 23:30 ~ Thu 00:30 Late",
        "BS1 Thu 05:00 ~ Thu 06:00 Early",
    ]


def test_render_dispatch_ignores_color_for_weekly(today_html):
    document = parse_schedule(today_html)
    out = io.StringIO()
    render(ViewMode.WEEKLY, [document], out, color=ChannelColor.BRIGHT_YELLOW)
    assert "\033[" not in out.getvalue()
    assert out.getvalue().splitlines()[0] == "1 NHK総合 Wed 10:00 ~ Wed 11:30 Tom & Jerry"


def test_render_single_page_views_need_one_document(today_html):
    document = parse_schedule(today_html)
    with pytest.raises(ValueError):
        render(ViewMode.SNAPSHOT, [document, document], io.StringIO())


@pytest.mark.parametrize("mode", list(ViewMode))
def test_every_view_flushes(mode, today_html):
    sink = FlushCountingSink()
    render(mode, [parse_schedule(today_html)], sink)
    assert sink.flushes >= 1
    assert sink.getvalue()


def test_colorize_without_color():
    assert colorize("8", None) == "8"


class BrokenDocument:
    def __iter__(self):
        raise RuntimeError("page went away")


def test_failed_render_writes_nothing(today_html):
    sink = FlushCountingSink()
    with pytest.raises(RuntimeError):
        render_weekly([parse_schedule(today_html), BrokenDocument()], sink)
    assert sink.getvalue() == ""
    assert sink.flushes == 1
