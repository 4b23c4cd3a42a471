from pathlib import Path

import pytest

from tvnow.config import Settings, reset_settings


FIXTURES = Path(__file__).parent / "fixtures"


def _slot_html(kind: str, start: str | None, end: str | None, title: str | None) -> str:
    attrs = f'class="sc-{kind}"'
    if start is not None:
        attrs += f' s="{start}"'
    if end is not None:
        attrs += f' e="{end}"'
    inner = f'<p class="program_title">{title}</p>' if title is not None else "<p>no title</p>"
    return f"<li {attrs}>{inner}</li>"


def build_page(channels, *, extra_program_lists: int = 0) -> str:
    """Build a minimal schedule page.

    channels: list of (name, [(kind, start, end, title), ...])
    """
    markers = "".join(f'<li class="topmost"><p>{name}</p></li>' for name, _ in channels)
    lists = "".join(
        "<ul>" + "".join(_slot_html(*slot) for slot in slots) + "</ul>"
        for _, slots in channels
    )
    lists += "<ul></ul>" * extra_program_lists
    return (
        "<html><body>"
        f'<div id="ch_area"><ul>{markers}</ul></div>'
        f'<div id="program_area">{lists}</div>'
        "</body></html>"
    )


@pytest.fixture
def page_builder():
    return build_page


@pytest.fixture
def today_html() -> str:
    return (FIXTURES / "schedule_today.html").read_text(encoding="utf-8")


@pytest.fixture
def full_day_golden() -> str:
    return (FIXTURES / "full_day.golden.txt").read_text(encoding="utf-8")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        tv_area="tokyo",
        base_url="https://bangumi.test",
        request_timeout_sec=5.0,
        strict_parsing=False,
    )


@pytest.fixture
def fresh_settings():
    """Clear the cached settings around a test."""
    reset_settings()
    yield
    reset_settings()
