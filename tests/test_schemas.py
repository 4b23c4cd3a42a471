import pytest
from pydantic import ValidationError

from tvnow.areas import AREA_IDS, area_names, resolve_variant
from tvnow.config import Settings, get_settings, reset_settings
from tvnow.errors import UnknownAreaError
from tvnow.schemas import ChannelColor, NetworkKind, NetworkVariant


def test_terrestrial_urls():
    variant = NetworkVariant(kind=NetworkKind.TERRESTRIAL, region_id=84)
    assert variant.url("https://bangumi.org") == "https://bangumi.org/epg/td?ggm_group_id=84"
    assert variant.url("https://bangumi.org/", "20240110") == (
        "https://bangumi.org/epg/td?broad_cast_date=20240110&ggm_group_id=84"
    )
    assert variant.color is ChannelColor.BRIGHT_YELLOW


@pytest.mark.parametrize("kind", [NetworkKind.BS, NetworkKind.CS])
def test_satellite_urls(kind):
    variant = NetworkVariant(kind=kind)
    assert variant.url("https://bangumi.org") == f"https://bangumi.org/epg/{kind.value}"
    assert variant.url("https://bangumi.org", "20240110") == (
        f"https://bangumi.org/epg/{kind.value}?broad_cast_date=20240110"
    )
    assert variant.color is ChannelColor.BRIGHT_CYAN


@pytest.mark.parametrize("region_id", [None, 0, 255, 300])
def test_terrestrial_region_must_be_valid(region_id):
    with pytest.raises(ValidationError):
        NetworkVariant(kind=NetworkKind.TERRESTRIAL, region_id=region_id)


def test_satellite_takes_no_region():
    with pytest.raises(ValidationError):
        NetworkVariant(kind=NetworkKind.BS, region_id=42)


def test_from_area_id_sentinels():
    assert NetworkVariant.from_area_id(0).kind is NetworkKind.BS
    assert NetworkVariant.from_area_id(255).kind is NetworkKind.CS
    assert NetworkVariant.from_area_id(42) == NetworkVariant(kind=NetworkKind.TERRESTRIAL, region_id=42)


def test_resolve_variant():
    assert resolve_variant("tokyo").region_id == 42
    assert resolve_variant(" Osaka ").region_id == 84
    assert resolve_variant("bs").kind is NetworkKind.BS


def test_resolve_unknown_area():
    with pytest.raises(UnknownAreaError, match="^hogehoge is not in the area$"):
        resolve_variant("hogehoge")


def test_area_table_is_read_only_and_sorted_listing():
    with pytest.raises(TypeError):
        AREA_IDS["atlantis"] = 7
    names = area_names()
    assert names == sorted(names)
    assert {"bs", "cs", "tokyo"} <= set(names)


def test_settings_validation():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, base_url="ftp://bangumi.org")
    with pytest.raises(ValidationError):
        Settings(_env_file=None, request_timeout_sec=0)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="LOUD")


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("TV_AREA", "Osaka")
    monkeypatch.setenv("STRICT_PARSING", "true")
    settings = Settings(_env_file=None)
    assert settings.tv_area == "osaka"
    assert settings.strict_parsing is True


def test_get_settings_is_cached_until_reset(monkeypatch, fresh_settings):
    monkeypatch.setenv("TV_AREA", "kyoto")
    first = get_settings()
    monkeypatch.setenv("TV_AREA", "nara")

    assert get_settings() is first
    assert first.tv_area == "kyoto"

    reset_settings()
    assert get_settings().tv_area == "nara"
