"""
Area table

Fixed mapping from area name to the provider's numeric area id. 'bs' and 'cs'
map to the satellite sentinel ids; everything else is a terrestrial region.
"""
from types import MappingProxyType

from tvnow.errors import UnknownAreaError
from tvnow.schemas import BS_AREA_ID, CS_AREA_ID, NetworkVariant


AREA_IDS = MappingProxyType({
    "cs": CS_AREA_ID,
    "bs": BS_AREA_ID,
    "sapporo": 1,
    "hakodate": 8,
    "asahikawa": 3,
    "obihiro": 9,
    "kushiro": 10,
    "kitami": 12,
    "muroran": 6,
    "aomori": 13,
    "iwate": 16,
    "miyagi": 19,
    "akita": 22,
    "yamagata": 25,
    "fukushima": 28,
    "tokyo": 42,
    "kanagawa": 45,
    "saitama": 37,
    "chiba": 40,
    "ibaragi": 31,
    "tochigi": 33,
    "gumma": 35,
    "yamanashi": 50,
    "nagano": 51,
    "niigata": 56,
    "aichi": 73,
    "ishikawa": 60,
    "shizuoka": 67,
    "fukui": 62,
    "toyama": 58,
    "mie": 76,
    "gifu": 64,
    "osaka": 84,
    "kyoto": 81,
    "hyogo": 85,
    "wakayama": 93,
    "nara": 91,
    "shiga": 79,
    "hiroshima": 101,
    "okayama": 98,
    "shimane": 96,
    "tottori": 95,
    "yamaguchi": 105,
    "ehime": 112,
    "kagawa": 110,
    "tokushima": 109,
    "kochi": 116,
    "fukuoka": 117,
    "kumamoto": 126,
    "nagasaki": 123,
    "kagoshima": 131,
    "miyazaki": 129,
    "oita": 127,
    "saga": 122,
    "okinawa": 134,
    "kitakyushu": 120,
})

SATELLITE_AREAS = frozenset({"bs", "cs"})


def area_names() -> list[str]:
    """All known area names, sorted"""
    return sorted(AREA_IDS)


def resolve_variant(name: str) -> NetworkVariant:
    """
    Look up an area name

    Raises:
        UnknownAreaError: If the name is not in the table
    """
    try:
        area_id = AREA_IDS[name.strip().lower()]
    except KeyError:
        raise UnknownAreaError(name) from None
    return NetworkVariant.from_area_id(area_id)
