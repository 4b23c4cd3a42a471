import logging
import re

from lxml import etree  # type: ignore
from lxml import html as lxml_html  # type: ignore

from tvnow.errors import ParseStructureError
from tvnow.services.guide_types import ProgramSlot, ScheduleDocument, SlotKind
from tvnow.utils.timezone import parse_slot_timestamp

logger = logging.getLogger(__name__)

START_ATTR = "s"
END_ATTR = "e"


def _has_class(name: str) -> str:
    """XPath predicate matching one class token, like CSS '.name'"""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


CHANNEL_AREA_XPATH = "//div[@id='ch_area']"
CHANNEL_XPATH = f".//ul//li[{_has_class('topmost')}]//p"
PROGRAM_AREA_XPATH = "//div[@id='program_area']"
PROGRAM_LIST_XPATH = ".//ul"
SLOT_XPATH = f".//li[{_has_class('sc-current')} or {_has_class('sc-future')}]"
TITLE_XPATH = f".//p[{_has_class('program_title')}]"

# Bytes input so pages that open with an XML encoding declaration still parse
_HTML_PARSER = lxml_html.HTMLParser(encoding="utf-8")

# ASCII whitespace only; full-width spaces are part of Japanese titles
_WHITESPACE = re.compile(r"[ \t\r\n\f\v]+")


def parse_schedule(raw_markup: str, *, strict: bool = False) -> ScheduleDocument:
    """
    Parse one schedule page into channels and their slot lists

    Args:
        raw_markup: HTML of a provider schedule page
        strict: Raise on a malformed slot instead of skipping it

    Returns:
        ScheduleDocument with channels and slot lists in document order

    Raises:
        ParseStructureError: If the channel or program region is missing, or the
            channel and program list counts differ; in strict mode also for a
            malformed slot
        InvalidTimestamp: In strict mode, for a bad start/end attribute
    """
    logger.debug("Parsing schedule page (%s chars, strict=%s)", len(raw_markup), strict)

    try:
        root = lxml_html.document_fromstring(raw_markup.encode("utf-8"), parser=_HTML_PARSER)
    except (etree.LxmlError, ValueError) as e:
        raise ParseStructureError(f"Schedule page is not parseable HTML: {e}") from e

    channels = _parse_channels(root)
    logger.debug("  Found %s channels", len(channels))

    slot_lists = _parse_program_lists(root, strict)
    logger.debug("  Found %s program lists", len(slot_lists))

    if len(channels) != len(slot_lists):
        logger.error(
            "Channel list and program area are misaligned: %s channels, %s program lists",
            len(channels),
            len(slot_lists),
        )

    # ScheduleDocument rejects a count mismatch
    document = ScheduleDocument(channels=tuple(channels), slot_lists=tuple(slot_lists))
    logger.info(
        "Schedule parsing complete: %s channels, %s slots",
        len(channels),
        sum(len(slots) for slots in slot_lists),
    )
    return document


def _find_region(root: etree._Element, xpath: str) -> etree._Element:
    regions = root.xpath(xpath)
    if not regions:
        raise ParseStructureError(f"Schedule page has no region matching {xpath}")
    return regions[0]


def _parse_channels(root: etree._Element) -> list[str]:
    """Extract channel names from the channel list region"""
    area = _find_region(root, CHANNEL_AREA_XPATH)
    return [_element_text(marker) for marker in area.xpath(CHANNEL_XPATH)]


def _parse_program_lists(root: etree._Element, strict: bool) -> list[tuple[ProgramSlot, ...]]:
    """Extract one slot list per program column"""
    area = _find_region(root, PROGRAM_AREA_XPATH)
    slot_lists = []

    for index, program_list in enumerate(area.xpath(PROGRAM_LIST_XPATH)):
        slots = []
        for element in program_list.xpath(SLOT_XPATH):
            try:
                slots.append(_parse_single_slot(element))
            except ParseStructureError as e:
                if strict:
                    raise
                logger.warning("Skipping malformed slot in program list %s: %s", index, e)
        slot_lists.append(tuple(slots))

    return slot_lists


def _parse_single_slot(element: etree._Element) -> ProgramSlot:
    """Parse a single slot element"""
    start_str = element.get(START_ATTR)
    end_str = element.get(END_ATTR)
    if start_str is None or end_str is None:
        raise ParseStructureError(
            f"Slot element is missing its '{START_ATTR}' or '{END_ATTR}' attribute"
        )

    title_elements = element.xpath(TITLE_XPATH)
    if not title_elements:
        raise ParseStructureError(f"Slot starting at {start_str} has no program title")

    return ProgramSlot(
        start=parse_slot_timestamp(start_str),
        end=parse_slot_timestamp(end_str),
        title=_element_text(title_elements[0]),
        kind=_slot_kind(element),
    )


def _slot_kind(element: etree._Element) -> SlotKind:
    classes = (element.get("class") or "").split()
    if "sc-current" in classes:
        return SlotKind.CURRENT
    return SlotKind.FUTURE


def _element_text(element: etree._Element) -> str:
    """Element text on a single line: <br> becomes a space, whitespace runs collapse."""
    for br in element.iter("br"):
        br.tail = " " + (br.tail or "")
    return _WHITESPACE.sub(" ", element.text_content()).strip()
