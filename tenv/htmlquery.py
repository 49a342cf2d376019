"""Extract values from HTML listing pages."""

from __future__ import annotations

from typing import Callable

from bs4 import BeautifulSoup
from bs4.element import Tag

from tenv.download import RequestOption, fetch_bytes, no_check, no_display

Extractor = Callable[[Tag], str]

_TEXT_PART = "#text"


def request(call_url: str, selector: str, extractor: Extractor, *args: RequestOption) -> list[str]:
    """Download call_url and extract values from the elements matching selector."""
    data = fetch_bytes(call_url, no_display, no_check, *args)
    return extract_list(data, selector, extractor)


def selection_text_extractor(element: Tag) -> str:
    """Return the stripped text of element."""
    return element.get_text().strip()


def selection_extractor(part: str) -> Extractor:
    """Return an extractor for the attribute part, or the text for "#text"."""
    if part == _TEXT_PART:
        return selection_text_extractor

    def extract_attr(element: Tag) -> str:
        value = element.get(part)
        if value is None:
            return ""
        if isinstance(value, list):
            value = " ".join(value)
        return value.strip()

    return extract_attr


def extract_list(data: bytes, selector: str, extractor: Extractor) -> list[str]:
    """Return the non-empty extracted values of the elements matching selector."""
    document = BeautifulSoup(data, "html.parser")
    extracted = (extractor(element) for element in document.select(selector))
    return [value for value in extracted if value]