from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

import requests
import soupsieve as sv
from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from .base import BasePageExtractor, PageStructureError
from .models import JokeRecord

SOURCE_NAME = "wocka.com"
DEFAULT_URL_TEMPLATE = "http://www.wocka.com/{id}.html"
CATEGORY_LABEL = "Category"


@dataclass(frozen=True)
class PageSelectors:
    """Compiled CSS selectors for a joke page.

    Build once with PageSelectors.compile() and share the instance between
    worker threads; compiled patterns are read-only."""

    content: sv.SoupSieve
    title: sv.SoupSieve
    details: sv.SoupSieve

    @classmethod
    def compile(
        cls,
        content: str = "div#content",
        title: str = "div#content h2",
        details: str = "td.contents",
    ) -> "PageSelectors":
        return cls(content=sv.compile(content), title=sv.compile(title), details=sv.compile(details))


def build_footer(category: str, page_id: int) -> str:
    return f"Source: {SOURCE_NAME}, Category: {category}, ID: {page_id}"


def _detail_tokens(document: BeautifulSoup, selectors: PageSelectors) -> List[str]:
    tokens: List[str] = []
    for cell in selectors.details.select(document):
        for text in cell.strings:
            text = text.strip()
            if text:
                tokens.append(text)
    return tokens


def _body_lines(container: Tag) -> List[str]:
    lines: List[str] = []
    for child in container.children:
        # Comments, CDATA and doctypes are strings too; only plain text counts.
        if not isinstance(child, NavigableString) or isinstance(child, PreformattedString):
            continue
        text = child.strip()
        if text:
            lines.append(text)
    return lines


def extract_fields(html: str, page_id: int, selectors: PageSelectors) -> JokeRecord:
    """Recover title, category and body from a joke page.

    Raises PageStructureError naming the first missing piece."""
    document = BeautifulSoup(html, "html.parser")

    heading = selectors.title.select_one(document)
    title = next((s.strip() for s in heading.strings if s.strip()), None) if heading is not None else None
    if not title:
        raise PageStructureError("missing title")

    tokens = _detail_tokens(document, selectors)
    try:
        label_index = tokens.index(CATEGORY_LABEL)
    except ValueError:
        raise PageStructureError("missing category label") from None
    if label_index + 1 >= len(tokens):
        raise PageStructureError("missing category value")
    category = tokens[label_index + 1]

    container = selectors.content.select_one(document)
    if container is None:
        raise PageStructureError("missing content")
    body = "\n".join(_body_lines(container))
    if not body:
        raise PageStructureError("empty body")

    return JokeRecord(title=title, body=body, footer=build_footer(category, page_id))


class WockaScraper(BasePageExtractor):
    """Fetches one wocka.com joke page per id and extracts a JokeRecord."""

    def __init__(
        self,
        selectors: PageSelectors,
        url_template: str = DEFAULT_URL_TEMPLATE,
        timeout: float = 20.0,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._selectors = selectors
        self._url_template = url_template
        self._timeout = timeout

    def page_url(self, page_id: int) -> str:
        return self._url_template.format(id=page_id)

    def fetch(self, page_id: int) -> Any:
        return requests.get(self.page_url(page_id), timeout=self._timeout)

    def parse(self, response: Any, page_id: int) -> JokeRecord:
        # Error statuses still carry a page; a missing joke shows up as absent structure.
        return extract_fields(response.text, page_id, self._selectors)
