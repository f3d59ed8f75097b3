"""Ordered-fallback CSS selector chains.

The site's class names are generated at build time and shift between
deploys, so every field is read through a chain: a primary, site-specific
selector followed by structurally similar fallbacks. The first selector
yielding non-empty (and accepted) text wins.

Example:
    PRICE = (
        Selector('p[data-testid="price"]'),
        Selector("p", accept=looks_like_price),
    )
    price_text = extract_first(card, PRICE)
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union

from bs4 import BeautifulSoup, Tag

HTML_PARSER = "html.parser"


def as_soup(html: Union[str, Tag, None]) -> Tag:
    """Parse HTML text, passing already-parsed elements through."""
    if isinstance(html, Tag):
        return html
    return BeautifulSoup(html or "", HTML_PARSER)


@dataclass(frozen=True)
class Selector:
    """One step of a fallback chain.

    Attributes:
        css: CSS selector evaluated relative to the node
        attr: Read this attribute instead of the element text
        accept: Guard for loose selectors; values it rejects are skipped
        index: Only consider the n-th match (positional layouts)
    """
    css: str
    attr: Optional[str] = None
    accept: Optional[Callable[[str], bool]] = None
    index: Optional[int] = None

    def values(self, node: Tag):
        """Yield the candidate values this selector produces under node."""
        matches = node.select(self.css)
        if self.index is not None:
            matches = matches[self.index:self.index + 1]
        for element in matches:
            if self.attr:
                raw = element.get(self.attr)
                if isinstance(raw, list):  # multi-valued attributes like class
                    raw = " ".join(raw)
            else:
                raw = element.get_text(" ", strip=True)
            value = (raw or "").strip()
            if value and (self.accept is None or self.accept(value)):
                yield value


SelectorChain = Sequence[Selector]


def extract_first(node: Optional[Tag], chain: SelectorChain) -> str:
    """Return the first non-empty value produced by the chain, or ""."""
    if node is None:
        return ""
    for selector in chain:
        for value in selector.values(node):
            return value
    return ""


def select_first(node: Optional[Tag], css_chain: Sequence[str]) -> Optional[Tag]:
    """Return the first element matched by any selector in css_chain."""
    if node is None:
        return None
    for css in css_chain:
        element = node.select_one(css)
        if element is not None:
            return element
    return None
