"""Helpers shared by the DOM snapshot parsers."""
import re

from bs4 import BeautifulSoup
from bs4.element import Tag

_WHITESPACE = re.compile(r"\s+")


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def node_text(node: Tag) -> str:
    """Visible text of a node with whitespace collapsed, close to innerText."""
    return _WHITESPACE.sub(" ", node.get_text(" ")).strip()


def first_child_element(node: Tag):
    """First child that is an element (text nodes skipped), or None."""
    return next((child for child in node.children if isinstance(child, Tag)), None)
