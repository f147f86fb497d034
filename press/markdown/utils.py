"""Helpers for reading back rendered HTML."""

from __future__ import annotations

from bs4 import BeautifulSoup

_HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


def extract_title(html: str) -> str:
    """
    Return the plain text of the first heading in the rendered HTML.

    Marker links only hold an icon, so they add nothing to the text. Returns
    an empty string when the document has no heading.
    """
    soup = BeautifulSoup(html, "html.parser")
    heading = soup.find(_HEADING_TAGS)
    if heading is None:
        return ""

    for marker in heading.find_all("a", class_="reference"):
        marker.decompose()
    return heading.get_text(separator=" ", strip=True)


def collect_anchors(html: str) -> list[str]:
    """Return every element id in document order."""
    soup = BeautifulSoup(html, "html.parser")
    return [element["id"] for element in soup.find_all(id=True)]
