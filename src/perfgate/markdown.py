from __future__ import annotations

import re
from dataclasses import dataclass

_LINK = re.compile(r"\[([^\]]+?)\]\((https?://.*?)\)")


@dataclass(frozen=True)
class MarkdownSegment:
    text: str
    is_link: bool
    link_href: str | None = None


def split_markdown_link(text: str) -> list[MarkdownSegment]:
    """Split *text* into plain and ``[text](http...)`` link segments."""
    parts = _LINK.split(text)
    segments: list[MarkdownSegment] = []
    # re.split with two groups yields (preamble, link text, href) triples
    for index in range(0, len(parts), 3):
        preamble = parts[index]
        if preamble:
            segments.append(MarkdownSegment(text=preamble, is_link=False))
        if index + 2 < len(parts):
            link_text, link_href = parts[index + 1], parts[index + 2]
            if link_text and link_href:
                segments.append(
                    MarkdownSegment(text=link_text, is_link=True, link_href=link_href)
                )
    return segments
