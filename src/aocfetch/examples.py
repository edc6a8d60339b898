"""Extract the worked example from a puzzle page.

The page is flattened into ``Node`` descriptors (every element inside
``article.day-desc``, in document order) and folded through ``step``:

- a ``<p>`` that introduces an example arms the scan,
- the next ``<pre><code>`` block is the example data for the current part,
- every ``<code><em>`` is a candidate answer for the current part (last wins),
- ``<h2 id="part2">`` switches to part 2 and re-arms the heuristic.
"""

from __future__ import annotations

import copy
import html as html_lib
import re
from dataclasses import dataclass, replace
from functools import reduce

from bs4 import BeautifulSoup, Tag

from .models import Example

ARTICLE_SELECTOR = "article.day-desc"

_EXAMPLE_WORD = re.compile(r"\bexample\b")
# "the example above", "this example", "again" refer back to an earlier block.
_BACK_REFERENCE = re.compile(r"\b(above|this|again)\b")


@dataclass(frozen=True)
class Node:
    tag: str
    element_id: str
    text: str
    only_child_tag: str | None = None
    only_child_html: str | None = None


@dataclass(frozen=True)
class ScanState:
    saw_phrase: bool = False
    captured: bool = False
    in_part2: bool = False
    data: str | None = None
    part2_data: str | None = None
    part1_answer: str | None = None
    part2_answer: str | None = None

    def to_example(self) -> Example | None:
        if self.data is None:
            return None
        return Example(
            data=self.data,
            part2_data=self.part2_data,
            part1_answer=self.part1_answer,
            part2_answer=self.part2_answer,
        )


def _attr_text(val: object) -> str:
    if isinstance(val, list):
        if not val:
            return ""
        return str(val[0])
    return str(val or "")


def _only_child(el: Tag) -> Tag | None:
    if len(el.contents) != 1:
        return None
    child = el.contents[0]
    return child if isinstance(child, Tag) else None


def _inner_html(child: Tag) -> str:
    if child.name.lower() != "code":
        return child.decode_contents()
    # Work on a copy; the flattened element list still references the original.
    block = copy.copy(child)
    for em in block.find_all("em"):
        em.unwrap()
    return block.decode_contents()


def _to_node(el: Tag) -> Node:
    child = _only_child(el)
    return Node(
        tag=el.name.lower(),
        element_id=_attr_text(el.get("id")),
        text=el.get_text(),
        only_child_tag=child.name.lower() if child is not None else None,
        only_child_html=_inner_html(child) if child is not None else None,
    )


def page_nodes(html: str) -> list[Node] | None:
    """Flatten the narrative articles, or ``None`` if the page has none."""
    soup = BeautifulSoup(html, "html.parser")
    if soup.select_one(ARTICLE_SELECTOR) is None:
        return None
    return [_to_node(el) for el in soup.select(f"{ARTICLE_SELECTOR} *")]


def introduces_example(text: str) -> bool:
    lowered = text.lower()
    if "for example" in lowered:
        return True
    return bool(_EXAMPLE_WORD.search(lowered)) and not _BACK_REFERENCE.search(
        lowered
    )


def clean_block(inner_html: str) -> str:
    return html_lib.unescape(inner_html)


def step(state: ScanState, node: Node) -> ScanState:
    if node.tag == "p":
        if not state.saw_phrase and introduces_example(node.text):
            return replace(state, saw_phrase=True)
        return state

    if node.tag == "pre":
        if (
            state.saw_phrase
            and not state.captured
            and node.only_child_tag == "code"
            and node.only_child_html is not None
        ):
            block = clean_block(node.only_child_html)
            if state.in_part2:
                return replace(state, captured=True, part2_data=block)
            return replace(state, captured=True, data=block)
        return state

    if node.tag == "code":
        if node.only_child_tag == "em" and node.only_child_html is not None:
            answer = html_lib.unescape(node.only_child_html)
            if state.in_part2:
                return replace(state, part2_answer=answer)
            return replace(state, part1_answer=answer)
        return state

    if node.tag == "h2" and node.element_id.lower() == "part2":
        return replace(state, in_part2=True, saw_phrase=False, captured=False)

    return state


def scan(nodes: list[Node]) -> ScanState:
    return reduce(step, nodes, ScanState())


def parse_example(html: str) -> Example | None:
    nodes = page_nodes(html)
    if nodes is None:
        return None
    return scan(nodes).to_example()
