"""Filter list manager.

Owns the ordered sequence of filter blocks inside one filter container:

    <div id="filter-container">
      <div class="filter-template" hidden> <div class="panel" id="job.filters[]"> ... </div> </div>
      <div class="active-filters"> <div class="panel" id="job.filters[0]"> ... </div> ... </div>
    </div>

A block's position in `.active-filters` is its index. Every index-bearing
name, id and secondary reference uses `.filters[<index>]` (zero-based) while
the human label uses `Filter <index + 1>`.
"""

from __future__ import annotations

import copy
import re

from bs4 import Tag

from .form_model import iter_controls, set_enabled
from .logger import get_logger

logger = get_logger(__name__)

TEMPLATE_SELECTOR = ".filter-template div.panel"
ACTIVE_SELECTOR = ".active-filters"
TITLE_SELECTOR = ".panel-title"

# Attributes carrying the block index or ordinal, rewritten on every renumber.
REWRITE_ATTRIBUTES = (
    "id",
    "name",
    "for",
    "onclick",
    "onchange",
    "hx-vals",
    "data-plugin",
    "data-target-id",
)

# The template is rendered with empty brackets, hence `*`.
BRACKET_INDEX_RE = re.compile(r"\.filters\[[0-9]*\]")
ORDINAL_RE = re.compile(r"\bFilter [0-9]+")


def _rewrite(value: str, index: int) -> str:
    value = BRACKET_INDEX_RE.sub(f".filters[{index}]", value)
    return ORDINAL_RE.sub(f"Filter {index + 1}", value)


def reindex_block(block: Tag, index: int) -> None:
    """Rewrite every index token of `block` so it reflects position `index`.

    Matching is done on the token pattern, never on the previous value, so
    calling this twice with the same index is a no-op.
    """
    for tag in [block, *block.find_all(True)]:
        for attr in REWRITE_ATTRIBUTES:
            value = tag.get(attr)
            if not isinstance(value, str):
                continue
            rewritten = _rewrite(value, index)
            if rewritten != value:
                tag[attr] = rewritten

    for title in block.select(TITLE_SELECTOR):
        for text in title.find_all(string=ORDINAL_RE):
            text.replace_with(ORDINAL_RE.sub(f"Filter {index + 1}", str(text)))


def _active_list(container: Tag) -> Tag | None:
    return container.select_one(ACTIVE_SELECTOR)


def blocks(container: Tag) -> list[Tag]:
    """Current filter blocks, in sequence order."""
    active = _active_list(container)
    if active is None:
        return []
    return active.find_all("div", class_="panel", recursive=False)


def find_block(container: Tag, block_id: str) -> Tag | None:
    for block in blocks(container):
        if block.get("id") == block_id:
            return block
    return None


def _in_variant_section(control: Tag, block: Tag) -> bool:
    for parent in control.parents:
        if parent is block:
            return False
        if parent.name == "tbody" and parent.has_attr("data-plugin"):
            return True
    return False


def append(container: Tag) -> Tag | None:
    """Clone the inert template into a new last block and renumber.

    The clone's own controls are enabled; controls inside plugin sections stay
    disabled until a variant is selected for the new block.
    """
    template = container.select_one(TEMPLATE_SELECTOR)
    active = _active_list(container)
    if template is None or active is None:
        logger.warning("Filter container %s has no template or active list", container.get("id"))
        return None

    block = copy.copy(template)
    for control in iter_controls(block):
        if not _in_variant_section(control, block):
            set_enabled(control, True)
    active.append(block)
    count = renumber(container)
    logger.debug("Appended filter block, container now holds %s block(s)", count)
    return block


def remove(container: Tag, block: Tag) -> bool:
    """Remove `block` from the sequence and renumber.

    Stale or foreign references are ignored and return False.
    """
    # Tags compare by content, so membership has to be checked by identity.
    if not any(candidate is block for candidate in blocks(container)):
        logger.debug("Ignoring removal of a block that is not in container %s", container.get("id"))
        return False
    block.extract()
    renumber(container)
    return True


def move(container: Tag, block: Tag, position: int) -> bool:
    """Move `block` to `position` and renumber once from the final order."""
    current = blocks(container)
    if not any(candidate is block for candidate in current):
        return False

    others = [candidate for candidate in current if candidate is not block]
    position = max(0, min(int(position), len(others)))
    block.extract()
    if position < len(others):
        others[position].insert_before(block)
    elif others:
        others[-1].insert_after(block)
    else:
        _active_list(container).append(block)
    renumber(container)
    return True


def renumber(container: Tag) -> int:
    """Reindex every block from its position in the final sequence order."""
    if _active_list(container) is None:
        logger.warning("Filter container %s has no active list to renumber", container.get("id"))
        return 0
    current = blocks(container)
    for index, block in enumerate(current):
        reindex_block(block, index)
    return len(current)
