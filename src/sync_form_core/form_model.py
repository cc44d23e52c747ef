"""Structural model of the server-rendered job form.

The form markup is parsed once into a BeautifulSoup tree which is then owned
by the page-lifetime form session. The filter list manager and the variant
switcher mutate that tree in place; this module holds the shared helpers for
reading and toggling controls and for computing what a browser would submit.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from typing import Any

from bs4 import BeautifulSoup, Tag

from .logger import get_logger

logger = get_logger(__name__)

CONTROL_TAGS = ["input", "select", "textarea", "button"]
FILTER_CONTAINER_ID = "filter-container"
STORAGE_TABLE_ID = "storage-configuration"

# Input types that never carry a value in a form submission.
_UNSUBMITTED_INPUT_TYPES = {"button", "submit", "reset", "image", "file"}
_CHECKABLE_INPUT_TYPES = {"checkbox", "radio"}

_KEY_TOKEN_RE = re.compile(r"\[([0-9]*)\]|[^.\[\]]+")


def iter_controls(root: Tag) -> Iterator[Tag]:
    """Yield every form control under `root` (including `root` itself)."""
    if root.name in CONTROL_TAGS:
        yield root
    yield from root.find_all(CONTROL_TAGS)


def is_enabled(control: Tag) -> bool:
    return not control.has_attr("disabled")


def set_enabled(root: Tag, enabled: bool) -> int:
    """Enable or disable every control under `root`; returns how many were touched."""
    count = 0
    for control in iter_controls(root):
        if enabled:
            if control.has_attr("disabled"):
                del control["disabled"]
        else:
            control["disabled"] = ""
        count += 1
    return count


def is_visible(element: Tag) -> bool:
    return not element.has_attr("hidden")


def set_visible(element: Tag, visible: bool) -> None:
    if visible:
        if element.has_attr("hidden"):
            del element["hidden"]
    else:
        element["hidden"] = ""


def _input_type(control: Tag) -> str:
    return str(control.get("type") or "text").strip().lower()


def _option_value(option: Tag) -> str:
    value = option.get("value")
    return option.get_text() if value is None else str(value)


def selected_options(select: Tag) -> list[Tag]:
    """Options a browser treats as selected (first option for a plain select)."""
    options = select.find_all("option")
    chosen = [opt for opt in options if opt.has_attr("selected")]
    if chosen or select.has_attr("multiple"):
        return chosen
    return options[:1]


def selected_value(select: Tag) -> str | None:
    chosen = selected_options(select)
    return _option_value(chosen[0]) if chosen else None


def inflate_fields(fields: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """Build a nested payload from submitted names.

    Dotted names become nested dicts and bracketed indices become list slots,
    so `job.filters[1].pluginClass` lands in `payload["job"]["filters"][1]`.
    Repeated names keep the last value.
    """
    payload: dict[str, Any] = {}
    for raw_key, value in fields:
        tokens: list[str | int] = []
        for match in _KEY_TOKEN_RE.finditer(raw_key or ""):
            index = match.group(1)
            if index is None:
                tokens.append(match.group(0))
            elif index:
                tokens.append(int(index))
        if not tokens or not isinstance(tokens[0], str):
            continue

        node: Any = payload
        for current, following in zip(tokens, tokens[1:]):
            fresh: Any = [] if isinstance(following, int) else {}
            node = _descend(node, current, fresh)
            if node is None:
                break
        else:
            _assign(node, tokens[-1], value)
    return payload


def _descend(node: Any, key: str | int, fresh: Any) -> Any:
    if isinstance(key, int):
        if not isinstance(node, list):
            return None
        while len(node) <= key:
            node.append(None)
        if not isinstance(node[key], type(fresh)):
            node[key] = fresh
        return node[key]
    if not isinstance(node, dict):
        return None
    if not isinstance(node.get(key), type(fresh)):
        node[key] = fresh
    return node[key]


def _assign(node: Any, key: str | int, value: Any) -> None:
    if isinstance(key, int) and isinstance(node, list):
        while len(node) <= key:
            node.append(None)
        node[key] = value
    elif isinstance(key, str) and isinstance(node, dict):
        node[key] = value


class FormDocument:
    """A parsed job form owned by one page session."""

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    @classmethod
    def parse(cls, markup: str) -> FormDocument:
        """Parse rendered markup and apply the page-load rules."""
        document = cls(BeautifulSoup(markup or "", "html.parser"))
        disabled = document.disable_marked_controls()
        if disabled:
            logger.debug("Disabled %s control(s) marked with the 'disabled' class", disabled)
        return document

    def disable_marked_controls(self) -> int:
        """Give the `disabled` attribute to every control carrying the `disabled` class."""
        count = 0
        for control in self.soup.select(".disabled"):
            if control.name in CONTROL_TAGS:
                control["disabled"] = ""
                count += 1
        return count

    def by_id(self, element_id: str) -> Tag | None:
        # Ids contain dots and brackets, so avoid CSS selectors here.
        return self.soup.find(id=element_id)

    def filter_container(self, container_id: str = FILTER_CONTAINER_ID) -> Tag | None:
        return self.by_id(container_id)

    def variant_table(self, group_key: str) -> Tag | None:
        return self.soup.find("table", attrs={"data-plugin": group_key})

    def storage_table(self) -> Tag | None:
        return self.soup.find("table", id=STORAGE_TABLE_ID)

    def controls_named(self, name: str) -> list[Tag]:
        return self.soup.find_all(CONTROL_TAGS, attrs={"name": name})

    def apply_values(self, items: Iterable[tuple[str, Any]]) -> int:
        """Write posted values back into enabled controls.

        Only names present in `items` are touched; controls sharing a name
        consume the posted values in document order. Returns the number of
        controls updated.
        """
        posted: dict[str, list[str]] = {}
        for name, value in items:
            posted.setdefault(str(name), []).append("" if value is None else str(value))

        updated = 0
        for name, values in posted.items():
            remaining = list(values)
            for control in self.controls_named(name):
                if not is_enabled(control):
                    continue
                if self._apply_control_value(control, values, remaining):
                    updated += 1
        return updated

    @staticmethod
    def _apply_control_value(control: Tag, values: list[str], remaining: list[str]) -> bool:
        if control.name == "select":
            for option in control.find_all("option"):
                if _option_value(option) in values:
                    option["selected"] = ""
                elif option.has_attr("selected"):
                    del option["selected"]
            return True
        if control.name == "textarea":
            if remaining:
                control.string = remaining.pop(0)
                return True
            return False
        if control.name != "input":
            return False

        input_type = _input_type(control)
        if input_type in _CHECKABLE_INPUT_TYPES:
            if str(control.get("value", "on")) in values:
                control["checked"] = ""
            elif control.has_attr("checked"):
                del control["checked"]
            return True
        if input_type in _UNSUBMITTED_INPUT_TYPES or not remaining:
            return False
        control["value"] = remaining.pop(0)
        return True

    def submitted_fields(self, root: Tag | None = None) -> list[tuple[str, str]]:
        """Return the `(name, value)` pairs a browser would submit.

        Disabled controls are never part of the submission.
        """
        fields: list[tuple[str, str]] = []
        for control in iter_controls(root or self.soup):
            name = control.get("name")
            if not name or not is_enabled(control) or control.name == "button":
                continue
            if control.name == "select":
                fields.extend((name, _option_value(opt)) for opt in selected_options(control))
            elif control.name == "textarea":
                fields.append((name, control.get_text()))
            else:
                input_type = _input_type(control)
                if input_type in _UNSUBMITTED_INPUT_TYPES:
                    continue
                if input_type in _CHECKABLE_INPUT_TYPES:
                    if control.has_attr("checked"):
                        fields.append((name, str(control.get("value", "on"))))
                    continue
                fields.append((name, str(control.get("value") or "")))
        return fields

    def submission_payload(self) -> dict[str, Any]:
        return inflate_fields(self.submitted_fields())

    def render(self, element: Tag | None = None) -> str:
        """Serialize the whole document or a single element back to HTML."""
        return str(element if element is not None else self.soup)
