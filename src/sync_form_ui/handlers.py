"""Event handlers binding UI events to the form model.

Plain functions: each takes the page's `FormDocument` and the event payload
explicitly, so any binding layer (htmx routes, tests, scripts) can call them.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from bs4 import Tag

from sync_form_core import filter_list
from sync_form_core.form_model import FILTER_CONTAINER_ID, FormDocument, selected_value
from sync_form_core.logger import get_logger
from sync_form_core.variant_switcher import select_storage_variant, select_variant, toggle_advanced

logger = get_logger(__name__)


def apply_form_values(doc: FormDocument, items: Iterable[tuple[str, Any]]) -> int:
    """Carry what the user typed into the model before it is mutated."""
    return doc.apply_values(items)


def _container(doc: FormDocument, container_id: str) -> Tag | None:
    container = doc.filter_container(container_id)
    if container is None:
        logger.warning("Filter container '%s' not found", container_id)
    return container


def plugin_selection(root: Tag, group_key: str) -> str | None:
    """Current value of the selector driving `group_key`."""
    table = root.find("table", attrs={"data-plugin": group_key})
    if table is None:
        return None
    wrapper = table.find_parent(class_="plugin-field")
    selector = wrapper.find("select") if wrapper is not None else None
    return selected_value(selector) if selector is not None else None


def add_filter(doc: FormDocument, container_id: str = FILTER_CONTAINER_ID) -> Tag | None:
    """Append a filter block and align its plugin sections with its selector."""
    container = _container(doc, container_id)
    if container is None:
        return None
    block = filter_list.append(container)
    if block is None:
        return None
    table = block.find("table", attrs={"data-plugin": True})
    if table is not None:
        group_key = table["data-plugin"]
        select_variant(block, group_key, plugin_selection(block, group_key))
    return block


def delete_filter(doc: FormDocument, filter_id: str, container_id: str = FILTER_CONTAINER_ID) -> bool:
    container = _container(doc, container_id)
    if container is None:
        return False
    block = filter_list.find_block(container, filter_id)
    if block is None:
        logger.debug("Filter block '%s' already gone", filter_id)
        return False
    return filter_list.remove(container, block)


def move_filter(doc: FormDocument, filter_id: str, position: int, container_id: str = FILTER_CONTAINER_ID) -> bool:
    container = _container(doc, container_id)
    if container is None:
        return False
    block = filter_list.find_block(container, filter_id)
    if block is None:
        return False
    return filter_list.move(container, block, position)


def change_plugin(doc: FormDocument, property_name: str, value: str | None) -> Tag | None:
    """Switch the variant group `property_name` to the plugin `value`."""
    return select_variant(doc.soup, property_name, value)


def change_config_storage(doc: FormDocument, storage_type: str | None) -> Tag | None:
    return select_storage_variant(doc.soup, storage_type)


def toggle_advanced_options(doc: FormDocument, property_name: str) -> bool | None:
    """Flip the advanced rows of the variant group `property_name`."""
    return toggle_advanced(doc.soup, property_name)
