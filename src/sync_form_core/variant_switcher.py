"""Variant section switcher for polymorphic form fields.

A variant group is a `table[data-plugin=<group key>]` whose `tbody` children
are the variant sections, each keyed by `data-plugin=<variant id>`. The
storage configuration group is the fixed `table#storage-configuration` with
sections keyed by `data-storage-type`.

At most one section per group is visible and enabled; every control of the
other sections is disabled so it never reaches the submitted form.
"""

from __future__ import annotations

from bs4 import Tag

from .form_model import STORAGE_TABLE_ID, is_visible, set_enabled, set_visible
from .logger import get_logger

logger = get_logger(__name__)

INFO_CLASS = "plugin-info"
ADVANCED_CLASS = "advanced"
TOGGLE_ADVANCED_CLASS = "toggle-advanced"
SHOW_ADVANCED_LABEL = "show advanced options"
HIDE_ADVANCED_LABEL = "hide advanced options"


def normalize_variant_id(raw: str | None) -> str:
    """Return the last `.`-delimited component of a selection value.

    Selectors carry fully-qualified config class names
    (`com.emc.ecs.sync.config.storage.AwsS3Config`) while sections are keyed
    by the simple name. An id that itself contains a dot cannot be told apart
    from a qualified name and is truncated too.
    """
    text = str(raw or "").strip()
    return text.rsplit(".", 1)[-1]


def _sections(table: Tag) -> list[Tag]:
    return table.find_all("tbody", recursive=False)


def _switch(table: Tag, key_attr: str, variant_id: str) -> Tag | None:
    sections = _sections(table)
    for section in sections:
        set_visible(section, False)
        set_enabled(section, False)

    selected = None
    if variant_id:
        selected = next((s for s in sections if s.get(key_attr) == variant_id), None)
    if selected is not None:
        set_enabled(selected, True)
        set_visible(selected, True)
    return selected


def _update_info(root: Tag, group_key: str, selected: Tag | None) -> None:
    info = root.find("span", class_=INFO_CLASS, attrs={"data-plugin": group_key})
    if info is None:
        return
    payload = selected.get("data-info") if selected is not None else None
    if payload:
        info["data-content"] = payload
        set_visible(info, True)
    else:
        if info.has_attr("data-content"):
            del info["data-content"]
        set_visible(info, False)


def select_variant(root: Tag, group_key: str, variant_id: str | None) -> Tag | None:
    """Show and enable the section of `group_key` matching `variant_id`.

    Every other section is hidden and disabled. Returns the selected section,
    or None when no section matches (nothing in the group stays submittable).
    """
    table = root.find("table", attrs={"data-plugin": group_key})
    if table is None:
        logger.warning("No variant table for group '%s'", group_key)
        return None

    resolved = normalize_variant_id(variant_id)
    selected = _switch(table, "data-plugin", resolved)
    _update_info(root, group_key, selected)
    if selected is None and resolved:
        logger.debug("Group '%s' has no section for variant '%s'", group_key, resolved)
    return selected


def select_storage_variant(root: Tag, storage_type: str | None) -> Tag | None:
    """Same contract as `select_variant`, bound to the storage configuration table."""
    table = root.find("table", id=STORAGE_TABLE_ID)
    if table is None:
        logger.warning("No #%s table in the form", STORAGE_TABLE_ID)
        return None

    resolved = normalize_variant_id(storage_type)
    selected = _switch(table, "data-storage-type", resolved)
    if selected is None and resolved:
        logger.debug("Unknown storage type '%s'", resolved)
    return selected


def active_variant(root: Tag, group_key: str) -> str | None:
    """Variant id of the visible section of `group_key`, if any."""
    table = root.find("table", attrs={"data-plugin": group_key})
    if table is None:
        return None
    for section in _sections(table):
        if is_visible(section):
            return section.get("data-plugin")
    return None


def toggle_advanced(root: Tag, group_key: str) -> bool | None:
    """Show or hide the advanced option rows of every section of `group_key`.

    The toggle control's label holds the current state. Returns whether the
    rows are shown afterwards, or None when the group is missing. Hidden rows
    keep their controls enabled, so their values are still submitted.
    """
    table = root.find("table", attrs={"data-plugin": group_key})
    if table is None:
        logger.warning("No variant table for group '%s'", group_key)
        return None

    toggle = root.find(class_=TOGGLE_ADVANCED_CLASS, attrs={"data-plugin": group_key})
    showing = toggle is not None and toggle.get_text().strip() == HIDE_ADVANCED_LABEL
    for row in table.find_all("tr", class_=ADVANCED_CLASS):
        set_visible(row, not showing)
    if toggle is not None:
        toggle.string = SHOW_ADVANCED_LABEL if showing else HIDE_ADVANCED_LABEL
    return not showing
