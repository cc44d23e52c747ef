"""Route handlers for the sync job form page.

Every mutating route follows the same steps: resolve the page session, write
the posted values into the model, run one event handler and send back the
re-rendered fragment for htmx to swap.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from bs4 import Tag
from fasthtml.common import HttpHeader, NotStr, Pre, to_xml

from sync_form_core.config_manager import get_config_manager
from sync_form_core.form_model import FILTER_CONTAINER_ID, FormDocument
from sync_form_core.logger import get_logger
from sync_form_ui import handlers
from sync_form_ui.common.toasts import build_toast
from sync_form_ui.components.job_form import FIELD_WRAPPER_CLASS, STORAGE_TYPE_FIELD, render_job_form
from sync_form_ui.components.layout import base_layout
from sync_form_ui.form_sessions import form_sessions

logger = get_logger(__name__)

_EXPIRED_MESSAGE = "This form has expired: reload the page."


def _error_response(message: str):
    # The toast is out-of-band; keep the swap target untouched.
    return build_toast(message, "danger"), HttpHeader("HX-Reswap", "none")


def _form_items(form) -> list[tuple[str, Any]]:
    multi = getattr(form, "multi_items", None)
    if callable(multi):
        return list(multi())
    return list(form.items())


def _fragment(doc: FormDocument, element: Tag | None):
    html = doc.render(element)
    target = element.get("id") if element is not None else "document"
    logger.debug("Rendered fragment %s (%s chars)", target, len(html))
    return NotStr(html)


def _field_wrapper(element: Tag | None) -> Tag | None:
    if element is None:
        return None
    wrapper = element.find_parent(class_=FIELD_WRAPPER_CLASS)
    return wrapper if wrapper is not None else element


async def _with_session(request, token: str, action: Callable[[FormDocument, dict[str, Any]], Any]):
    """Run `action` on the session model after syncing the posted values."""
    session = form_sessions.get(token)
    if session is None:
        logger.info("Form event for unknown session %s", token)
        return _error_response(_EXPIRED_MESSAGE)

    form = await request.form()
    items = _form_items(form)
    try:
        with session.lock:
            handlers.apply_form_values(session.document, items)
            return action(session.document, dict(items))
    except Exception as exc:
        logger.exception("Form event failed for session %s", token)
        return _error_response(f"Could not update the form: {exc}")


def new_job_page(request):
    """Render a new job form in its own page session."""
    prefix = get_config_manager().get_job_prefix()
    session = form_sessions.create(lambda token: to_xml(render_job_form(token, prefix=prefix)))
    content = NotStr(session.document.render())
    if request.headers.get("HX-Request") == "true":
        return content
    return base_layout(title="New sync job", content=content, active_page="jobs")


async def add_filter_block(request, token: str):
    """Append a filter block and return the re-rendered filter container."""

    def _action(doc: FormDocument, _form: dict[str, Any]):
        handlers.add_filter(doc)
        return _fragment(doc, doc.filter_container(FILTER_CONTAINER_ID))

    return await _with_session(request, token, _action)


async def remove_filter_block(request, token: str):
    """Remove the posted `filter_id` block and return the filter container."""

    def _action(doc: FormDocument, form: dict[str, Any]):
        handlers.delete_filter(doc, str(form.get("filter_id") or ""))
        return _fragment(doc, doc.filter_container(FILTER_CONTAINER_ID))

    return await _with_session(request, token, _action)


async def move_filter_block(request, token: str):
    """Move the posted `filter_id` block to `position`."""

    def _action(doc: FormDocument, form: dict[str, Any]):
        try:
            position = int(form.get("position") or 0)
        except (TypeError, ValueError):
            position = 0
        handlers.move_filter(doc, str(form.get("filter_id") or ""), position)
        return _fragment(doc, doc.filter_container(FILTER_CONTAINER_ID))

    return await _with_session(request, token, _action)


async def change_plugin(request, token: str):
    """Switch the variant group named by the posted `property`."""

    def _action(doc: FormDocument, form: dict[str, Any]):
        group_key = str(form.get("property") or "")
        table = doc.variant_table(group_key)
        if table is None:
            return _error_response(f"Unknown plugin field: {group_key}")
        handlers.change_plugin(doc, group_key, handlers.plugin_selection(doc.soup, group_key))
        return _fragment(doc, _field_wrapper(table))

    return await _with_session(request, token, _action)


async def toggle_advanced_options(request, token: str):
    """Show or hide the advanced option rows of the posted `property` group."""

    def _action(doc: FormDocument, form: dict[str, Any]):
        group_key = str(form.get("property") or "")
        table = doc.variant_table(group_key)
        if table is None:
            return _error_response(f"Unknown plugin field: {group_key}")
        handlers.toggle_advanced_options(doc, group_key)
        return _fragment(doc, _field_wrapper(table))

    return await _with_session(request, token, _action)


async def change_config_storage(request, token: str):
    """Switch the configuration storage table to the posted storage type."""

    def _action(doc: FormDocument, form: dict[str, Any]):
        handlers.change_config_storage(doc, form.get(STORAGE_TYPE_FIELD))
        return _fragment(doc, _field_wrapper(doc.storage_table()))

    return await _with_session(request, token, _action)


async def preview_job(request, token: str):
    """Show the nested payload the form would submit right now."""

    def _action(doc: FormDocument, _form: dict[str, Any]):
        payload = doc.submission_payload()
        return Pre(json.dumps(payload, indent=2, ensure_ascii=False), id="job-preview", cls="mt-3 text-xs")

    return await _with_session(request, token, _action)
