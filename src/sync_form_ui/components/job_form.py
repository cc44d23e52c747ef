"""Sync job form markup.

Naming contract shared with the form model:
- field names are `<prefix>.filters[<index>]<suffix>`, blocks are `div.panel`
  with `id == <prefix>.filters[<index>]`;
- filter labels read `Filter <index + 1>`;
- variant tables are `table[data-plugin=<group key>]` with one
  `tbody[data-plugin=<simple class name>]` per plugin;
- the configuration storage table is `table#storage-configuration` with
  `tbody[data-storage-type=<type>]` sections.

The inert template block uses `.filters[]` and `Filter 0` and every one of its
controls is disabled.
"""

import html
import json

from fasthtml.common import H2, Button, Div, Fieldset, Form, Input, Label, Legend, NotStr, Option, Pre, Select, Span, Table, Tbody

from sync_form_core.form_model import FILTER_CONTAINER_ID, STORAGE_TABLE_ID
from sync_form_core.plugin_catalog import (
    CONFIG_STORAGE_TYPES,
    ROLE_SOURCE,
    ROLE_TARGET,
    PluginSpec,
    filter_plugins,
    find_plugin,
    storage_plugins,
)
from sync_form_core.variant_switcher import SHOW_ADVANCED_LABEL, TOGGLE_ADVANCED_CLASS

from .controls import option_row

FIELD_WRAPPER_CLASS = "plugin-field"
STORAGE_TYPE_FIELD = "config.storageType"
DEFAULT_SOURCE = "com.emc.ecs.sync.config.storage.FilesystemConfig"
DEFAULT_TARGET = "com.emc.ecs.sync.config.storage.AwsS3Config"

_SELECT_CLASS = (
    "plugin-selector rounded-xl border px-3 py-2 bg-white/90 dark:bg-slate-900/80 "
    "border-slate-300 dark:border-slate-700 text-slate-800 dark:text-slate-100"
)
_BUTTON_CLASS = "app-btn inline-flex items-center gap-2 rounded-xl px-3 py-2 text-sm font-semibold"


def _form_url(token: str, action: str) -> str:
    return f"/jobs/form/{token}/{action}"


def _hx(token: str, action: str, target: str, **vals) -> dict:
    attrs = {
        "hx_post": _form_url(token, action),
        "hx_target": target,
        "hx_swap": "outerHTML",
        "hx_include": "closest form",
    }
    if vals:
        attrs["hx_vals"] = json.dumps(vals)
    return attrs


def _disabled(disabled: bool) -> dict:
    return {"disabled": True} if disabled else {}


def filter_group_key(index: int | None) -> str:
    """Variant group key of a filter block (`Filter 0` for the template)."""
    return f"Filter {0 if index is None else index + 1}"


def filter_field_base(prefix: str, index: int | None) -> str:
    return f"{prefix}.filters[{'' if index is None else index}]"


def _variant_sections(plugins: list[PluginSpec], field_base: str, config_key: str, selected_id: str, disabled: bool):
    sections = []
    for plugin in plugins:
        active = not disabled and plugin.variant_id == selected_id
        rows = [
            option_row(option, f"{field_base}.{config_key}.{option.name}", disabled=not active)
            for option in plugin.options
        ]
        attrs = {"data-plugin": plugin.variant_id}
        if plugin.documentation:
            attrs["data-info"] = plugin.documentation
        sections.append(Tbody(*rows, hidden=not active, **attrs))
    return sections


def _plugin_selector(group_key, field_base, plugins, selected_id, token, disabled=False, placeholder=None):
    # Written raw so the empty value attribute survives rendering.
    options = [NotStr(f'<option value="">{html.escape(placeholder)}</option>')] if placeholder else []
    options += [Option(p.label, value=p.class_name, selected=(p.variant_id == selected_id)) for p in plugins]
    return Select(
        *options,
        name=f"{field_base}.pluginClass",
        id=f"{field_base}.pluginClass",
        cls=_SELECT_CLASS,
        hx_trigger="change",
        **_hx(token, "plugins", f"closest .{FIELD_WRAPPER_CLASS}", property=group_key),
        **_disabled(disabled),
    )


def _plugin_info(group_key: str, plugin: PluginSpec | None, disabled: bool = False):
    content = plugin.documentation if plugin is not None and not disabled else ""
    attrs = {"data-plugin": group_key}
    if content:
        attrs["data-content"] = content
    return Span("ⓘ", cls="plugin-info ml-2 cursor-help text-slate-500", hidden=not content, **attrs)


def _advanced_toggle(group_key: str, token: str, disabled: bool = False):
    """Button flipping the advanced option rows of `group_key`; rows start hidden."""
    return Button(
        SHOW_ADVANCED_LABEL,
        type="button",
        cls=f"{TOGGLE_ADVANCED_CLASS} ml-3 text-xs underline text-slate-500",
        **_hx(token, "advanced", f"closest .{FIELD_WRAPPER_CLASS}", property=group_key),
        **{"data-plugin": group_key},
        **_disabled(disabled),
    )


def plugin_field(label, group_key, field_base, plugins, selected, token):
    """Source/target plugin chooser with its variant table."""
    plugin = find_plugin(selected)
    selected_id = plugin.variant_id if plugin is not None else ""
    return Div(
        Div(
            Label(label, fr=f"{field_base}.pluginClass", cls="text-sm font-semibold mr-3"),
            _plugin_selector(group_key, field_base, plugins, selected_id, token),
            _plugin_info(group_key, plugin),
            _advanced_toggle(group_key, token),
            cls="flex items-center mb-3",
        ),
        Table(
            *_variant_sections(plugins, field_base, "pluginConfig", selected_id, disabled=False),
            cls="plugin-table w-full",
            **{"data-plugin": group_key},
        ),
        cls=FIELD_WRAPPER_CLASS,
        id=f"{group_key}-field",
    )


def filter_block(prefix: str, index: int | None, token: str, selected: str | None = None):
    """One filter panel; `index=None` renders the inert template."""
    template = index is None
    field_base = filter_field_base(prefix, index)
    group_key = filter_group_key(index)
    plugins = filter_plugins()
    plugin = None if template else find_plugin(selected)
    selected_id = plugin.variant_id if plugin is not None else ""

    return Div(
        Div(
            Span(group_key, cls="filter-label font-semibold mr-3"),
            _plugin_selector(
                group_key,
                field_base,
                plugins,
                selected_id,
                token,
                disabled=template,
                placeholder="-- select a filter --",
            ),
            _plugin_info(group_key, plugin, disabled=template),
            _advanced_toggle(group_key, token, disabled=template),
            Button(
                "Remove",
                type="button",
                cls=f"{_BUTTON_CLASS} ml-auto app-btn-danger",
                **_hx(token, "filters/remove", f"#{FILTER_CONTAINER_ID}", filter_id=field_base),
                **_disabled(template),
            ),
            cls="panel-title flex items-center",
        ),
        Div(
            Table(
                *_variant_sections(plugins, field_base, "filterConfig", selected_id, disabled=template),
                cls="plugin-table w-full",
                **{"data-plugin": group_key},
            ),
            cls="panel-body mt-3",
        ),
        cls=f"panel {FIELD_WRAPPER_CLASS} rounded-2xl border border-slate-200 dark:border-slate-700 p-4 mb-3",
        id=field_base,
    )


def filter_container(prefix: str, token: str, filters=None):
    """Filter list: inert template, active blocks and the add button."""
    return Div(
        Div(filter_block(prefix, None, token), cls="filter-template", hidden=True),
        Div(
            *[filter_block(prefix, i, token, selected) for i, selected in enumerate(filters or [])],
            cls="active-filters",
        ),
        Button(
            "Add filter",
            type="button",
            cls=f"{_BUTTON_CLASS} app-btn-primary",
            **_hx(token, "filters/add", f"#{FILTER_CONTAINER_ID}"),
        ),
        id=FILTER_CONTAINER_ID,
        cls="filter-container",
    )


def storage_configuration_field(token: str, selected: str = "local"):
    """Radio chooser for where the UI stores its configuration."""
    radios = [
        Label(
            Input(
                type="radio",
                name=STORAGE_TYPE_FIELD,
                value=spec.storage_type,
                checked=(spec.storage_type == selected),
                hx_trigger="change",
                **_hx(token, "storage", f"closest .{FIELD_WRAPPER_CLASS}"),
            ),
            Span(spec.label),
            cls="inline-flex items-center gap-2 mr-4",
        )
        for spec in CONFIG_STORAGE_TYPES
    ]
    sections = []
    for spec in CONFIG_STORAGE_TYPES:
        active = spec.storage_type == selected
        rows = [
            option_row(option, f"config.{spec.storage_type}.{option.name}", disabled=not active)
            for option in spec.options
        ]
        sections.append(Tbody(*rows, hidden=not active, **{"data-storage-type": spec.storage_type}))
    return Div(
        Div(*radios, cls="mb-3"),
        Table(*sections, id=STORAGE_TABLE_ID, cls="w-full"),
        cls=FIELD_WRAPPER_CLASS,
        id=f"{STORAGE_TABLE_ID}-field",
    )


def render_job_form(token: str, prefix: str = "job", job: dict | None = None) -> Form:
    """Render the complete job form for the session `token`.

    `job` may pre-select `source`, `target`, `filters` (list of class names)
    and `storage_type`.
    """
    job = job or {}
    return Form(
        H2("Sync job", cls="text-2xl font-bold mb-6"),
        Fieldset(
            Legend("Source", cls="font-semibold"),
            plugin_field("Plugin", "source", f"{prefix}.source", storage_plugins(ROLE_SOURCE), job.get("source", DEFAULT_SOURCE), token),
            cls="mb-6",
        ),
        Fieldset(
            Legend("Target", cls="font-semibold"),
            plugin_field("Plugin", "target", f"{prefix}.target", storage_plugins(ROLE_TARGET), job.get("target", DEFAULT_TARGET), token),
            cls="mb-6",
        ),
        Fieldset(
            Legend("Filters", cls="font-semibold"),
            filter_container(prefix, token, job.get("filters")),
            cls="mb-6",
        ),
        Fieldset(
            Legend("Configuration storage", cls="font-semibold"),
            storage_configuration_field(token, job.get("storage_type", "local")),
            cls="mb-6",
        ),
        Div(
            Button(
                "Preview",
                type="button",
                cls=f"{_BUTTON_CLASS} app-btn-neutral",
                hx_post=_form_url(token, "preview"),
                hx_target="#job-preview",
                hx_swap="outerHTML",
                hx_include="closest form",
            ),
            Pre(id="job-preview", cls="mt-3 text-xs"),
        ),
        id="job-form",
        cls="sync-job-form",
        **{"data-form-token": token},
    )
