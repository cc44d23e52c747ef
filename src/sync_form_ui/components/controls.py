"""Table-row controls for plugin options.

Every control gets `id == name` so its label can point at it; both carry the
index-encoded field name and are renumbered together with the filter block.
"""

from fasthtml.common import Input, Label, Option, P, Select, Td, Textarea, Tr

from sync_form_core.plugin_catalog import PluginOption

_LABEL_CLASS = "block text-sm font-semibold text-slate-800 dark:text-slate-100"
_HELP_CLASS = "text-xs text-slate-500 dark:text-slate-400 mt-1"
_FIELD_CLASS = (
    "option-field w-full rounded-xl border px-3 py-2 text-slate-800 dark:text-slate-100 "
    "bg-white/90 dark:bg-slate-900/80 border-slate-300 dark:border-slate-700 outline-none transition"
)


def _val_or_default(val, default=""):
    return default if val is None else val


def _disabled(disabled: bool) -> dict:
    return {"disabled": True} if disabled else {}


def _row(label, key, control, help_text="", advanced=False):
    return Tr(
        Td(Label(label, fr=key, cls=_LABEL_CLASS), cls="align-top pr-4 py-2 w-1/3"),
        Td(control, P(help_text, cls=_HELP_CLASS) if help_text else "", cls="py-2"),
        cls="advanced" if advanced else None,
        hidden=advanced,
    )


def option_input(label, key, value, input_type="text", help_text="", disabled=False, advanced=False, **attrs):
    """Generic input option row."""
    control = Input(
        type=input_type,
        name=key,
        id=key,
        value=_val_or_default(value),
        cls=_FIELD_CLASS,
        **_disabled(disabled),
        **attrs,
    )
    return _row(label, key, control, help_text, advanced)


def option_number(label, key, value, help_text="", disabled=False, advanced=False):
    """Numeric input option row."""
    return option_input(label, key, value, input_type="number", help_text=help_text, disabled=disabled, advanced=advanced)


def option_toggle(label, key, value, help_text="", disabled=False, advanced=False):
    """Checkbox option row; the hidden input keeps the key present when unchecked."""
    control = Label(
        Input(type="hidden", name=key, value="false", **_disabled(disabled)),
        Input(
            type="checkbox",
            name=key,
            id=key,
            value="true",
            checked=bool(value),
            cls="option-checkbox h-5 w-5 rounded-md border border-slate-400",
            **_disabled(disabled),
        ),
        cls="inline-flex items-center gap-3 select-none cursor-pointer",
    )
    return _row(label, key, control, help_text, advanced)


def option_select(label, key, value, choices, help_text="", disabled=False, advanced=False):
    """Dropdown option row."""
    opts = [Option(choice, value=choice, selected=(choice == value)) for choice in choices]
    control = Select(*opts, name=key, id=key, cls=_FIELD_CLASS, **_disabled(disabled))
    return _row(label, key, control, help_text, advanced)


def option_textarea(label, key, value, help_text="", disabled=False, advanced=False):
    """Textarea option row."""
    control = Textarea(
        _val_or_default(value),
        name=key,
        id=key,
        cls=f"{_FIELD_CLASS} h-20",
        **_disabled(disabled),
    )
    return _row(label, key, control, help_text, advanced)


def option_row(option: PluginOption, key: str, value=None, disabled=False):
    """Render the row matching `option.kind`."""
    current = option.default if value is None else value
    common = {"help_text": option.help_text, "disabled": disabled, "advanced": option.advanced}
    if option.kind == "number":
        return option_number(option.label, key, current, **common)
    if option.kind == "toggle":
        return option_toggle(option.label, key, current, **common)
    if option.kind == "select":
        return option_select(option.label, key, current, option.choices, **common)
    if option.kind == "textarea":
        return option_textarea(option.label, key, current, **common)
    if option.kind == "password":
        return option_input(option.label, key, current, input_type="password", **common)
    return option_input(option.label, key, current, **common)
