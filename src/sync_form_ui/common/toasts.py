"""Shared utilities for rendering toast notifications in the FastHTML UI."""

from __future__ import annotations

from fasthtml.common import Button, Div, Span

from sync_form_core.config_manager import get_config_manager

_ICONS = {"success": "✅", "info": "ℹ️", "danger": "⚠️"}
_MIN_TIMEOUT_MS = 1000
_MAX_TIMEOUT_MS = 15000

_TONE_CLASSES = {
    "success": "bg-emerald-600/95 border-emerald-300/60",
    "info": "bg-sky-600/95 border-sky-300/60",
    "danger": "bg-red-600/95 border-red-300/60",
}

TOAST_HOLDER_ID = "app-toast-holder"


def get_setting(path: str, default=None):
    return get_config_manager().get_setting(path, default)


def _coerce_timeout_ms(duration_ms: int | None) -> int:
    """Return a bounded timeout used by the toast dismiss script."""
    configured = duration_ms if duration_ms is not None else get_setting("ui.toast_duration", 3000)
    try:
        timeout = int(configured)
    except (TypeError, ValueError):
        timeout = 3000
    return max(_MIN_TIMEOUT_MS, min(timeout, _MAX_TIMEOUT_MS))


def build_toast(message: str, tone: str = "info", duration_ms: int | None = None) -> Div:
    """Return an out-of-band toast fragment appended to the global holder."""
    normalized_tone = tone if tone in _TONE_CLASSES else "info"
    timeout_ms = _coerce_timeout_ms(duration_ms)
    icon = _ICONS.get(normalized_tone, "ℹ️")
    safe_message = (message or "").strip() or "Done."
    toast_card = Div(
        Span(icon, cls="text-lg leading-none mt-0.5"),
        Div(safe_message, cls="text-sm font-semibold leading-snug text-left"),
        Button(
            "✕",
            type="button",
            cls="ml-3 inline-flex h-6 w-6 items-center justify-center rounded-full hover:bg-white/20",
            aria_label="Dismiss notification",
            **{"data-toast-close": "true"},
        ),
        role="status",
        aria_live="polite",
        cls=(
            "pointer-events-auto app-toast-entry w-full flex items-start gap-3 px-4 py-3 "
            f"rounded-xl border text-slate-50 shadow-lg {_TONE_CLASSES[normalized_tone]}"
        ),
        **{"data-toast-timeout": str(timeout_ms)},
    )
    return Div(
        toast_card,
        hx_swap_oob=f"beforeend:#{TOAST_HOLDER_ID}",
    )
