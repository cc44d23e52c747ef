"""Base Layout Component.

Shell HTML with Tailwind/HTMX headers, the global toast holder and the main content area.
"""

from fasthtml.common import Body, Div, Head, Html, Main, Meta, Script, Title

from sync_form_core import __version__
from sync_form_ui.common.toasts import TOAST_HOLDER_ID

HTMX_SRC = "https://unpkg.com/htmx.org@1.9.12"
TAILWIND_SRC = "https://cdn.tailwindcss.com"


def _toast_dismiss_script() -> str:
    return f"""
        (function() {{
            function arm(root) {{
                (root || document).querySelectorAll('[data-toast-timeout]').forEach((toast) => {{
                    if (toast.dataset.toastArmed === '1') return;
                    toast.dataset.toastArmed = '1';
                    const timeout = parseInt(toast.dataset.toastTimeout || '3000', 10);
                    setTimeout(() => toast.remove(), timeout);
                }});
            }}
            document.addEventListener('click', (evt) => {{
                const btn = evt.target.closest('[data-toast-close]');
                if (btn) btn.closest('[data-toast-timeout]')?.remove();
            }});
            document.body.addEventListener('htmx:afterSettle', () => arm(document.getElementById('{TOAST_HOLDER_ID}')));
        }})();
    """


def base_layout(title: str, content, active_page: str = "jobs") -> Html:
    """Wrap `content` in the application shell."""
    return Html(
        Head(
            Title(title),
            Meta(charset="utf-8"),
            Meta(name="viewport", content="width=device-width, initial-scale=1"),
            Script(src=HTMX_SRC),
            Script(src=TAILWIND_SRC),
        ),
        Body(
            Main(content, cls="max-w-5xl mx-auto p-6", **{"data-page": active_page}),
            Div(
                id=TOAST_HOLDER_ID,
                cls="fixed top-4 right-4 z-50 flex flex-col gap-2 w-80 pointer-events-none",
            ),
            Div(f"v{__version__}", cls="fixed bottom-2 right-3 text-xs text-slate-400"),
            Script(_toast_dismiss_script()),
            cls="bg-slate-50 dark:bg-slate-950 text-slate-900 dark:text-slate-100",
        ),
    )
