from fasthtml.common import to_xml

from sync_form_ui.common import toasts


def test_build_toast_renders_oob_fragment(monkeypatch):
    """Toast markup must target the global OOB holder."""
    monkeypatch.setattr(toasts, "get_setting", lambda _path, default=None: 4200)
    html = to_xml(toasts.build_toast("Saved", tone="success"))
    assert 'hx-swap-oob="beforeend:#app-toast-holder"' in html
    assert 'data-toast-timeout="4200"' in html
    assert "app-toast-entry" in html


def test_build_toast_clamps_invalid_timeout(monkeypatch):
    """Invalid timeout settings should fallback to bounded defaults."""
    monkeypatch.setattr(toasts, "get_setting", lambda _path, default=None: -1)
    html = to_xml(toasts.build_toast("Bad timeout", tone="info"))
    assert 'data-toast-timeout="1000"' in html


def test_build_toast_unknown_tone_and_empty_message():
    html = to_xml(toasts.build_toast("   ", tone="weird", duration_ms=99999))
    assert "Done." in html
    assert "bg-sky-600/95" in html
    assert 'data-toast-timeout="15000"' in html
