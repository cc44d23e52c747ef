import asyncio
import json
import logging

from fasthtml.common import to_xml

from sync_form_core.form_model import FormDocument
from sync_form_core.variant_switcher import active_variant
from sync_form_ui.form_sessions import form_sessions
from sync_form_ui.routes import job_form_handlers


class _DummyForm:
    def __init__(self, items):
        self._items = list(items)

    def multi_items(self):
        return list(self._items)


class _DummyRequest:
    def __init__(self, items=(), headers=None):
        self._form = _DummyForm(items)
        self.headers = headers or {}

    async def form(self):
        return self._form


def _new_session():
    job_form_handlers.new_job_page(_DummyRequest(headers={"HX-Request": "true"}))
    assert len(form_sessions) == 1
    token = next(iter(form_sessions._sessions))
    return token, form_sessions.get(token).document


def _fragment(result):
    return FormDocument.parse(to_xml(result))


def test_new_job_page_registers_session_and_renders_layout():
    result = job_form_handlers.new_job_page(_DummyRequest())
    html = to_xml(result)

    assert len(form_sessions) == 1
    token = next(iter(form_sessions._sessions))
    assert f'data-form-token="{token}"' in html
    assert "app-toast-holder" in html
    assert f"/jobs/form/{token}/filters/add" in html


def test_add_and_remove_filter_round_trip():
    token, doc = _new_session()

    asyncio.run(job_form_handlers.add_filter_block(_DummyRequest(), token))
    result = asyncio.run(job_form_handlers.add_filter_block(_DummyRequest(), token))
    container = _fragment(result)
    assert container.soup.find(id="filter-container") is not None
    assert container.soup.find(id="job.filters[1]") is not None

    asyncio.run(job_form_handlers.remove_filter_block(_DummyRequest([("filter_id", "job.filters[0]")]), token))
    assert doc.by_id("job.filters[0]") is not None
    assert doc.by_id("job.filters[1]") is None


def test_change_plugin_uses_posted_selection():
    """The posted selector value drives the switch, qualified names included."""
    token, doc = _new_session()
    request = _DummyRequest(
        [
            ("property", "target"),
            ("job.target.pluginClass", "com.emc.ecs.sync.config.storage.CasConfig"),
        ]
    )

    result = asyncio.run(job_form_handlers.change_plugin(request, token))

    fragment = _fragment(result)
    assert fragment.soup.find("div", class_="plugin-field")["id"] == "target-field"
    assert active_variant(doc.soup, "target") == "CasConfig"
    assert active_variant(fragment.soup, "target") == "CasConfig"


def test_change_plugin_for_unknown_group_returns_toast():
    token, _doc = _new_session()
    result = asyncio.run(job_form_handlers.change_plugin(_DummyRequest([("property", "Filter 9")]), token))

    toast, header = result
    assert "Unknown plugin field" in to_xml(toast)
    assert header.k == "HX-Reswap"


def test_change_config_storage_returns_storage_field():
    token, doc = _new_session()
    result = asyncio.run(job_form_handlers.change_config_storage(_DummyRequest([("config.storageType", "ecs")]), token))

    fragment = _fragment(result)
    assert fragment.soup.find(id="storage-configuration") is not None
    assert ("config.ecs.port", "9021") in doc.submitted_fields()


def test_preview_reflects_posted_values():
    token, _doc = _new_session()
    request = _DummyRequest([("job.source.pluginConfig.path", "/mnt/source")])

    result = asyncio.run(job_form_handlers.preview_job(request, token))

    payload = json.loads(FormDocument.parse(to_xml(result)).soup.find("pre").get_text())
    assert payload["job"]["source"]["pluginConfig"]["path"] == "/mnt/source"
    assert payload["job"]["source"]["pluginClass"] == "com.emc.ecs.sync.config.storage.FilesystemConfig"


def test_unknown_token_returns_expired_toast():
    result = asyncio.run(job_form_handlers.add_filter_block(_DummyRequest(), "missing"))

    toast, _header = result
    html = to_xml(toast)
    assert "This form has expired" in html
    assert 'hx-swap-oob="beforeend:#app-toast-holder"' in html


def test_handler_failure_returns_danger_toast(monkeypatch):
    token, _doc = _new_session()

    def _boom(*_args, **_kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(job_form_handlers.handlers, "add_filter", _boom)

    toast, _header = asyncio.run(job_form_handlers.add_filter_block(_DummyRequest(), token))
    assert "boom" in to_xml(toast)


def test_toggle_advanced_route_returns_field_with_rows_shown():
    token, doc = _new_session()
    request = _DummyRequest([("property", "source")])

    result = asyncio.run(job_form_handlers.toggle_advanced_options(request, token))

    fragment = _fragment(result)
    assert fragment.soup.find("div", class_="plugin-field")["id"] == "source-field"
    rows = doc.variant_table("source").find_all("tr", class_="advanced")
    assert rows and all(not row.has_attr("hidden") for row in rows)
    assert fragment.soup.find("button", class_="toggle-advanced").get_text() == "hide advanced options"


def test_fragments_are_logged_at_debug(caplog):
    token, _doc = _new_session()
    caplog.set_level(logging.DEBUG, logger="sync_form")

    asyncio.run(job_form_handlers.add_filter_block(_DummyRequest(), token))

    assert any("Rendered fragment filter-container" in record.getMessage() for record in caplog.records)
