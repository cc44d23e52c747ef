"""Job form routes registration."""

from sync_form_ui.routes import job_form_handlers


def setup_job_form_routes(app):
    """Registra le route del modulo job."""
    app.get("/jobs/new")(job_form_handlers.new_job_page)
    app.post("/jobs/form/{token}/filters/add")(job_form_handlers.add_filter_block)
    app.post("/jobs/form/{token}/filters/remove")(job_form_handlers.remove_filter_block)
    app.post("/jobs/form/{token}/filters/move")(job_form_handlers.move_filter_block)
    app.post("/jobs/form/{token}/plugins")(job_form_handlers.change_plugin)
    app.post("/jobs/form/{token}/advanced")(job_form_handlers.toggle_advanced_options)
    app.post("/jobs/form/{token}/storage")(job_form_handlers.change_config_storage)
    app.post("/jobs/form/{token}/preview")(job_form_handlers.preview_job)
