import json

from sync_form_core.config_manager import ConfigManager


def test_load_creates_default_config(tmp_path):
    path = tmp_path / "config.json"
    cm = ConfigManager.load(path)

    assert path.exists()
    assert cm.get_job_prefix() == "job"
    assert cm.get_max_sessions() == 64
    assert json.loads(path.read_text(encoding="utf-8"))["settings"]["form"]["job_prefix"] == "job"


def test_load_merges_user_values_over_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"settings": {"form": {"job_prefix": ".sync."}}}), encoding="utf-8")

    cm = ConfigManager.load(path)

    assert cm.get_job_prefix() == "sync"
    assert cm.get_max_sessions() == 64
    assert cm.get_setting("ui.toast_duration") == 3000


def test_invalid_json_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    cm = ConfigManager.load(path)

    assert cm.get_setting("logging.level") == "INFO"


def test_set_setting_and_save_round_trip(tmp_path):
    path = tmp_path / "config.json"
    cm = ConfigManager.load(path)
    cm.set_setting("form.max_sessions", "0")
    cm.set_setting("ui.toast_duration", 5000)
    cm.save()

    reloaded = ConfigManager.load(path)
    assert reloaded.get_max_sessions() == 1
    assert reloaded.get_setting("ui.toast_duration") == 5000
    assert reloaded.get_setting("missing.key", "fallback") == "fallback"


def test_logs_dir_is_resolved_and_created(tmp_path):
    cm = ConfigManager.load(tmp_path / "config.json")
    cm.set_logs_dir(str(tmp_path / "custom-logs"))

    assert cm.get_logs_dir() == tmp_path / "custom-logs"
    assert (tmp_path / "custom-logs").is_dir()
