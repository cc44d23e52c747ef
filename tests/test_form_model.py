from sync_form_core.form_model import FormDocument, inflate_fields, selected_value, set_enabled


def test_inflate_fields_nests_dotted_and_indexed_names():
    """Dotted keys become dicts and bracket indices become list slots."""
    payload = inflate_fields(
        [
            ("job.source.pluginClass", "FilesystemConfig"),
            ("job.filters[1].pluginClass", "MetadataConfig"),
            ("job.filters[0].pluginClass", "PathMappingConfig"),
            ("job.filters[0].filterConfig.mapFile", "/tmp/map.csv"),
            ("config.storageType", "local"),
        ]
    )

    assert payload["job"]["source"] == {"pluginClass": "FilesystemConfig"}
    assert payload["job"]["filters"][0] == {"pluginClass": "PathMappingConfig", "filterConfig": {"mapFile": "/tmp/map.csv"}}
    assert payload["job"]["filters"][1] == {"pluginClass": "MetadataConfig"}
    assert payload["config"] == {"storageType": "local"}


def test_inflate_fields_last_value_wins_and_skips_bad_keys():
    payload = inflate_fields([("a.b", "false"), ("a.b", "true"), ("[0].x", "1"), ("", "2")])
    assert payload == {"a": {"b": "true"}}


def test_disabled_class_becomes_disabled_attribute():
    """Controls marked with the `disabled` class start disabled."""
    doc = FormDocument.parse('<form><input name="a" class="x disabled" value="1"><input name="b" value="2"></form>')

    assert doc.soup.find("input", attrs={"name": "a"}).has_attr("disabled")
    assert doc.submitted_fields() == [("b", "2")]


def test_submitted_fields_mimic_browser_rules():
    doc = FormDocument.parse(
        """
        <form>
          <input name="text" value="hello">
          <input name="off" value="x" disabled>
          <input type="checkbox" name="flag" value="true">
          <input type="checkbox" name="on" value="yes" checked>
          <input type="radio" name="kind" value="a">
          <input type="radio" name="kind" value="b" checked>
          <select name="choice"><option value="1">One</option><option value="2">Two</option></select>
          <textarea name="notes">some notes</textarea>
          <button name="go" value="1">Go</button>
          <input type="submit" name="send" value="Send">
        </form>
        """
    )

    assert doc.submitted_fields() == [
        ("text", "hello"),
        ("on", "yes"),
        ("kind", "b"),
        ("choice", "1"),
        ("notes", "some notes"),
    ]


def test_apply_values_updates_enabled_controls_only():
    doc = FormDocument.parse(
        """
        <form>
          <input name="text" value="old">
          <input name="locked" value="keep" disabled>
          <input type="hidden" name="flag" value="false">
          <input type="checkbox" name="flag" value="true">
          <select name="choice"><option value="1" selected>One</option><option value="2">Two</option></select>
          <textarea name="notes"></textarea>
        </form>
        """
    )

    doc.apply_values(
        [
            ("text", "new"),
            ("locked", "changed"),
            ("flag", "false"),
            ("flag", "true"),
            ("choice", "2"),
            ("notes", "typed"),
        ]
    )

    assert doc.submitted_fields() == [
        ("text", "new"),
        ("flag", "false"),
        ("flag", "true"),
        ("choice", "2"),
        ("notes", "typed"),
    ]
    assert doc.soup.find("input", attrs={"name": "locked"})["value"] == "keep"


def test_apply_values_leaves_unposted_names_alone():
    doc = FormDocument.parse('<form><input type="checkbox" name="flag" value="true" checked><input name="t" value="v"></form>')

    doc.apply_values([("t", "w")])

    assert doc.submitted_fields() == [("flag", "true"), ("t", "w")]


def test_selected_value_defaults_to_first_option():
    doc = FormDocument.parse('<select><option value="">--</option><option value="x">X</option></select>')
    select = doc.soup.find("select")
    assert selected_value(select) == ""

    set_enabled(select, False)
    assert select.has_attr("disabled")
    set_enabled(select, True)
    assert not select.has_attr("disabled")


def test_submission_payload_of_parsed_form():
    doc = FormDocument.parse('<form><input name="job.filters[0].pluginClass" value="MetadataConfig"></form>')
    assert doc.submission_payload() == {"job": {"filters": [{"pluginClass": "MetadataConfig"}]}}
