from sync_form_core import plugin_catalog


def test_find_plugin_accepts_qualified_and_simple_names():
    qualified = plugin_catalog.find_plugin("com.emc.ecs.sync.config.filter.MetadataConfig")
    assert qualified is not None
    assert qualified is plugin_catalog.find_plugin("MetadataConfig")
    assert qualified.variant_id == "MetadataConfig"
    assert plugin_catalog.find_plugin("") is None
    assert plugin_catalog.find_plugin("com.example.Unknown") is None


def test_storage_plugins_respect_role():
    source_ids = [p.variant_id for p in plugin_catalog.storage_plugins(plugin_catalog.ROLE_SOURCE)]
    target_ids = [p.variant_id for p in plugin_catalog.storage_plugins(plugin_catalog.ROLE_TARGET)]

    assert "AzureBlobConfig" in source_ids
    assert "AzureBlobConfig" not in target_ids
    assert len(plugin_catalog.storage_plugins()) == len(plugin_catalog.STORAGE_PLUGINS)


def test_variant_ids_are_unique():
    ids = [p.variant_id for p in (*plugin_catalog.STORAGE_PLUGINS, *plugin_catalog.FILTER_PLUGINS)]
    assert len(ids) == len(set(ids))
