"""Catalog of the storage and filter plugins offered by the job form.

Each plugin is identified by its fully-qualified config class name; the form
keys its variant sections by the simple class name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .variant_switcher import normalize_variant_id

STORAGE_PACKAGE = "com.emc.ecs.sync.config.storage"
FILTER_PACKAGE = "com.emc.ecs.sync.config.filter"

ROLE_SOURCE = "source"
ROLE_TARGET = "target"


@dataclass(frozen=True)
class PluginOption:
    """One configurable property of a plugin."""

    name: str
    label: str
    kind: str = "text"  # text | password | number | toggle | select | textarea
    default: Any = None
    choices: tuple[str, ...] = ()
    help_text: str = ""
    advanced: bool = False


@dataclass(frozen=True)
class PluginSpec:
    class_name: str
    label: str
    documentation: str = ""
    options: tuple[PluginOption, ...] = field(default_factory=tuple)
    role: str | None = None  # None means usable as source and target

    @property
    def variant_id(self) -> str:
        return normalize_variant_id(self.class_name)

    def supports(self, role: str | None) -> bool:
        return role is None or self.role is None or self.role == role


@dataclass(frozen=True)
class ConfigStorageSpec:
    """Where the UI keeps its own configuration (local disk or an ECS bucket)."""

    storage_type: str
    label: str
    options: tuple[PluginOption, ...] = field(default_factory=tuple)


STORAGE_PLUGINS: tuple[PluginSpec, ...] = (
    PluginSpec(
        class_name=f"{STORAGE_PACKAGE}.FilesystemConfig",
        label="Filesystem",
        documentation="The filesystem plugin reads/writes data from/to a file or directory.",
        options=(
            PluginOption("path", "Path", help_text="path to the primary file or directory."),
            PluginOption(
                "excludedPaths",
                "Excluded paths",
                kind="textarea",
                help_text="Regular expressions matched against the full file path; one per line.",
            ),
            PluginOption("modifiedSince", "Modified since", help_text="ISO-8601 UTC, e.g. 2015-01-01T04:30:00Z", advanced=True),
            PluginOption("deleteOlderThan", "Delete older than (ms)", kind="number", default=0, advanced=True),
            PluginOption("deleteCheckScript", "Delete check script", advanced=True),
        ),
    ),
    PluginSpec(
        class_name=f"{STORAGE_PACKAGE}.AwsS3Config",
        label="S3",
        documentation="Represents storage in an Amazon S3 bucket.",
        options=(
            PluginOption("protocol", "Protocol", kind="select", default="https", choices=("http", "https")),
            PluginOption("host", "Host"),
            PluginOption("port", "Port", kind="number", default=-1, advanced=True),
            PluginOption("region", "Region", advanced=True),
            PluginOption("accessKey", "Access key"),
            PluginOption("secretKey", "Secret key", kind="password"),
            PluginOption("bucketName", "Bucket"),
            PluginOption("keyPrefix", "Key prefix", advanced=True),
            PluginOption("useDefaultCredentialsProvider", "Use default credentials provider", kind="toggle", advanced=True),
        ),
    ),
    PluginSpec(
        class_name=f"{STORAGE_PACKAGE}.AtmosConfig",
        label="Atmos",
        documentation="Reads and writes objects in an Atmos cloud.",
        options=(
            PluginOption("protocol", "Protocol", kind="select", default="https", choices=("http", "https")),
            PluginOption("hosts", "Hosts", kind="textarea", help_text="One host per line."),
            PluginOption("port", "Port", kind="number", default=-1, advanced=True),
            PluginOption("uid", "UID"),
            PluginOption("secret", "Secret", kind="password"),
            PluginOption("path", "Path"),
            PluginOption("accessType", "Access type", kind="select", default="namespace", choices=("objectspace", "namespace")),
        ),
    ),
    PluginSpec(
        class_name=f"{STORAGE_PACKAGE}.AzureBlobConfig",
        label="Azure Blob",
        documentation="Reads content from an Azure Blob Storage container.",
        options=(
            PluginOption("connectionString", "Connection string", kind="password"),
            PluginOption("containerName", "Container"),
            PluginOption("blobPrefix", "Blob prefix", advanced=True),
        ),
        role=ROLE_SOURCE,
    ),
    PluginSpec(
        class_name=f"{STORAGE_PACKAGE}.CasConfig",
        label="CAS",
        documentation="Reads and writes clips in a CAS pool.",
        options=(
            PluginOption("connectionString", "Connection string"),
            PluginOption("applicationName", "Application name", advanced=True),
            PluginOption("applicationVersion", "Application version", advanced=True),
            PluginOption("deleteReason", "Delete reason", advanced=True),
        ),
    ),
    PluginSpec(
        class_name=f"{STORAGE_PACKAGE}.TestConfig",
        label="Simulated Storage for Testing",
        documentation="Generates random data when used as a source, or acts as /dev/null when used as a target.",
        options=(
            PluginOption("objectCount", "Object count", kind="number", default=100),
            PluginOption("maxSize", "Max size (bytes)", kind="number", default=1048576),
            PluginOption("maxDepth", "Max depth", kind="number", default=5, advanced=True),
        ),
    ),
)

FILTER_PLUGINS: tuple[PluginSpec, ...] = (
    PluginSpec(
        class_name=f"{FILTER_PACKAGE}.MetadataConfig",
        label="Metadata Filter",
        documentation="Allows adding regular and listable (Atmos only) metadata to each object.",
        options=(
            PluginOption("addMetadata", "Add metadata", kind="textarea", help_text="name=value, one per line."),
            PluginOption("removeMetadata", "Remove metadata", kind="textarea"),
            PluginOption("changeMetadataKeys", "Change metadata keys", kind="textarea", advanced=True),
        ),
    ),
    PluginSpec(
        class_name=f"{FILTER_PACKAGE}.PathMappingConfig",
        label="Path Mapping Filter",
        documentation="Maps object paths between source and target.",
        options=(
            PluginOption("mapSource", "Map source", kind="select", default="CSV", choices=("CSV", "Metadata", "RegEx")),
            PluginOption("metadataName", "Metadata name"),
            PluginOption("regExPattern", "RegEx pattern"),
            PluginOption("regExReplacementString", "RegEx replacement"),
        ),
    ),
    PluginSpec(
        class_name=f"{FILTER_PACKAGE}.AclMappingConfig",
        label="ACL Mapper",
        documentation="Maps ACLs from the source system to the target using a provided mapping file.",
        options=(
            PluginOption("aclMapFile", "ACL map file"),
            PluginOption("aclAppendDomain", "Append domain", advanced=True),
            PluginOption("aclAddGrants", "Add grants", kind="textarea", advanced=True),
        ),
    ),
    PluginSpec(
        class_name=f"{FILTER_PACKAGE}.EncryptionConfig",
        label="Encryption Filter",
        documentation="Encrypts object data using the Atmos Java SDK encryption standard.",
        options=(
            PluginOption("encryptKeystore", "Keystore"),
            PluginOption("encryptKeystorePass", "Keystore password", kind="password"),
            PluginOption("encryptKeyAlias", "Key alias"),
        ),
    ),
    PluginSpec(
        class_name=f"{FILTER_PACKAGE}.DecryptionConfig",
        label="Decryption Filter",
        documentation="Decrypts object data using the Atmos Java SDK encryption standard.",
        options=(
            PluginOption("decryptKeystore", "Keystore"),
            PluginOption("decryptKeystorePass", "Keystore password", kind="password"),
        ),
    ),
    PluginSpec(
        class_name=f"{FILTER_PACKAGE}.ShellCommandConfig",
        label="Shell Command Filter",
        # No documentation: the form shows no info affordance for this one.
        options=(PluginOption("shellCommand", "Shell command"),),
    ),
)

CONFIG_STORAGE_TYPES: tuple[ConfigStorageSpec, ...] = (
    ConfigStorageSpec(
        storage_type="local",
        label="Local disk",
        options=(PluginOption("configRoot", "Config directory", default="/opt/emc/ecs-sync/config"),),
    ),
    ConfigStorageSpec(
        storage_type="ecs",
        label="ECS bucket",
        options=(
            PluginOption("hosts", "Hosts", kind="textarea", help_text="One host per line."),
            PluginOption("protocol", "Protocol", kind="select", default="https", choices=("http", "https")),
            PluginOption("port", "Port", kind="number", default=9021),
            PluginOption("accessKey", "Access key"),
            PluginOption("secretKey", "Secret key", kind="password"),
            PluginOption("configBucket", "Config bucket", default="ecs-sync"),
        ),
    ),
)


def storage_plugins(role: str | None = None) -> list[PluginSpec]:
    """Storage plugins usable in `role` (all of them when role is None)."""
    return [plugin for plugin in STORAGE_PLUGINS if plugin.supports(role)]


def filter_plugins() -> list[PluginSpec]:
    return list(FILTER_PLUGINS)


def find_plugin(class_name: str | None) -> PluginSpec | None:
    """Resolve a plugin by qualified or simple class name."""
    variant_id = normalize_variant_id(class_name)
    if not variant_id:
        return None
    for plugin in (*STORAGE_PLUGINS, *FILTER_PLUGINS):
        if plugin.variant_id == variant_id:
            return plugin
    return None
