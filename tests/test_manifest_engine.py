"""Tests for app.yaml and dispatch.yaml generation"""

import pytest
import yaml

from promote_tool.api.exceptions import (
    ManifestMissingError,
    ServiceNameMismatchError,
    RuntimeUnspecifiedError,
)
from promote_tool.core.manifest_engine import ManifestEngine
from promote_tool.models.config import DeploymentConfig


def engine_for(config_data, tmp_path):
    return ManifestEngine(DeploymentConfig.from_dict(config_data, base_dir=tmp_path))


def test_service_manifest(config, tmp_path):
    manifest = ManifestEngine(config).write_service_manifest("stage", "api", tmp_path / "api")

    assert manifest.path == tmp_path / "api" / "app.yaml"
    assert manifest.key == "environments.stage.services.api.app_yaml"
    assert yaml.safe_load(manifest.path.read_text()) == {"service": "api", "runtime": "python39"}


def test_service_manifest_keeps_key_order(config_data, tmp_path):
    config_data["environments"]["stage"]["services"]["api"]["app_yaml"] = {
        "service": "api",
        "runtime": "python39",
        "instance_class": "F2",
        "env_variables": {"MODE": "stage"},
    }
    manifest = engine_for(config_data, tmp_path).write_service_manifest("stage", "api", tmp_path)

    lines = manifest.path.read_text().splitlines()
    assert [line.split(":")[0] for line in lines if not line.startswith(" ")] == [
        "service", "runtime", "instance_class", "env_variables"
    ]


def test_missing_service_fragment(config_data, tmp_path):
    config_data["environments"]["stage"]["services"]["api"]["app_yaml"] = {}

    with pytest.raises(ManifestMissingError) as exc_info:
        engine_for(config_data, tmp_path).write_service_manifest("stage", "api", tmp_path)

    assert exc_info.value.key == "environments.stage.services.api.app_yaml"
    assert not (tmp_path / "app.yaml").exists()


def test_unknown_service(config, tmp_path):
    with pytest.raises(ManifestMissingError):
        ManifestEngine(config).write_service_manifest("stage", "billing", tmp_path)


def test_service_name_mismatch(config_data, tmp_path):
    config_data["environments"]["stage"]["services"]["api"]["app_yaml"]["service"] = "default"

    with pytest.raises(ServiceNameMismatchError) as exc_info:
        engine_for(config_data, tmp_path).write_service_manifest("stage", "api", tmp_path)

    assert exc_info.value.found == "default"


@pytest.mark.parametrize("runtime", [None, "", "  "])
def test_runtime_required(config_data, tmp_path, runtime):
    app_yaml = {"service": "api"}
    if runtime is not None:
        app_yaml["runtime"] = runtime
    config_data["environments"]["stage"]["services"]["api"]["app_yaml"] = app_yaml

    with pytest.raises(RuntimeUnspecifiedError):
        engine_for(config_data, tmp_path).write_service_manifest("stage", "api", tmp_path)


@pytest.mark.parametrize("scope, first_service", [
    ("maintenance", "maintenance"),
    ("services", "api"),
])
def test_dispatch_manifest(config, tmp_path, scope, first_service):
    manifest = ManifestEngine(config).write_dispatch_manifest("stage", scope, tmp_path / scope)

    assert manifest.path == tmp_path / scope / "dispatch.yaml"
    content = yaml.safe_load(manifest.path.read_text())
    assert content["dispatch"][0]["service"] == first_service


def test_missing_dispatch_scope(config, tmp_path):
    with pytest.raises(ManifestMissingError, match="environments.prod.dispatch.services"):
        ManifestEngine(config).write_dispatch_manifest("prod", "services", tmp_path)
