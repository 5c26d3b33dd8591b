"""Tests for the validation engine"""

import pytest

from promote_tool.core.validation_engine import ValidationEngine
from promote_tool.models.config import DeploymentConfig


@pytest.fixture
def engine():
    return ValidationEngine()


class TestArguments:

    def test_valid_tag(self, engine):
        result = engine.validate_release_tag("v1.2.3-build.4")
        assert result.is_valid
        assert result.info == ["Version: 1.2.3, build 4"]

    @pytest.mark.parametrize("tag", [None, "", "1.2.3", "v1.2.3-build.4\n"])
    def test_invalid_tag(self, engine, tag):
        assert not engine.validate_release_tag(tag).is_valid

    def test_environments(self, engine):
        assert engine.validate_environment("stage").is_valid
        assert engine.validate_environment("prod").is_valid

        result = engine.validate_environment("dev")
        assert not result.is_valid
        assert "Valid environments are: stage, prod" in result.errors[0]


class TestEnvironmentConfig:

    def test_complete_configuration(self, engine, config):
        result = engine.validate_environment_config(
            config, "stage", ["api", "worker"], ["maintenance", "services"]
        )
        assert result.is_valid, result.errors

    def test_unconfigured_environment(self, engine, config):
        result = engine.validate_environment_config(config, "prod", ["api"])
        assert result.errors == ["environments.prod: environment not configured"]

    def test_every_problem_is_reported(self, engine, config_data, tmp_path):
        services = config_data["environments"]["stage"]["services"]
        services["api"]["app_yaml"] = {"service": "web"}
        services["worker"]["app_yaml"] = None
        del config_data["environments"]["stage"]["dispatch"]["services"]
        config = DeploymentConfig.from_dict(config_data, base_dir=tmp_path)

        result = engine.validate_environment_config(
            config, "stage", ["api", "worker", "billing"], ["maintenance", "services"]
        )

        assert not result.is_valid
        assert result.errors == [
            "environments.stage.services.api.app_yaml.service: expected 'api', found 'web'",
            "environments.stage.services.api.app_yaml.runtime: runtime not specified",
            "environments.stage.services.worker.app_yaml: app.yaml configuration not defined",
            "environments.stage.services.billing: service not configured",
            "environments.stage.dispatch.services: dispatch.yaml configuration not defined",
        ]
