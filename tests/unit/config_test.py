"""Tests for configuration loading and validation."""

import json

import pytest

from openapi_wit.codegen.core.config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
)


@pytest.fixture
def manager():
    return ConfigManager()


class TestGetConfig:
    def test_defaults(self, manager):
        config = manager.get_config()
        assert config.package_name == "openapi"
        assert config.project_name == "openapi-client"
        assert config.interface_name == "api"
        assert config.error_model == "variant"
        assert config.strict_mode is False
        assert config.detect_cycles is True
        assert config.indent_size == 4

    def test_camel_case_options(self, manager):
        config = manager.get_config(
            {"packageName": "petstore:api", "projectName": "petstore", "errorModel": "string"}
        )
        assert config.package_name == "petstore:api"
        assert config.project_name == "petstore"
        assert config.error_model == "string"

    def test_unknown_keys_go_to_custom(self, manager):
        config = manager.get_config({"flavor": "spicy"})
        assert config.custom == {"flavor": "spicy"}
        assert config.to_dict()["flavor"] == "spicy"

    def test_file_then_overrides(self, manager, tmp_path):
        config_file = tmp_path / "wit.json"
        config_file.write_text(
            json.dumps({"packageName": "from-file", "strict_mode": True}), encoding="utf-8"
        )
        config = manager.get_config({"package_name": "override"}, config_file)
        assert config.package_name == "override"
        assert config.strict_mode is True

    def test_load_config_helper(self):
        assert load_config({"interfaceName": "pets"}).interface_name == "pets"


class TestConfigFileErrors:
    def test_missing_file(self, manager, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            manager.get_config(config_file=tmp_path / "missing.json")

    def test_wrong_suffix(self, manager, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(ConfigError, match="must be JSON"):
            manager.get_config(config_file=path)

    def test_invalid_json(self, manager, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid JSON") as excinfo:
            manager.get_config(config_file=path)
        assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)

    def test_not_an_object(self, manager, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError, match="JSON object"):
            manager.get_config(config_file=path)


class TestSaveConfig:
    def test_save_and_reload(self, manager, tmp_path):
        path = tmp_path / "saved.json"
        manager.save_config(GeneratorConfig(package_name="acme:pets", strict_mode=True), path)

        reloaded = manager.get_config(config_file=path)
        assert reloaded.package_name == "acme:pets"
        assert reloaded.strict_mode is True


class TestValidateConfig:
    def test_valid(self, manager):
        assert manager.validate_config(GeneratorConfig()) == []

    def test_invalid_error_model(self, manager):
        warnings = manager.validate_config(GeneratorConfig(error_model="exceptions"))
        assert len(warnings) == 1
        assert "Invalid error_model" in warnings[0]

    @pytest.mark.parametrize("style", ["string", "record"])
    def test_unsynthesized_error_model(self, manager, style):
        warnings = manager.validate_config(GeneratorConfig(error_model=style))
        assert warnings == [
            f"error_model '{style}' is not synthesized, the variant error model is used"
        ]

    def test_invalid_package_name(self, manager):
        warnings = manager.validate_config(GeneratorConfig(package_name="Pet Store"))
        assert warnings[0].startswith("Invalid WIT package name")

    def test_invalid_indent(self, manager):
        warnings = manager.validate_config(GeneratorConfig(indent_size=0))
        assert warnings == ["Invalid indent_size: 0"]
