"""
Test: Configuration loading

Tests DescriberConfig and ConfigLoader:
- from_dict filtering and validation
- JSON / YAML files
- .env files and environment variables
- Precedence of overrides
"""

import json
import os

import pytest
import yaml

from apidesc.config import ConfigLoader, DescriberConfig, coerce_value
from apidesc.endpoint import Identity
from apidesc.faults import ConfigInvalidFault, FaultDomain, Severity


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("APIDESC_"):
            monkeypatch.delenv(key)


# ============================================================================
# DescriberConfig
# ============================================================================

class TestDescriberConfig:

    def test_defaults(self):
        config = DescriberConfig()
        assert config.application_name == ""
        assert config.infrastructure_types == ()
        assert config.max_workers == 1

    def test_from_dict(self):
        config = DescriberConfig.from_dict({"application_name": "Shop", "max_workers": "4"})
        assert config.application_name == "Shop"
        assert config.max_workers == 4

    def test_unknown_and_private_keys_ignored(self):
        config = DescriberConfig.from_dict({"_secret": 1, "title": "x", "application_name": "Shop"})
        assert config.application_name == "Shop"

    def test_infrastructure_types_imported(self):
        config = DescriberConfig.from_dict({"infrastructure_types": ["apidesc.endpoint.context:Identity"]})
        assert config.infrastructure_types == (Identity,)

    def test_infrastructure_types_accept_classes(self):
        assert DescriberConfig.from_dict({"infrastructure_types": [Identity]}).infrastructure_types == (Identity,)

    @pytest.mark.parametrize("path", ["apidesc.endpoint.context", "missing.module:Type", "apidesc.endpoint:VOID_X"])
    def test_bad_infrastructure_type(self, path):
        with pytest.raises(ConfigInvalidFault):
            DescriberConfig.from_dict({"infrastructure_types": [path]})

    def test_infrastructure_type_must_be_class(self):
        with pytest.raises(ConfigInvalidFault):
            DescriberConfig.from_dict({"infrastructure_types": ["apidesc.endpoint.metadata:is_void"]})

    @pytest.mark.parametrize("value", [0, -2, "many"])
    def test_invalid_max_workers(self, value):
        with pytest.raises(ConfigInvalidFault) as exc_info:
            DescriberConfig.from_dict({"max_workers": value})
        fault = exc_info.value
        assert fault.code == "CONFIG_INVALID"
        assert fault.domain == FaultDomain.CONFIG
        assert fault.severity == Severity.FATAL
        assert fault.metadata["key"] == "max_workers"


# ============================================================================
# ConfigLoader
# ============================================================================

class TestConfigLoader:

    def test_empty(self):
        assert ConfigLoader.load().to_describer_config() == DescriberConfig()

    def test_yaml_file_section(self, tmp_path):
        path = tmp_path / "apidesc.yaml"
        path.write_text(yaml.safe_dump({"describer": {"application_name": "Shop", "max_workers": 2}}))
        config = ConfigLoader.load(paths=[str(path)]).to_describer_config()
        assert config.application_name == "Shop"
        assert config.max_workers == 2

    def test_json_file_top_level(self, tmp_path):
        path = tmp_path / "apidesc.json"
        path.write_text(json.dumps({"application_name": "Catalog"}))
        assert ConfigLoader.load(paths=[str(path)]).to_describer_config().application_name == "Catalog"

    def test_glob_merges_in_sorted_order(self, tmp_path):
        (tmp_path / "a.yaml").write_text("describer:\n  application_name: First\n  max_workers: 3\n")
        (tmp_path / "b.yaml").write_text("describer:\n  application_name: Second\n")
        config = ConfigLoader.load(paths=[str(tmp_path / "*.yaml")]).to_describer_config()
        assert config.application_name == "Second"
        assert config.max_workers == 3

    def test_empty_yaml_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert ConfigLoader.load(paths=[str(path)]).config_data == {}

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("APIDESC_DESCRIBER__APPLICATION_NAME=FromDotenv\nOTHER_KEY=ignored\n")
        loader = ConfigLoader.load(env_file=str(env_file))
        assert loader.get("describer.application_name") == "FromDotenv"
        assert "other_key" not in loader.config_data

    def test_missing_env_file(self, tmp_path):
        assert ConfigLoader.load(env_file=str(tmp_path / "missing.env")).config_data == {}

    def test_environment_overrides_files(self, tmp_path, monkeypatch):
        path = tmp_path / "apidesc.yaml"
        path.write_text("describer:\n  application_name: FromFile\n")
        monkeypatch.setenv("APIDESC_DESCRIBER__APPLICATION_NAME", "FromEnv")
        monkeypatch.setenv("APIDESC_DESCRIBER__MAX_WORKERS", "6")
        config = ConfigLoader.load(paths=[str(path)]).to_describer_config()
        assert config.application_name == "FromEnv"
        assert config.max_workers == 6

    def test_environment_overrides_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("APIDESC_APPLICATION_NAME=FromDotenv\n")
        monkeypatch.setenv("APIDESC_APPLICATION_NAME", "FromEnv")
        assert ConfigLoader.load(env_file=str(env_file)).to_describer_config().application_name == "FromEnv"

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("APIDESC_APPLICATION_NAME", "FromEnv")
        loader = ConfigLoader.load(overrides={"application_name": "FromOverride"})
        assert loader.to_describer_config().application_name == "FromOverride"

    def test_section_beats_top_level(self):
        loader = ConfigLoader.load(overrides={"application_name": "Top", "describer": {"application_name": "Section"}})
        assert loader.to_describer_config().application_name == "Section"

    def test_custom_prefix(self, monkeypatch):
        monkeypatch.setenv("SHOP_APPLICATION_NAME", "Shop")
        assert ConfigLoader.load(env_prefix="SHOP_").get("application_name") == "Shop"

    def test_get_default(self):
        assert ConfigLoader.load().get("describer.missing", "fallback") == "fallback"

    @pytest.mark.parametrize("raw,expected", [
        ("true", True),
        ("no", False),
        ("4", 4),
        ("1.5", 1.5),
        ('["a", "b"]', ["a", "b"]),
        ("Shop", "Shop"),
    ])
    def test_value_parsing(self, raw, expected):
        assert coerce_value(raw) == expected

    def test_invalid_value_surfaces_as_fault(self, monkeypatch):
        monkeypatch.setenv("APIDESC_MAX_WORKERS", "zero")
        with pytest.raises(ConfigInvalidFault):
            ConfigLoader.load().to_describer_config()
