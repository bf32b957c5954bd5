"""Unit tests for YAML/TOML/JSON config loading."""

import json
from unittest.mock import MagicMock, patch

import pytest

from callwire.config import load_config, registry_from_config
from callwire.registry import FactoryRegistry


class TestLoadConfig:
    def test_json_loading(self, tmp_path):
        config = {"instances": {"ui": {}, "worker": {"serialize": True}}}
        f = tmp_path / "test.json"
        f.write_text(json.dumps(config))
        assert load_config(f) == config

    def test_toml_loading(self, tmp_path):
        f = tmp_path / "test.toml"
        f.write_text('default = "ui"\n[instances.ui]\ninstance = "ui-main"\n')
        try:
            result = load_config(f)
        except ImportError:
            pytest.skip("No TOML library available")
        assert result['default'] == 'ui'
        assert result['instances']['ui']['instance'] == 'ui-main'

    def test_yaml_loading(self, tmp_path):
        f = tmp_path / "test.yaml"
        f.write_text("instances:\n  ui:\n    serialize: true\n")
        try:
            result = load_config(f)
        except ImportError:
            pytest.skip("pyyaml not installed")
        assert result['instances']['ui']['serialize'] is True

    def test_empty_yaml(self, tmp_path):
        f = tmp_path / "empty.yml"
        f.write_text("")
        try:
            assert load_config(f) == {}
        except ImportError:
            pytest.skip("pyyaml not installed")

    def test_unknown_extension_raises(self, tmp_path):
        f = tmp_path / "test.xml"
        f.write_text("<config></config>")
        with pytest.raises(ValueError, match="Unsupported config file extension"):
            load_config(f)

    def test_missing_file_raises(self):
        with pytest.raises(FileNotFoundError):
            load_config("/nonexistent/path/config.json")

    def test_toml_missing_dep_message(self, tmp_path):
        f = tmp_path / "test.toml"
        f.write_text('default = "x"\n')
        with patch.dict('sys.modules', {'tomllib': None, 'tomli': None}):
            with pytest.raises(ImportError, match="callwire\\[toml\\]"):
                load_config(f)

    def test_yaml_missing_dep_message(self, tmp_path):
        f = tmp_path / "test.yaml"
        f.write_text("a: 1\n")
        with patch.dict('sys.modules', {'yaml': None}):
            with pytest.raises(ImportError, match="callwire\\[yaml\\]"):
                load_config(f)


    def test_empty_json(self, tmp_path):
        f = tmp_path / "empty.json"
        f.write_text("")
        assert load_config(f) == {}

    def test_non_mapping_root(self, tmp_path):
        f = tmp_path / "list.json"
        f.write_text(json.dumps([{"a": 1}]))
        with pytest.raises(ValueError, match="root must be a mapping, got list"):
            load_config(f)

    def test_unknown_top_level_key(self, tmp_path):
        f = tmp_path / "extra.json"
        f.write_text(json.dumps({"instances": {}, "port": 5000}))
        with pytest.raises(ValueError, match="unknown top-level keys \\['port'\\]"):
            load_config(f)


class TestRegistryFromConfig:
    def test_json(self, tmp_path):
        f = tmp_path / "bridge.json"
        f.write_text(json.dumps({
            "default": "worker",
            "instances": {"ui": {}, "worker": {"instance": "bg"}},
        }))
        reg = registry_from_config(f, MagicMock())
        assert isinstance(reg, FactoryRegistry)
        assert reg.get().instance == "bg"
