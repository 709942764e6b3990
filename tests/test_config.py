"""
Tests for codegen/core/config.py
"""

import json

import pytest

from table2struct.codegen.core.config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
)


@pytest.fixture
def config_file(tmp_path):
    def write(content):
        path = tmp_path / "table2struct.json"
        path.write_text(
            content if isinstance(content, str) else json.dumps(content),
            encoding="utf-8",
        )
        return path

    return write


def test_defaults():
    config = load_config()

    assert config.db_host == "127.0.0.1"
    assert config.db_port == 3306
    assert config.package_name == "models"
    assert config.tag_json is True
    assert config.null_wrapper == "none"
    assert config.strict_types is True
    assert config.mappings == []


def test_file_then_overrides(config_file):
    path = config_file({"db_name": "shop", "package_name": "dao", "tag_gorm": True})

    config = load_config(custom_config={"package_name": "model", "db_port": None}, config_file=path)

    assert config.db_name == "shop"
    assert config.package_name == "model"
    assert config.tag_gorm is True
    assert config.db_port == 3306


def test_mappings_accumulate(config_file):
    path = config_file({"mappings": ["a:Aa"]})

    config = load_config(custom_config={"mappings": ["b:Bb"]}, config_file=path)

    assert config.mappings == ["a:Aa", "b:Bb"]


def test_unknown_keys_go_to_custom(config_file):
    path = config_file({"author": "me"})

    assert load_config(config_file=path).custom == {"author": "me"}


def test_port_is_coerced():
    assert load_config(custom_config={"db_port": "3307"}).db_port == 3307


@pytest.mark.parametrize(
    "content, message",
    [
        ("{not json", "Invalid JSON"),
        ("[1, 2]", "JSON object"),
    ],
)
def test_bad_config_files(config_file, content, message):
    path = config_file(content)

    with pytest.raises(ConfigError, match=message):
        load_config(config_file=path)


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(config_file=tmp_path / "nope.json")


def test_non_json_extension(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("a: 1", encoding="utf-8")

    with pytest.raises(ConfigError, match="must be JSON"):
        load_config(config_file=path)


def test_invalid_null_wrapper():
    with pytest.raises(ConfigError, match="null_wrapper"):
        load_config(custom_config={"null_wrapper": "pointer"})


def test_invalid_port():
    with pytest.raises(ConfigError, match="db_port"):
        load_config(custom_config={"db_port": "abc"})


def test_validate_config_warnings(tmp_path):
    config = GeneratorConfig(
        package_name="My_Models",
        use_int64=True,
        use_unsigned=True,
        tag_json=False,
        output_dir=str(tmp_path / "missing"),
    )

    warnings = ConfigManager().validate_config(config)

    assert "Package names should be lowercase" in warnings
    assert "Package names should not contain underscores" in warnings
    assert any("use_unsigned" in w for w in warnings)
    assert "No struct tags enabled" in warnings
    assert any("does not exist" in w for w in warnings)


def test_validate_default_config_is_clean():
    assert ConfigManager().validate_config(GeneratorConfig()) == []


def test_save_config_round_trip_without_password(tmp_path):
    manager = ConfigManager()
    path = tmp_path / "saved.json"
    config = GeneratorConfig(db_name="shop", db_password="secret", custom={"author": "me"})

    manager.save_config(config, path)
    saved = json.loads(path.read_text(encoding="utf-8"))

    assert saved["db_name"] == "shop"
    assert saved["author"] == "me"
    assert "db_password" not in saved
    assert manager.get_config(config_file=path).db_name == "shop"
