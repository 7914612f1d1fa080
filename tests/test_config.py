from pathlib import Path

import pytest

from envloader.config import EnvLoaderConfig, load_config


def test_load_config_reads_all_sections(tmp_path):
    path = tmp_path / "envloader.yaml"
    path.write_text(
        "load:\n"
        "  path: config/.env.local\n"
        "  clobber: true\n"
        "  passthru: true\n"
        "unload:\n"
        "  path: config/.env.local\n"
        "logging:\n"
        "  level: debug\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.load.path == Path("config/.env.local")
    assert config.load.clobber is True
    assert config.load.passthru is True
    assert config.unload.path == Path("config/.env.local")
    assert config.logging.level == "DEBUG"


def test_empty_config_uses_defaults(tmp_path):
    path = tmp_path / "envloader.yaml"
    path.write_text("", encoding="utf-8")

    config = load_config(path)

    assert config == EnvLoaderConfig()
    assert config.load.path == Path(".env")
    assert config.load.clobber is False
    assert config.logging.level == "WARNING"


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_config(tmp_path / "nope.yaml")


def test_load_config_rejects_non_mapping_root(tmp_path):
    path = tmp_path / "envloader.yaml"
    path.write_text("- load\n- unload\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Configuration root must be a mapping"):
        load_config(path)


def test_unknown_keys_are_rejected():
    with pytest.raises(ValueError, match=r"Unknown keys in load: \['override'\]"):
        EnvLoaderConfig.from_dict({"load": {"override": True}})
    with pytest.raises(ValueError, match="Unknown keys in root"):
        EnvLoaderConfig.from_dict({"watch": True})


def test_invalid_log_level_is_rejected():
    with pytest.raises(ValueError, match="logging.level must be one of"):
        EnvLoaderConfig.from_dict({"logging": {"level": "chatty"}})


def test_section_must_be_mapping():
    with pytest.raises(ValueError, match="unload must be a mapping"):
        EnvLoaderConfig.from_dict({"unload": ".env"})


@pytest.mark.parametrize("key", ["clobber", "passthru"])
def test_non_boolean_flags_are_rejected(key):
    with pytest.raises(ValueError, match=f"load.{key} must be true or false"):
        EnvLoaderConfig.from_dict({"load": {key: "false"}})


def test_module_docstrings_are_kept():
    from envloader import config, parsing

    assert parsing.__doc__.strip().startswith("Line-level parsing")
    assert config.__doc__.strip().startswith("Optional YAML configuration")
