from pathlib import Path

import pytest

from dialframe.config import (
    Configuration,
    SettingPathNotFoundError,
    SettingsNotLoadedError,
    SettingTypeError,
)


def with_root(config: Configuration, root: Path, settings: dict) -> Configuration:
    config.platform.root = str(root)
    config.load_settings(settings)
    return config


def test_unloaded_settings_always_fail(config: Configuration) -> None:
    for path in [(), ("a",), ("a", "b"), (["a", "b"],)]:
        with pytest.raises(SettingsNotLoadedError):
            config.files_from_setting(*path)


def test_single_glob(config: Configuration, app_root: Path) -> None:
    with_root(config, app_root, {"a": {"b": "*.rb"}})
    files = config.files_from_setting("a", "b")
    assert set(files) == {str(app_root / "x.rb"), str(app_root / "y.rb")}


def test_missing_key_names_full_path(config: Configuration, app_root: Path) -> None:
    with_root(config, app_root, {"a": {"b": "*.rb"}})
    with pytest.raises(SettingPathNotFoundError) as excinfo:
        config.files_from_setting("a", "c")
    assert excinfo.value.path == ("a", "c")
    assert "['a', 'c']" in str(excinfo.value)


def test_path_through_scalar_not_found(config: Configuration, app_root: Path) -> None:
    with_root(config, app_root, {"a": "*.rb"})
    with pytest.raises(SettingPathNotFoundError):
        config.files_from_setting("a", "b")


@pytest.mark.parametrize("value", [None, "", [], False])
def test_empty_value_treated_as_missing(config: Configuration, app_root: Path, value) -> None:
    with_root(config, app_root, {"a": {"b": value}})
    with pytest.raises(SettingPathNotFoundError):
        config.files_from_setting("a", "b")


def test_patterns_unioned_and_deduplicated(config: Configuration, app_root: Path) -> None:
    with_root(config, app_root, {"a": {"b": ["*.rb", "x.*"]}})
    files = config.files_from_setting("a", "b")
    assert files == [
        str(app_root / "x.rb"),
        str(app_root / "y.rb"),
        str(app_root / "x.txt"),
    ]


def test_plain_file_name_and_recursive_glob(config: Configuration, app_root: Path) -> None:
    with_root(config, app_root, {"paths": {"one": "x.txt", "all": "**/*.rb"}})
    assert config.files_from_setting("paths", "one") == [str(app_root / "x.txt")]
    assert str(app_root / "components" / "voicemail.rb") in config.files_from_setting(
        "paths", "all"
    )


def test_no_matches_is_empty(config: Configuration, app_root: Path) -> None:
    with_root(config, app_root, {"a": "*.py"})
    assert config.files_from_setting("a") == []


def test_nested_segments_are_flattened(config: Configuration, app_root: Path) -> None:
    with_root(config, app_root, {"a": {"b": {"c": "*.txt"}}})
    assert config.files_from_setting(["a", ["b"]], "c") == [str(app_root / "x.txt")]


def test_mapping_value_is_type_error(config: Configuration, app_root: Path) -> None:
    with_root(config, app_root, {"a": {"b": {"c": "*.rb"}}})
    with pytest.raises(SettingTypeError) as excinfo:
        config.files_from_setting("a", "b")
    assert excinfo.value.path == ("a", "b")
    assert isinstance(excinfo.value, TypeError)


def test_nested_list_item_is_type_error(config: Configuration, app_root: Path) -> None:
    with_root(config, app_root, {"a": ["*.rb", ["*.txt"]]})
    with pytest.raises(SettingTypeError):
        config.files_from_setting("a")


def test_empty_path_folds_to_root_mapping(config: Configuration, app_root: Path) -> None:
    with_root(config, app_root, {"a": "*.rb"})
    with pytest.raises(SettingTypeError):
        config.files_from_setting()


def test_patterns_anchored_at_root(bridge) -> None:
    seen: list[str] = []

    def fake_glob(pattern: str) -> list[str]:
        seen.append(pattern)
        return ["/app/b.rb", "/app/a.rb"]

    config = Configuration(bridge=bridge, settings={"dialplan": ["*.rb", 7]}, glob_func=fake_glob)
    config.platform.root = "/app"

    assert config.files_from_setting("dialplan") == ["/app/a.rb", "/app/b.rb"]
    assert seen == ["/app/*.rb", "/app/7"]


def test_unset_root_uses_working_directory(
    bridge, app_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(app_root)
    config = Configuration(bridge=bridge, settings={"a": "*.txt"})
    assert config.files_from_setting("a") == [str(Path.cwd() / "x.txt")]


def test_settings_reload_changes_results(config: Configuration, app_root: Path) -> None:
    with_root(config, app_root, {"a": "*.txt"})
    assert config.files_from_setting("a") == [str(app_root / "x.txt")]
    config.load_settings({"b": "*.txt"})
    with pytest.raises(SettingPathNotFoundError):
        config.files_from_setting("a")
