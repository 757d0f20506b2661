import logging

import pytest

from dialframe.config import PLATFORM, Configuration, OptionSet


def test_resolve_creates_once_and_preserves_identity(config: Configuration) -> None:
    first = config.resolve("voicemail")
    second = config.resolve("voicemail")
    assert isinstance(first, OptionSet)
    assert first is second
    assert config.all_names().count("voicemail") == 1


def test_index_and_attribute_access_share_instance(config: Configuration) -> None:
    options = config.resolve("voicemail", lambda c: c.declare("greeting", "hello.wav"))
    assert config["voicemail"] is options
    assert config.voicemail is options
    assert config.access("voicemail") is options
    assert config.voicemail.greeting == "hello.wav"


def test_platform_aliases(config: Configuration) -> None:
    platform = config.platform
    assert config[None] is platform
    assert config[PLATFORM] is platform
    assert config[""] is platform
    assert config.resolve(None) is platform


def test_mutation_applies_to_existing_instance(config: Configuration) -> None:
    config.resolve("voicemail", lambda c: c.declare("greeting", "hello.wav"))
    handle = config.voicemail
    config.resolve("voicemail", lambda c: c.declare("timeout", 30))

    assert handle.to_dict() == {"greeting": "hello.wav", "timeout": 30}


def test_mutations_visible_through_other_handles(config: Configuration) -> None:
    one = config["queue"]
    two = config.queue
    one.declare("size", 5)
    assert two.size == 5


def test_private_names_are_not_namespaces(config: Configuration) -> None:
    with pytest.raises(AttributeError):
        getattr(config, "_missing")
    assert "_missing" not in config.all_names()


def test_get_does_not_create(config: Configuration) -> None:
    assert config.get("ghost") is None
    assert "ghost" not in config
    config.ghost
    assert "ghost" in config


def test_all_names_in_creation_order(config: Configuration) -> None:
    config.resolve("zeta")
    config["alpha"]
    config.beta
    config.resolve("zeta")
    assert config.all_names() == ["platform", "zeta", "alpha", "beta"]


def test_platform_defaults(config: Configuration) -> None:
    platform = config.platform
    assert platform.root is None
    assert config.root is None
    assert platform.automatically_accept_incoming_calls is True
    assert platform.logging.level == "info"
    assert platform.logging.outputters is None
    assert platform.logging.formatter is None
    assert len(platform.logging.formatters) == 1
    assert isinstance(platform.logging.formatters[0], logging.Formatter)


def test_plugins_override_platform_values_without_replacing(config: Configuration) -> None:
    platform = config.platform
    config.configure_platform(lambda c: c.declare("root", "/srv/app"))
    assert config.platform is platform
    assert config.root == "/srv/app"
    assert platform.automatically_accept_incoming_calls is True


def test_custom_platform_declaration() -> None:
    config = Configuration(platform=lambda c: c.declare("root", "/opt/app", desc="Root"))
    assert config.platform.to_dict() == {"root": "/opt/app"}
    assert config.root == "/opt/app"


def test_settings_absent_until_loaded(config: Configuration) -> None:
    assert config.settings is None


def test_settings_replaced_not_merged(config: Configuration) -> None:
    config.load_settings({"paths": {"dialplan": "dialplan.rb"}})
    assert config.settings.to_python() == {"paths": {"dialplan": "dialplan.rb"}}

    config.load_settings({"paths": {"events": "events.rb"}})
    assert config.settings.to_python() == {"paths": {"events": "events.rb"}}


def test_settings_from_yaml_text() -> None:
    config = Configuration(settings="paths:\n  dialplan: dialplan.rb\n")
    assert config.settings.to_python() == {"paths": {"dialplan": "dialplan.rb"}}
