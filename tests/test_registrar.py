"""
Registrar Tests

Registration of the built-in publication and repository declarations.
"""

import pytest

from pubconfig.config import DEFAULT_CONFIG
from pubconfig.errors import ConfigurationError, RegistrationError
from pubconfig.models import ATTACH_ALWAYS, Component, PublicationTarget
from pubconfig.creds import LiteralSource
from pubconfig.registrar import configure_publishing, register_publication, register_repository

SOLO_URL = "https://maven.solo-studios.ca/releases/"
REPSY_URL = "https://repo.repsy.io/mvn/diytechy/terra"


def test_registers_one_publication(registry, components, java_component):
    configure_publishing(registry, {}, components, environ={})

    publications = registry.list_publications()
    assert len(publications) == 1
    assert publications[0].identifier == "mavenJava"
    assert publications[0].component is java_component


def test_registers_two_repositories_with_literal_urls(registry, components):
    configure_publishing(registry, {}, components, environ={})

    assert [(r.name, r.url) for r in registry.list_repositories()] == [
        ("maven", SOLO_URL),
        ("Repsy", REPSY_URL),
    ]


def test_repsy_property_beats_environment(registry, components):
    configure_publishing(registry, {"repsy.user": "alice", "repsy.key": "k"}, components,
                         environ={"REPSY_USERNAME": "bob", "REPSY_PASSWORD": "env-key"})

    credentials = registry.get_repository("Repsy").credentials
    assert credentials.username == "alice"
    assert credentials.password == "k"
    assert registry.get_repository("Repsy").authenticated


def test_repsy_environment_fallback(registry, components):
    configure_publishing(registry, {}, components, environ={"REPSY_USERNAME": "bob"})

    repsy = registry.get_repository("Repsy")
    assert repsy.credentials.username == "bob"
    assert repsy.credentials.password == ""
    assert not repsy.authenticated


def test_repsy_always_gets_a_credentials_block(registry, components):
    configure_publishing(registry, {}, components, environ={})

    repsy = registry.get_repository("Repsy")
    assert repsy.credentials is not None
    assert repsy.credentials.username == ""
    assert not repsy.authenticated


def test_solo_studios_needs_both_properties(registry, components):
    configure_publishing(registry, {"SoloStudiosReleasesUsername": "user"}, components, environ={})

    assert registry.get_repository("maven").credentials is None


def test_solo_studios_authenticated_with_both_properties(registry, components):
    properties = {
        "SoloStudiosReleasesUsername": "user",
        "SoloStudiosReleasesPassword": "pass",
    }
    configure_publishing(registry, properties, components, environ={})

    maven = registry.get_repository("maven")
    assert maven.authenticated
    assert maven.credentials.username == "user"


def test_solo_studios_empty_username_property_is_unauthenticated(registry, components):
    properties = {
        "SoloStudiosReleasesUsername": "",
        "SoloStudiosReleasesPassword": "pass",
    }
    configure_publishing(registry, properties, components, environ={})

    assert registry.get_repository("maven").credentials is None


def test_repsy_empty_property_falls_through_to_environment(registry, components):
    configure_publishing(registry, {"repsy.user": ""}, components,
                         environ={"REPSY_USERNAME": "bob"})

    assert registry.get_repository("Repsy").credentials.username == "bob"


@pytest.mark.parametrize("publication", ["mavenJava", ["mavenJava"], 42])
def test_publication_must_be_a_mapping(registry, components, publication):
    config = {"publication": publication, "repositories": []}

    with pytest.raises(ConfigurationError) as excinfo:
        configure_publishing(registry, {}, components, environ={}, config=config)

    assert excinfo.value.context["config_path"] == "publication"
    assert registry.list_publications() == []


def test_solo_studios_ignores_environment(registry, components):
    configure_publishing(registry, {}, components, environ={
        "SoloStudiosReleasesUsername": "user",
        "SoloStudiosReleasesPassword": "pass",
    })

    assert not registry.get_repository("maven").authenticated


def test_missing_component(registry):
    with pytest.raises(ConfigurationError):
        configure_publishing(registry, {}, {}, environ={})


def test_duplicate_publication_rejected(registry, java_component):
    register_publication(registry, "mavenJava", java_component)

    with pytest.raises(RegistrationError):
        register_publication(registry, "mavenJava", Component("java"))


def test_register_repository_always_policy(registry):
    target = PublicationTarget(
        name="local",
        url="file:///tmp/repo",
        username_sources=(LiteralSource("me"),),
        attach_policy=ATTACH_ALWAYS,
        default="",
    )

    entry = register_repository(registry, target)

    assert entry.credentials.username == "me"
    assert entry.credentials.password == ""
    assert registry.get_repository("local") is entry


def test_repository_reregistration_replaces_entry(registry):
    target = PublicationTarget(name="local", url="file:///a")
    register_repository(registry, target)
    register_repository(registry, PublicationTarget(name="local", url="file:///b"))

    assert [r.url for r in registry.list_repositories()] == ["file:///b"]


def test_default_config_is_not_mutated(registry, components):
    config = {"publication": {"name": "custom", "component": "java"}, "repositories": []}
    configure_publishing(registry, {}, components, environ={}, config=config)

    assert registry.has_publication("custom")
    assert DEFAULT_CONFIG["publication"]["name"] == "mavenJava"


def test_summary_masks_passwords(registry, components):
    configure_publishing(registry, {"repsy.user": "alice", "repsy.key": "hunter2"},
                         components, environ={})

    summary = registry.summary()
    repsy = summary["repositories"][1]
    assert repsy["credentials"] == {"username": "alice", "password": "***MASKED***"}
    assert "hunter2" not in str(summary)
