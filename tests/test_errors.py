"""Error context tests."""

from pubconfig.errors import ConfigurationError, RegistrationError, format_error_context


def test_context_skips_missing_named_fields():
    error = ConfigurationError("Bad repository", config_path="repositories[0]", available=["java"])

    assert error.context == {"available": ["java"], "config_path": "repositories[0]"}
    assert str(error) == "Bad repository (Context: available=['java'], config_path=repositories[0])"


def test_message_without_context():
    assert str(ConfigurationError("Bad repository")) == "Bad repository"


def test_format_error_context():
    error = RegistrationError("Duplicate", entry_type="publication", entry_name="mavenJava")

    assert format_error_context(error) == {
        "error_type": "RegistrationError",
        "message": "Duplicate",
        "context": {"entry_type": "publication", "entry_name": "mavenJava"},
    }
    assert format_error_context(ValueError("boom")) == {
        "error_type": "ValueError",
        "message": "boom",
        "context": {},
    }
