import logging

import pytest
from pydantic import ValidationError

from pranair.api.core.config import Settings, check_credentials
from pranair.api.core.errors import ConfigurationError
from pranair.api.core.logging import PHIRedactor


def test_defaults_match_hosted_providers(settings_factory):
    cfg = settings_factory()
    assert cfg.hf_detection_model == "facebook/detr-resnet-50"
    assert cfg.hf_triage_model == "google/gemma-2b-it"
    assert cfg.gemini_model == "gemini-1.5-flash"
    assert cfg.llm_max_retries == 1


def test_unknown_distress_provider_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, DISTRESS_PROVIDER="openai")


def test_check_credentials_warns(settings_factory, caplog):
    cfg = settings_factory(GEMINI_API_KEY="")
    with caplog.at_level(logging.WARNING):
        check_credentials(cfg)
    assert "GEMINI_API_KEY" in caplog.text


def test_check_credentials_strict_mode(settings_factory):
    cfg = settings_factory(HF_API_KEY="", HF_TOKEN="", STRICT_CREDENTIALS=True)
    with pytest.raises(ConfigurationError) as excinfo:
        check_credentials(cfg)
    assert "HF_API_KEY" in str(excinfo.value)
    assert "HF_TOKEN" in str(excinfo.value)


def test_check_credentials_all_present(settings_factory, caplog):
    with caplog.at_level(logging.WARNING):
        check_credentials(settings_factory(STRICT_CREDENTIALS=True))
    assert caplog.text == ""


def test_phi_redactor_masks_contacts():
    record = logging.LogRecord(
        "pranair", logging.INFO, __file__, 1, "caller %s reported via %s", ("+1 415 555 0199", "anna@example.com"), None
    )
    PHIRedactor().filter(record)
    message = record.getMessage()
    assert "555" not in message
    assert "anna@example.com" not in message
    assert message.count("[REDACTED]") == 2


def test_phi_redactor_keeps_mapping_args():
    record = logging.LogRecord(
        "pranair",
        logging.INFO,
        __file__,
        1,
        "caller %(phone)s in %(city)s",
        ({"phone": "+1 415 555 0199", "city": "Lisbon"},),
        None,
    )
    PHIRedactor().filter(record)
    assert isinstance(record.args, dict)
    assert record.getMessage() == "caller [REDACTED] in Lisbon"
