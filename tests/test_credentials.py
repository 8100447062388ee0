"""Tests for credential parsing and lookup."""

import json

import pytest

from tax_invoice_api.config import constants
from tax_invoice_api.core.credentials import CredentialStore, parse_credentials
from tax_invoice_api.core.exceptions import ConfigurationError

from conftest import CREDENTIALS_JSON


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_missing_config_is_not_configured(raw):
    with pytest.raises(ConfigurationError) as exc_info:
        parse_credentials(raw)
    assert exc_info.value.message == constants.MSG_SERVER_NOT_CONFIGURED
    assert exc_info.value.status_code == 500


@pytest.mark.parametrize("raw", ["not json", "{\"email\": \"a@b.c\"}", "\"text\"", "42"])
def test_invalid_config_does_not_leak_parse_details(raw):
    with pytest.raises(ConfigurationError) as exc_info:
        parse_credentials(raw)
    assert exc_info.value.message == constants.MSG_INVALID_SERVER_CONFIG
    assert exc_info.value.details is None


def test_malformed_entries_are_skipped():
    raw = json.dumps([
        {"email": "good@example.com", "password": "pw"},
        {"email": "no-password@example.com"},
        {"email": 5, "password": "pw"},
        "not an object",
    ])
    credentials = parse_credentials(raw)
    assert [c.email for c in credentials] == ["good@example.com"]


def test_email_is_case_insensitive():
    store = CredentialStore(CREDENTIALS_JSON)
    assert store.is_valid("staff@example.com", "S3cret!")
    assert store.is_valid("STAFF@EXAMPLE.COM", "S3cret!")


def test_password_is_case_sensitive():
    store = CredentialStore(CREDENTIALS_JSON)
    assert not store.is_valid("staff@example.com", "s3cret!")


def test_password_must_belong_to_the_same_entry():
    store = CredentialStore(CREDENTIALS_JSON)
    assert store.is_valid("owner@example.com", "owner-pass")
    assert not store.is_valid("owner@example.com", "S3cret!")
    assert not store.is_valid("nobody@example.com", "S3cret!")


def test_duplicate_emails_any_entry_matches():
    raw = json.dumps([
        {"email": "dup@example.com", "password": "first"},
        {"email": "DUP@example.com", "password": "second"},
    ])
    store = CredentialStore(raw)
    assert store.is_valid("dup@example.com", "first")
    assert store.is_valid("dup@example.com", "second")


def test_store_raises_on_use_when_unconfigured():
    store = CredentialStore(None)
    assert not store.is_configured
    with pytest.raises(ConfigurationError):
        store.is_valid("staff@example.com", "S3cret!")


def test_empty_array_rejects_everyone():
    store = CredentialStore("[]")
    assert store.is_configured
    assert not store.is_valid("staff@example.com", "S3cret!")
