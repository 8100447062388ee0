"""Credential store backed by a JSON configuration value.

The value is a JSON array of ``{"email": ..., "password": ...}`` objects.
It is parsed on first use and cached for the process lifetime.
"""

import hmac
import json
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from tax_invoice_api.config import constants
from tax_invoice_api.core.exceptions import ConfigurationError
from tax_invoice_api.core.logger import setup_logger
from tax_invoice_api.models.auth import Credential

logger = setup_logger(__name__)


def parse_credentials(raw_config: Optional[str]) -> List[Credential]:
    """
    Parse the configured credential list.

    Args:
        raw_config: JSON text from configuration (None or empty = not configured)

    Raises:
        ConfigurationError: If the value is missing, not JSON, or not an array

    Returns:
        Valid credential entries in configuration order
    """
    if not raw_config or not raw_config.strip():
        logger.error("Order report credentials are not configured")
        raise ConfigurationError(constants.MSG_SERVER_NOT_CONFIGURED)

    try:
        data = json.loads(raw_config)
    except json.JSONDecodeError as e:
        logger.error(f"Order report credentials are not valid JSON: {e}")
        raise ConfigurationError(constants.MSG_INVALID_SERVER_CONFIG) from None

    if not isinstance(data, list):
        logger.error(
            f"Order report credentials must be a JSON array, got {type(data).__name__}"
        )
        raise ConfigurationError(constants.MSG_INVALID_SERVER_CONFIG)

    credentials = []
    for index, item in enumerate(data):
        try:
            credentials.append(Credential.model_validate(item, strict=True))
        except PydanticValidationError:
            logger.warning(f"Skipping malformed credential entry at index {index}")

    logger.info(f"Loaded {len(credentials)} order report credential(s)")
    return credentials


class CredentialStore:
    """Lookup predicate over the configured credential list."""

    def __init__(self, raw_config: Optional[str]):
        self._raw_config = raw_config
        self._credentials: Optional[List[Credential]] = None

    def load(self) -> List[Credential]:
        """Parse once and cache. Raises ConfigurationError on bad config."""
        if self._credentials is None:
            self._credentials = parse_credentials(self._raw_config)
        return self._credentials

    def is_valid(self, email: str, password: str) -> bool:
        """
        Check an email/password pair.

        Email matches case-insensitively, password exactly.
        Any matching entry authenticates.
        """
        wanted_email = email.strip().casefold()
        for credential in self.load():
            if credential.email.strip().casefold() != wanted_email:
                continue
            if hmac.compare_digest(credential.password.encode("utf-8"), password.encode("utf-8")):
                return True
        return False

    @property
    def is_configured(self) -> bool:
        return bool(self._raw_config and self._raw_config.strip())
