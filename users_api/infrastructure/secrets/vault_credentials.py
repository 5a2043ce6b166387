"""
Vault credential provider
-------------------------

Role:
- Read the MongoDB username/password from a HashiCorp Vault KV v2 secret.
- Called once during application startup; nothing is cached here.

The secret payload may be stored either as a mapping of string fields or as a
JSON-encoded string holding that mapping.
"""
# Standard library imports
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import urlparse

# External package imports
import hvac
from hvac.exceptions import VaultError
from requests.exceptions import RequestException

# Local application imports
from ...core.config import Settings, get_settings
from ...core.exceptions import CredentialError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatabaseCredentials:
    """Database username/password pair"""
    username: str
    password: str = field(repr=False)


class VaultCredentialProvider:
    """Fetches database credentials from Vault"""

    def __init__(
        self,
        address: str,
        token: str,
        mount_point: str = "secret",
        secret_path: str = "mongodb",
        client: Optional[hvac.Client] = None,
    ) -> None:
        self.address = address
        self.mount_point = mount_point
        self.secret_path = secret_path
        self.client = client if client is not None else self._create_client(address, token)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "VaultCredentialProvider":
        settings = settings or get_settings()
        return cls(
            address=settings.vault_addr,
            token=settings.vault_token,
            mount_point=settings.vault_secret_mount,
            secret_path=settings.vault_secret_path,
        )

    @staticmethod
    def _create_client(address: str, token: str) -> hvac.Client:
        parsed = urlparse(address or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise CredentialError(f"Failed to create Vault client: invalid address {address!r}")
        try:
            return hvac.Client(url=address, token=token)
        except (VaultError, ValueError) as e:
            raise CredentialError(f"Failed to create Vault client: {e}") from e

    def fetch_database_credentials(self) -> DatabaseCredentials:
        """
        Read the database credentials secret

        Returns:
            DatabaseCredentials with username and password

        Raises:
            CredentialError: If the read fails, returns no data, or the
                payload is not an object of string fields with username/password
        """
        try:
            response = self.client.secrets.kv.v2.read_secret_version(
                path=self.secret_path,
                mount_point=self.mount_point,
                raise_on_deleted_version=True,
            )
        except (VaultError, RequestException) as e:
            raise CredentialError(f"Failed to read secret {self._secret_location}: {e}") from e

        payload = self._extract_payload(response)
        credentials = self._parse_credentials(payload)
        logger.info(f"Loaded database credentials from Vault ({self._secret_location})")
        return credentials

    @property
    def _secret_location(self) -> str:
        return f"{self.mount_point}/data/{self.secret_path}"

    def _extract_payload(self, response: Any) -> Any:
        if not isinstance(response, dict):
            raise CredentialError(f"No data in secret {self._secret_location}")
        outer = response.get("data")
        if not isinstance(outer, dict) or outer.get("data") is None:
            raise CredentialError(f"No data in secret {self._secret_location}")
        return outer["data"]

    def _parse_credentials(self, payload: Any) -> DatabaseCredentials:
        if isinstance(payload, str):
            try:
                payload = json.loads(payload)
            except json.JSONDecodeError as e:
                raise CredentialError(f"Secret data is not valid JSON: {e}") from e

        if not isinstance(payload, dict) or not all(
            isinstance(key, str) and isinstance(value, str) for key, value in payload.items()
        ):
            raise CredentialError("Secret data must be an object of string fields")

        values: Dict[str, str] = payload
        username = values.get("username")
        password = values.get("password")
        if not username or not password:
            raise CredentialError("Username or password not found in secret")
        return DatabaseCredentials(username=username, password=password)
