"""API key handling for the MicroJPEG SDK."""

import base64
from typing import Dict, Optional

import keyring
from keyring.errors import KeyringError

from .exceptions import ArgumentError


def basic_auth_header(api_key: str) -> Dict[str, str]:
    """Build the Authorization header the API expects.

    The key is sent as the password of HTTP Basic auth with ``api`` as the
    user name.
    """
    try:
        credentials = f"api:{api_key}".encode("ascii")
    except UnicodeEncodeError as e:
        raise ArgumentError("API key must contain only ASCII characters") from e
    token = base64.b64encode(credentials).decode("ascii")
    return {"Authorization": f"Basic {token}"}


class SecureAPIKeyManager:
    """Manages API keys in the OS keychain."""

    SERVICE_NAME = "microjpeg"
    KEY_PREFIX = "MJ_API_"

    def _username(self, key_name: str) -> str:
        return f"{self.KEY_PREFIX}{key_name}"

    def store_api_key(self, key_name: str, api_key: str) -> bool:
        """Store API key in the OS keychain.

        Args:
            key_name: Name/identifier for the key
            api_key: The API key to store

        Returns:
            True if stored successfully
        """
        try:
            keyring.set_password(self.SERVICE_NAME, self._username(key_name), api_key)
        except KeyringError:
            return False
        return True

    def retrieve_api_key(self, key_name: str = "default") -> Optional[str]:
        """Retrieve API key from the OS keychain.

        Args:
            key_name: Name/identifier for the key

        Returns:
            API key if found, None otherwise (including when no keychain
            backend is available)
        """
        try:
            return keyring.get_password(self.SERVICE_NAME, self._username(key_name))
        except KeyringError:
            return None

    def delete_api_key(self, key_name: str) -> bool:
        """Delete API key from the OS keychain.

        Returns:
            True if a key was deleted
        """
        try:
            keyring.delete_password(self.SERVICE_NAME, self._username(key_name))
        except KeyringError:
            return False
        return True
