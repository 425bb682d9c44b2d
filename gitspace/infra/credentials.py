"""
Credential providers for gitspace.

A CredentialProvider answers one question: given the username taken from a
remote URI, which credential should authenticate the connection? Providers
are injected into the fetcher instead of being captured by callbacks.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Union

from ..exit_codes import AuthError


@dataclass(frozen=True)
class SshKeyCredential:
    """An SSH private key (no passphrase) for a given remote username."""
    username: str
    private_key: Path


class CredentialProvider(Protocol):
    def resolve(self, username: str) -> SshKeyCredential:
        ...


class SshKeyProvider:
    """
    Resolves every username to the same private key file.

    The key is only checked for existence and readability; its bytes are
    handed to ssh untouched.

    Example:
        provider = SshKeyProvider("~/.ssh/id_ed25519")
        credential = provider.resolve("git")
    """

    def __init__(self, key_path: Union[str, Path]):
        self.key_path = Path(key_path).expanduser()

    def resolve(self, username: str) -> SshKeyCredential:
        if not self.key_path.is_file():
            raise AuthError(f"SSH key not found: {self.key_path}")
        if not os.access(self.key_path, os.R_OK):
            raise AuthError(f"SSH key is not readable: {self.key_path}")
        return SshKeyCredential(username=username, private_key=self.key_path)
