"""
Infrastructure layer for gitspace.

Contains abstractions for external systems:
- GitClient: Git command execution
- SshKeyProvider: SSH private-key credentials

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient, GitResult, classify_failure
from .credentials import CredentialProvider, SshKeyCredential, SshKeyProvider

__all__ = [
    'GitClient',
    'GitResult',
    'classify_failure',
    'CredentialProvider',
    'SshKeyCredential',
    'SshKeyProvider',
]
