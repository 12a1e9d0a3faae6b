"""
Credential storage backends.
"""

from .credential_store import CredentialStore, MemoryCredentialStore, SessionStateCredentialStore

__all__ = [
    'CredentialStore',
    'MemoryCredentialStore',
    'SessionStateCredentialStore'
]
