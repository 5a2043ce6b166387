from .vault_credentials import DatabaseCredentials, VaultCredentialProvider

__all__ = [
    "DatabaseCredentials",
    "VaultCredentialProvider",
]
