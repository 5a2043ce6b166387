"""Infrastructure adapters: MongoDB persistence and Vault secrets."""
