"""Domain services: credentials, account lifecycle and authorization policy."""
