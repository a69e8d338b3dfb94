"""Identity provisioning — OS users and groups for component isolation."""
