"""pocket core: configuration, errors, domain models and pure services."""
