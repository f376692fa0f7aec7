"""Core exposure engine: validation, settings, registry and orchestration."""
