"""Bundled static files seeded into the managed resources directory."""
