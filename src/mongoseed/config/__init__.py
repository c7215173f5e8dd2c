"""Configuration — loader models, TOML/env settings, and logging setup."""
