"""CLI command modules. Each exposes ``register_commands(cli)``."""
