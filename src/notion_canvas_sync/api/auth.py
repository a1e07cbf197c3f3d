"""Credential storage and authenticated API clients.

Secrets are cached as plaintext files in the per-user config directory and
prompted for on first run. Clients are built once at startup and handed to
the sync driver.
"""

import logging
import os
from pathlib import Path
from typing import Callable

from canvasapi import Canvas
from notion_client import Client

from notion_canvas_sync.config import DEFAULT_CONFIG_DIR, SECRETS


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""


class CredentialStore:
    """Reads secrets from disk, prompting and caching them when missing."""

    def __init__(
        self,
        config_dir: Path | str = DEFAULT_CONFIG_DIR,
        prompt: Callable[[str], str] | None = None,
    ) -> None:
        if prompt is None:
            from notion_canvas_sync.prompts import Prompter

            prompt = Prompter().ask
        self.config_dir = Path(config_dir)
        self.prompt = prompt

    def path_for(self, secret_name: str) -> Path:
        if secret_name not in SECRETS:
            raise ConfigError(f"Unknown secret: {secret_name}")
        return self.config_dir / secret_name

    def get(self, secret_name: str) -> str:
        """Get a secret by file name.

        Args:
            secret_name: One of "notion.key", "canvas.key", "canvas.url"

        Returns:
            The secret, from the environment, the cache file, or the prompt

        Raises:
            ConfigError: When the name is unknown or the answer is empty
            PromptCancelled: When the user cancels the prompt
        """
        path = self.path_for(secret_name)
        env_var, message = SECRETS[secret_name]

        env_value = os.environ.get(env_var, "").strip()
        if env_value:
            logging.debug("Using %s from environment", env_var)
            return env_value

        if path.exists():
            value = path.read_text(encoding="utf-8").strip()
            if value:
                return value
            logging.debug("Ignoring empty secret file %s", path)

        value = self.prompt(message).strip()
        if not value:
            raise ConfigError(f"No value given for {secret_name}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(value, encoding="utf-8")
        logging.info("Saved %s to %s", secret_name, path)
        return value

    def notion_key(self) -> str:
        return self.get("notion.key")

    def canvas_key(self) -> str:
        return self.get("canvas.key")

    def canvas_url(self) -> str:
        return self.get("canvas.url")


def get_canvas_client(store: CredentialStore) -> Canvas:
    """Get authenticated Canvas API client.

    Args:
        store: Credential store holding the Canvas URL and key

    Returns:
        Authenticated canvasapi.Canvas instance
    """
    return Canvas(store.canvas_url(), store.canvas_key())


def get_notion_client(store: CredentialStore) -> Client:
    """Get authenticated Notion API client that only logs errors."""
    return Client(auth=store.notion_key(), log_level=logging.ERROR)
