"""Message catalog configuration: bundled defaults plus an optional override file."""

import os
import logging
import urllib.parse
import urllib.request
from importlib.resources import files
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads the default rule messages, optionally overridden by a user file."""

    BUNDLED_MESSAGES = "default-messages.yaml"

    # Environment variable naming an override file or URI
    MESSAGES_ENV_VAR = "OBJECT_VALIDATOR_MESSAGES"

    def __init__(self, messages_uri: Optional[str] = None):
        """
        Initialize config loader with the bundled default-messages.yaml.

        Args:
            messages_uri: Optional path or URI of a YAML file whose ``messages``
                section replaces individual default templates. Falls back to
                the OBJECT_VALIDATOR_MESSAGES environment variable.

        Raises:
            ValueError: If a config file is malformed or the URI scheme is unsupported
            RuntimeError: If a remote override cannot be fetched
        """
        config_file = files("object_validator").joinpath(self.BUNDLED_MESSAGES)
        with config_file.open("r") as f:
            bundled = yaml.safe_load(f)

        self.messages: Dict[str, str] = dict(self._messages_section(bundled, self.BUNDLED_MESSAGES))

        self.messages_uri = messages_uri or os.environ.get(self.MESSAGES_ENV_VAR)
        if self.messages_uri:
            override = self._load_config_from_uri(self.messages_uri)
            overrides = self._messages_section(override, self.messages_uri)
            logger.debug(f"Overriding {len(overrides)} default messages from {self.messages_uri}")
            self.messages.update(overrides)

    def _messages_section(self, config: Any, source: str) -> Dict[str, str]:
        """Extract and check the ``messages`` mapping of a loaded config."""
        if not isinstance(config, dict) or not isinstance(config.get("messages"), dict):
            raise ValueError(f"Config {source} must contain a 'messages' mapping")
        section = config["messages"]
        for rule_name, template in section.items():
            if not isinstance(template, str):
                raise ValueError(
                    f"Message for rule '{rule_name}' in {source} must be a string"
                )
        return section

    def _load_config_from_uri(self, uri: str) -> Any:
        """
        Load YAML config from a URI.

        Supports:
        - Relative or absolute paths (resolved against the working directory)
        - file:// - Local filesystem
        - https:// and http:// - Remote
        """
        parsed = urllib.parse.urlparse(uri)

        if not parsed.scheme:
            with open(os.path.abspath(uri)) as f:
                return yaml.safe_load(f)

        if parsed.scheme == "file":
            with open(urllib.parse.unquote(parsed.path)) as f:
                return yaml.safe_load(f)

        if parsed.scheme in ("http", "https"):
            return yaml.safe_load(fetch_uri(uri))

        raise ValueError(f"Unsupported URI scheme: {parsed.scheme} in {uri}")

    def get_message_template(self, rule_name: str) -> str:
        """
        Get the default message template of a built-in rule.

        Raises:
            KeyError: If no template is configured for the rule
        """
        return self.messages[rule_name]

    def get_messages(self) -> Dict[str, str]:
        """Get a copy of all configured message templates."""
        return dict(self.messages)


def fetch_uri(uri: str) -> str:
    """Fetch text content from an HTTP/HTTPS URI."""
    try:
        with urllib.request.urlopen(uri, timeout=10) as response:
            return response.read().decode("utf-8")
    except Exception as e:
        raise RuntimeError(f"Failed to fetch {uri}: {e}") from e


_config: Optional[ConfigLoader] = None


def get_config(messages_uri: Optional[str] = None) -> ConfigLoader:
    """Get or initialize the singleton ConfigLoader."""
    global _config
    if _config is None:
        _config = ConfigLoader(messages_uri)
    return _config


def reset_config():
    """Reset the singleton config (for testing)."""
    global _config
    _config = None
