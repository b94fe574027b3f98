"""Runtime settings and YouTube Data API key resolution.

:class:`Settings` is built once at startup by the CLI layer and passed
explicitly to every component that needs it.  The API key is looked up
in the ``YtKey`` environment variable first, then in a ``key = value``
config file.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from tube_u.core.models import MediaMode
from tube_u.core.naming import DEFAULT_TITLE_MAX_LEN
from tube_u.exceptions import ApiKeyNotFoundError

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR: str = "YtKey"
API_KEY_CONFIG_NAME: str = "YtKey"
DEFAULT_CONFIG_PATH: str = "$HOME/config/youtube.keys"

DEFAULT_PAGE_SIZE: int = 50
DEFAULT_FILE_MODE: int = 0o644
DEFAULT_HTTP_TIMEOUT: float = 30.0

_ENV_REF_RE = re.compile(r"\$\{(\w+)\}|\$(\w+)")


@dataclass(frozen=True, slots=True)
class Settings:
    """Process-wide configuration, constructed once."""

    api_key: str
    config_path: str = DEFAULT_CONFIG_PATH
    mode: MediaMode = MediaMode.AUDIO
    page_size: int = DEFAULT_PAGE_SIZE
    title_max_len: int = DEFAULT_TITLE_MAX_LEN
    file_mode: int = DEFAULT_FILE_MODE
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @classmethod
    def from_environment(
        cls,
        *,
        environ: Mapping[str, str] | None = None,
        config_path: str | None = None,
        mode: MediaMode = MediaMode.AUDIO,
    ) -> Settings:
        """Resolve the API key and build settings.

        Raises
        ------
        ApiKeyNotFoundError
            When neither the environment nor the config file supplies a key.
        """
        env = os.environ if environ is None else environ
        path = expand_config_path(config_path or DEFAULT_CONFIG_PATH, env)
        api_key = resolve_api_key(env, path)
        return cls(api_key=api_key, config_path=path, mode=mode)


def expand_config_path(template: str, environ: Mapping[str, str]) -> str:
    """Expand ``$VAR``/``${VAR}`` references in *template* using *environ*.

    Unknown variables expand to the empty string.
    """
    return _ENV_REF_RE.sub(
        lambda match: environ.get(match.group(1) or match.group(2), ""),
        template,
    )


def parse_config(text: str, *, source: str = "<config>") -> dict[str, str]:
    """Parse ``key = value`` lines into a dict.

    Blank lines and ``#`` comments are ignored.  A line needs exactly one
    ``=`` and a non-empty key; anything else is logged and skipped.
    Surrounding quote characters are trimmed from values.
    """
    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        parts = line.split("=")
        if len(parts) != 2 or not parts[0].strip():
            logger.warning("invalid %s config line: %s", source, line)
            continue

        key, value = parts[0].strip(), parts[1].strip()
        values[key] = value.strip("'\"")
    return values


def read_config_file(path: str) -> dict[str, str]:
    """Read and parse *path*; an unreadable file yields an empty dict."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("reading %s: %s", path, exc)
        return {}
    return parse_config(text, source=path)


def resolve_api_key(environ: Mapping[str, str], config_path: str) -> str:
    """Return the API key from *environ* or the file at *config_path*."""
    key = environ.get(API_KEY_ENV_VAR, "")
    if key:
        logger.debug("using API key from $%s", API_KEY_ENV_VAR)
        return key

    key = read_config_file(config_path).get(API_KEY_CONFIG_NAME, "")
    if key:
        logger.debug("using API key from %s", config_path)
        return key

    raise ApiKeyNotFoundError(
        f"No {API_KEY_CONFIG_NAME} provided",
        hint=(
            f"Set the {API_KEY_ENV_VAR} environment variable or add "
            f"'{API_KEY_CONFIG_NAME} = <key>' to {config_path}."
        ),
    )
