"""YAML configuration, credentials and region-list loading."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from dotenv import dotenv_values

from ecswipe.core.errors import ConfigError
from ecswipe.operations import DEFAULT_OPERATION as _DEFAULT_OPERATION, OPERATIONS

DEFAULT_ENV_FILE = '.env'
DEFAULT_REGIONS_FILE = 'regions.txt'
DEFAULT_OPERATION = _DEFAULT_OPERATION.name

REQUIRED_ENV_VARS = ('AWS_ACCESS_KEY_ID', 'AWS_SECRET_ACCESS_KEY', 'AWS_REGION')


@dataclass(frozen=True)
class Credentials:
    """Explicit AWS credentials, passed to the client provider."""
    access_key_id: str
    secret_access_key: str
    region: str
    session_token: Optional[str] = None

    def __repr__(self):
        return f"Credentials(access_key_id={self.access_key_id!r}, region={self.region!r})"


@dataclass
class Config:
    """ecswipe configuration."""
    operation: str = DEFAULT_OPERATION
    region: Optional[str] = None
    regions_file: str = DEFAULT_REGIONS_FILE
    env_file: str = DEFAULT_ENV_FILE
    dry_run: bool = False
    json_logs: bool = False
    verbosity: int = 1


def load_config(path: Optional[str] = None) -> Config:
    """Load config from YAML file or return defaults.

    Args:
        path: Path to YAML config file. If None, returns default config.

    Returns:
        Config instance

    Raises:
        ConfigError: If the file doesn't exist or isn't a valid YAML mapping
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(config_path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return _parse_config(data)


def _parse_config(data: Dict[str, Any]) -> Config:
    """Parse config dict into Config dataclass."""
    operation = data.get('operation', DEFAULT_OPERATION)
    if operation not in OPERATIONS:
        raise ConfigError(f"Unknown operation {operation!r}; expected one of {', '.join(OPERATIONS)}")

    return Config(
        operation=operation,
        region=data.get('region'),
        regions_file=data.get('regions_file', DEFAULT_REGIONS_FILE),
        env_file=data.get('env_file', DEFAULT_ENV_FILE),
        dry_run=bool(data.get('dry_run', False)),
        json_logs=bool(data.get('json_logs', False)),
        verbosity=int(data.get('verbosity', 1)),
    )


def load_credentials(env_file: Optional[str] = DEFAULT_ENV_FILE,
                     environ: Optional[Mapping[str, str]] = None) -> Credentials:
    """Read AWS credentials from the environment, falling back to ``env_file``.

    Values already present in the process environment take precedence over
    the env file. Nothing is written back to ``os.environ``.

    Raises:
        ConfigError: If any of the required variables is missing or empty
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Optional[str]] = {}
    if env_file and Path(env_file).is_file():
        values.update(dotenv_values(env_file))
    values.update({k: v for k, v in environ.items() if v})

    missing = [name for name in REQUIRED_ENV_VARS if not values.get(name)]
    if missing:
        raise ConfigError(f"Missing required credentials: {', '.join(missing)}")

    return Credentials(
        access_key_id=values['AWS_ACCESS_KEY_ID'],
        secret_access_key=values['AWS_SECRET_ACCESS_KEY'],
        region=values['AWS_REGION'],
        session_token=values.get('AWS_SESSION_TOKEN') or None,
    )


def load_regions(path: str = DEFAULT_REGIONS_FILE) -> List[str]:
    """Read a newline-delimited region list.

    Lines are stripped, blank lines skipped and repeated regions kept once,
    in first-seen order.

    Raises:
        ConfigError: If the file can't be read or lists no regions
    """
    try:
        text = Path(path).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read regions file {path}: {e}") from e

    regions: List[str] = []
    for line in text.splitlines():
        region = line.strip()
        if region and region not in regions:
            regions.append(region)

    if not regions:
        raise ConfigError(f"Regions file {path} lists no regions")
    return regions
