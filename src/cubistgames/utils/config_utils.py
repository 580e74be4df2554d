import os
from typing import Any, Dict, Optional

import yaml

from cubistgames.schemas import ClientConfig

DEFAULT_PROFILE = "mainnet"


def read_client_config(config: str, base_dir: Optional[str] = None) -> ClientConfig:
    if base_dir is None:
        base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    profiles_file = os.path.join(base_dir, "profiles.yml")
    profiles_private_file = os.path.join(base_dir, "profiles_private.yml")

    with open(profiles_file, 'r') as f:
        config_data = yaml.safe_load(f)

    if os.path.exists(profiles_private_file):
        with open(profiles_private_file, 'r') as f:
            private_config_data = yaml.safe_load(f) or {}
            if 'profiles' in private_config_data:
                # Private profiles win over shipped ones with the same name
                config_data['profiles'] = private_config_data['profiles'] + config_data['profiles']

    for profile in config_data['profiles']:
        if profile.get('name') == config:
            return ClientConfig(**profile)

    raise ValueError(f"No matching configuration found for '{config}'")


def read_env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if os.getenv("CUBIST_API_URL"):
        overrides["api_url"] = os.getenv("CUBIST_API_URL")
    if os.getenv("CUBIST_AUTHORITY"):
        overrides["authority"] = os.getenv("CUBIST_AUTHORITY")
    if os.getenv("CUBIST_BATCH_SIZE"):
        try:
            overrides["batch_size"] = int(os.getenv("CUBIST_BATCH_SIZE"))
        except ValueError:
            raise ValueError(f"CUBIST_BATCH_SIZE must be an integer, got '{os.getenv('CUBIST_BATCH_SIZE')}'") from None
    return overrides


def resolve_client_config(
    config: Optional[str] = None,
    api_url: Optional[str] = None,
    authority: Optional[str] = None,
    batch_size: Optional[int] = None,
    base_dir: Optional[str] = None,
) -> ClientConfig:
    """
    Build the effective configuration.

    Precedence: explicit arguments, then CUBIST_* environment variables,
    then the named profile, then model defaults.
    """
    profile = read_client_config(config or DEFAULT_PROFILE, base_dir=base_dir)
    values = profile.model_dump()
    values.update(read_env_overrides())

    cli_values = {"api_url": api_url, "authority": authority, "batch_size": batch_size}
    values.update({k: v for k, v in cli_values.items() if v is not None})

    resolved = ClientConfig(**values)
    if not resolved.api_url:
        raise ValueError("No API URL configured (use --api-url, CUBIST_API_URL or a profile)")
    if not resolved.authority:
        raise ValueError("No authority configured (use --authority or CUBIST_AUTHORITY)")
    return resolved
