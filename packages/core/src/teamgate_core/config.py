import os
from pathlib import Path
from typing import Optional

import yaml

from teamgate_core.errors import InvalidConfiguration

DEFAULT_CONFIG: dict = {
    "team_name": None,
    "org": None,  # None = owner of the repository being checked
    "required_approvals": 1,
    "status_context": "teamgate/team-approval",
    "report": ["status", "output"],  # any of "status", "output"
    "fail_on_unsatisfied": False,
}

KNOWN_REPORTERS = ("status", "output")

# GitHub Actions exposes `with:` inputs as INPUT_<NAME> environment variables.
_ACTION_INPUTS = {
    "team_name": "INPUT_TEAM_NAME",
    "required_approvals": "INPUT_REQUIRED_APPROVALS",
    "org": "INPUT_ORG",
}


def load_config(config_path: str = ".teamgate.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .teamgate.yml in the current directory
      3. GitHub Actions inputs (INPUT_* environment variables)
      4. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG, "report": list(DEFAULT_CONFIG["report"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            try:
                file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise InvalidConfiguration(f"{config_path} is not valid YAML: {e}") from e
        if not isinstance(file_config, dict):
            raise InvalidConfiguration(f"{config_path} must contain a mapping, got {type(file_config).__name__}.")
        config.update(file_config)

    for key, env_var in _ACTION_INPUTS.items():
        value = os.environ.get(env_var)
        if value:
            config[key] = value

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config


def validate_required_approvals(value) -> int:
    """Return the approval threshold as a non-negative int or raise InvalidConfiguration."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidConfiguration("required_approvals is not set.")
    # bool is an int subclass; `true` in YAML is almost certainly a mistake.
    if isinstance(value, bool):
        raise InvalidConfiguration(f"required_approvals must be an integer, got {value!r}.")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        try:
            number = int(value.strip(), 10)
        except ValueError:
            raise InvalidConfiguration(f"required_approvals must be an integer, got {value!r}.") from None
    else:
        raise InvalidConfiguration(f"required_approvals must be an integer, got {value!r}.")
    if number < 0:
        raise InvalidConfiguration(f"required_approvals must not be negative, got {number}.")
    return number


def validate_config(config: dict) -> dict:
    """Normalise a loaded config in place and return it.

    Runs before any GitHub call so that a misconfigured workflow fails
    without spending API quota.
    """
    team = config.get("team_name")
    if not team or not str(team).strip():
        raise InvalidConfiguration("team_name is not set.")
    config["team_name"] = str(team).strip()

    config["required_approvals"] = validate_required_approvals(config.get("required_approvals"))

    reporters = config.get("report") or []
    if isinstance(reporters, str):
        reporters = [r.strip() for r in reporters.split(",") if r.strip()]
    if not isinstance(reporters, (list, tuple)):
        raise InvalidConfiguration(f"report must be a list of reporter names, got {reporters!r}.")
    unknown = [str(r) for r in reporters if r not in KNOWN_REPORTERS]
    if unknown:
        raise InvalidConfiguration(
            f"Unknown reporter(s): {', '.join(unknown)}. Choose from {', '.join(KNOWN_REPORTERS)}."
        )
    config["report"] = list(reporters)

    return config
