"""
config — Runtime configuration for the deploy-labels action.

Action inputs are read from INPUT_* environment variables, the way the
Actions runner passes `with:` values, and validated with pydantic.

Label colours can be overridden with a JSON file.
Search order:
1) $DEPLOY_LABELS_CONFIG (explicit path)
2) <workspace>/.github/deploy-labels.json
3) ~/.deploy-labels/config.json

If no config file exists, built-in defaults are used.
"""

import json
import os
import sys

from pydantic import BaseModel, field_validator


WORKSPACE = os.getenv("GITHUB_WORKSPACE", os.getcwd())

STATUS_LABELS = ("success", "failure", "cancelled", "skipped")

_DEFAULT_CONFIG = {
    "colors": {
        "success": "0E8A16",    # green
        "failure": "D93F0B",    # red
        "cancelled": "DEDEDE",  # gray
        "skipped": "DEDEDE",    # gray
        "current": "FBCA04",    # yellow
        "default": "C1B8FF",    # purple
    },
    "current_label_prefix": "currently-in-",
}


def _candidate_paths():
    env_path = os.getenv("DEPLOY_LABELS_CONFIG")
    return [
        env_path,
        os.path.join(WORKSPACE, ".github", "deploy-labels.json"),
        os.path.expanduser("~/.deploy-labels/config.json"),
    ]


def _load_config(paths=None):
    for path in paths if paths is not None else _candidate_paths():
        if not path:
            continue
        if not os.path.isfile(path):
            continue
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("Config root must be a JSON object")
            return data
        except (OSError, ValueError) as exc:
            print(f"[deploy-labels] Failed to load config at {path}: {exc}", file=sys.stderr)
            break
    return _DEFAULT_CONFIG


def _merge_colors(config):
    colors = dict(_DEFAULT_CONFIG["colors"])
    for key, value in (config.get("colors") or {}).items():
        colors[key.lower()] = str(value).lstrip("#").upper()
    return colors


_CONFIG = _load_config()

COLORS = _merge_colors(_CONFIG)
CURRENT_LABEL_PREFIX = _CONFIG.get("current_label_prefix", _DEFAULT_CONFIG["current_label_prefix"])
DEFAULT_REPO = os.getenv("GITHUB_REPOSITORY", "")


# ── Action inputs ────────────────────────────────────────────────────────

class ActionInputs(BaseModel):
    github_token: str
    environment: str
    deploy_status: str
    issue_number: int
    repository: str
    deployable_type: str | None = None
    current_label_prefix: str = CURRENT_LABEL_PREFIX

    @field_validator("github_token", "environment")
    @classmethod
    def _required(cls, v):
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("deploy_status")
    @classmethod
    def _known_status(cls, v):
        v = v.strip().lower()
        if v not in STATUS_LABELS:
            raise ValueError(f"must be one of: {', '.join(STATUS_LABELS)}")
        return v

    @field_validator("issue_number")
    @classmethod
    def _positive(cls, v):
        if v <= 0:
            raise ValueError("must be a positive issue number")
        return v

    @field_validator("repository")
    @classmethod
    def _owner_and_name(cls, v):
        v = v.strip()
        if v.count("/") != 1 or v.startswith("/") or v.endswith("/"):
            raise ValueError("must look like owner/repo")
        return v


def get_input(name, environ=None):
    """Read one action input. Unset and blank inputs both come back as ''."""
    environ = os.environ if environ is None else environ
    key = "INPUT_" + name.replace(" ", "_").upper()
    return environ.get(key, "").strip()


def read_inputs(environ=None):
    """Build ActionInputs from the runner's INPUT_* variables."""
    environ = os.environ if environ is None else environ
    values = {
        "github_token": get_input("github-token", environ),
        "environment": get_input("environment", environ),
        "deploy_status": get_input("deploy-status", environ),
        "issue_number": get_input("issue-number", environ) or "0",
        "repository": get_input("repository", environ) or environ.get("GITHUB_REPOSITORY", ""),
    }
    deployable_type = get_input("deployable-type", environ)
    if deployable_type:
        values["deployable_type"] = deployable_type
    prefix = get_input("current-label-prefix", environ)
    if prefix:
        values["current_label_prefix"] = prefix
    return ActionInputs(**values)
