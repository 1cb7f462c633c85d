"""
deploy_labels — Deployment status labels for GitHub issues, run from CI.

Usage:
    python3 -m deploy_labels              # apply labels from INPUT_* variables
    python3 -m deploy_labels find ...     # one-off label calls
    python3 -m deploy_labels --help       # CLI flags reference

Requires: gh CLI, authenticated through GH_TOKEN or `gh auth login`.
"""

from .cli import main
