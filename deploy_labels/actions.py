"""
actions — Workflow-command output for the GitHub Actions runner.

Info lines, collapsible groups, errors, outputs, and the job-failed flag.
"""

import os

# ── Colour constants ─────────────────────────────────────────────────────

DIM     = "\033[2m"
GREEN   = "\033[32m"
RED     = "\033[31m"
RESET   = "\033[0m"

_state = {"failed": False}


def _escape(text):
    return str(text).replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _command(name, message=""):
    print(f"::{name}::{_escape(message)}", flush=True)


# ── Log lines ────────────────────────────────────────────────────────────

def info(message):
    print(message, flush=True)


def warning(message):
    _command("warning", message)


def error(message):
    _command("error", message)


def start_group(title):
    _command("group", title)


def end_group():
    _command("endgroup")


# ── Job status ───────────────────────────────────────────────────────────

def set_failed(message):
    """Report an error and mark the job failed. Work carries on."""
    error(message)
    _state["failed"] = True


def is_failed():
    return _state["failed"]


def reset():
    _state["failed"] = False


def set_output(name, value):
    """Append an output to $GITHUB_OUTPUT, or just log it outside the runner."""
    path = os.getenv("GITHUB_OUTPUT")
    if not path:
        info(f"  {DIM}output {name}={value}{RESET}")
        return
    with open(path, "a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")
