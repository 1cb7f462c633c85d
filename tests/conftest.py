"""Shared pytest fixtures for deploy_labels tests."""

from __future__ import annotations

import json
import subprocess

import pytest

from deploy_labels import actions


class FakeGh:
    """Stand-in for subprocess.run that records gh invocations.

    Responses are matched by checking that every fragment appears as an
    element of the command; the first matching rule wins. Unmatched calls
    succeed with empty output.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self._rules: list[tuple[tuple[str, ...], int, str, str]] = []

    def on(self, *fragments: str, json_body=None, stdout: str = "", returncode: int = 0, stderr: str = "") -> None:
        if json_body is not None:
            stdout = json.dumps(json_body)
        self._rules.append((fragments, returncode, stdout, stderr))

    def fail(self, *fragments: str, stderr: str = "HTTP 422: Validation Failed") -> None:
        self.on(*fragments, returncode=1, stderr=stderr)

    def __call__(self, cmd, capture_output=True, text=True):
        self.calls.append(list(cmd))
        for fragments, returncode, stdout, stderr in self._rules:
            if all(f in cmd for f in fragments):
                return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)
        return subprocess.CompletedProcess(cmd, 0, "", "")

    def calls_with(self, *fragments: str) -> list[list[str]]:
        return [c for c in self.calls if all(f in c for f in fragments)]


@pytest.fixture
def fake_gh(monkeypatch: pytest.MonkeyPatch) -> FakeGh:
    fake = FakeGh()
    monkeypatch.setattr("deploy_labels.gh.subprocess.run", fake)
    return fake


@pytest.fixture(autouse=True)
def clean_job_state(monkeypatch: pytest.MonkeyPatch):
    """Each test starts with a job that hasn't failed and no $GITHUB_OUTPUT."""
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    actions.reset()
    yield
    actions.reset()
