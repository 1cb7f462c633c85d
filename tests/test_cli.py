"""Tests for the deploy-labels command line."""

from __future__ import annotations

import shlex

import pytest

from deploy_labels.cli import build_parser, main
from tests._helpers import issues_response, label_page


@pytest.fixture(autouse=True)
def repo_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("deploy_labels.cli.DEFAULT_REPO", "acme/shop")
    monkeypatch.setenv("GH_TOKEN", "unset")


def test_labels_prints_one_name_per_line(fake_gh, capsys) -> None:
    fake_gh.on("page=1", json_body=label_page("Bug", "prod"))
    main(["labels"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[-2:] == ["bug", "prod"]


def test_repo_flag_overrides_default(fake_gh) -> None:
    fake_gh.on("page=1", json_body=[])
    main(["--repo", "acme/other", "labels"])
    assert "repos/acme/other/labels" in fake_gh.calls[0]


def test_find_prints_issue_numbers(fake_gh, capsys) -> None:
    fake_gh.on("graphql", json_body=issues_response((5, "API"), (6, "Web")))
    main(["find", "currently-in-prod", "--deployable-type", "web"])
    assert capsys.readouterr().out.splitlines()[-1] == "6"


def test_add_and_remove(fake_gh) -> None:
    main(["add", "qa", "8"])
    main(["remove", "qa", "8"])
    assert "labels[]=qa" in fake_gh.calls[0]
    assert fake_gh.calls[1][-1] == "repos/acme/shop/issues/8/labels/qa"


def test_reconcile_uses_issue_labels(fake_gh) -> None:
    fake_gh.on("--method", "GET", "repos/acme/shop/issues/8/labels", json_body=label_page("success", "skipped"))
    main(["reconcile", "8", "--status", "SKIPPED"])
    deletes = fake_gh.calls_with("DELETE")
    assert [c[-1] for c in deletes] == ["repos/acme/shop/issues/8/labels/success"]


def test_ensure_creates_missing_labels(fake_gh) -> None:
    fake_gh.on("page=1", json_body=label_page("success"))
    main(["ensure", "--status", "success", "--environment", "QA"])
    created = [c for c in fake_gh.calls if "name=currently-in-qa" in c or "name=qa" in c]
    assert len(created) == 2


def test_failed_job_exits_nonzero(fake_gh) -> None:
    fake_gh.fail("labels[]=qa")
    with pytest.raises(SystemExit) as exc:
        main(["add", "qa", "8"])
    assert exc.value.code == 1


def test_invalid_action_inputs_fail_the_job(fake_gh, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.delenv("INPUT_GITHUB-TOKEN", raising=False)
    monkeypatch.setenv("INPUT_DEPLOY-STATUS", "sideways")
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 1
    assert "::error::Invalid action inputs" in capsys.readouterr().out
    assert fake_gh.calls == []


def test_missing_repository_fails(fake_gh, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("deploy_labels.cli.DEFAULT_REPO", "")
    with pytest.raises(SystemExit):
        main(["labels"])
    assert fake_gh.calls == []


def test_help_example_parses() -> None:
    parser = build_parser()
    example = parser.epilog.split("Manual example:", 1)[1].replace("\\\n", " ")
    argv = shlex.split(example)[3:]  # drop "python3 -m deploy_labels"
    args = parser.parse_args(argv)
    assert args.repo == "my-org/my-app"
    assert args.label == "currently-in-prod"
    assert args.deployable_type == "api"
