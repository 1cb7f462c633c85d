"""
cli — Argparse entry point: the action run plus one subcommand per label call.
"""

import argparse
import sys
import textwrap

from pydantic import ValidationError

from .actions import info, is_failed, set_failed
from .config import DEFAULT_REPO, CURRENT_LABEL_PREFIX, STATUS_LABELS, read_inputs
from .gh import (
    GhError, list_labels_for_repo, list_labels_for_issue,
    add_label_to_issue, remove_label_from_issue, find_issues_with_label,
)
from .labels import ActionLabels, make_sure_labels_for_this_action_exist, remove_status_labels_from_issue
from .runner import run


def _repo(args):
    repo = args.repo or DEFAULT_REPO
    if "/" not in repo:
        set_failed("A repository (owner/repo) is required: pass --repo or set GITHUB_REPOSITORY.")
        return None
    return repo


# ═════════════════════════════════════════════════════════════════════════════
# COMMANDS
# ═════════════════════════════════════════════════════════════════════════════

def cmd_run(args):
    try:
        inputs = read_inputs()
    except ValidationError as exc:
        set_failed(f"Invalid action inputs: {exc}")
        return
    run(inputs)


def cmd_labels(args):
    repo = _repo(args)
    if repo:
        for name in list_labels_for_repo(repo):
            print(name)


def cmd_ensure(args):
    repo = _repo(args)
    if not repo:
        return
    environment = args.environment.lower()
    labels = ActionLabels(
        deploy_status=args.status,
        currently_in_env=f"{args.prefix}{environment}".lower(),
        default=environment,
    )
    try:
        make_sure_labels_for_this_action_exist(repo, labels)
    except GhError:
        return


def cmd_add(args):
    repo = _repo(args)
    if repo:
        add_label_to_issue(repo, args.name, args.issue)


def cmd_remove(args):
    repo = _repo(args)
    if repo:
        remove_label_from_issue(repo, args.name, args.issue)


def cmd_find(args):
    repo = _repo(args)
    if repo:
        for number in find_issues_with_label(repo, args.label, args.deployable_type):
            print(number)


def cmd_reconcile(args):
    repo = _repo(args)
    if repo:
        existing = list_labels_for_issue(repo, args.issue)
        remove_status_labels_from_issue(repo, existing, args.issue, args.status)


# ═════════════════════════════════════════════════════════════════════════════
# MAIN
# ═════════════════════════════════════════════════════════════════════════════

def build_parser():
    parser = argparse.ArgumentParser(
        prog="deploy-labels",
        description="Keep deployment status labels on GitHub issues up to date.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            Run without arguments inside a workflow step to apply the labels
            described by the INPUT_* variables.

            Manual example:
              python3 -m deploy_labels --repo my-org/my-app \\
                find currently-in-prod --deployable-type api
        """),
    )
    parser.add_argument("--repo", help="owner/repo (default: $GITHUB_REPOSITORY)")
    sub = parser.add_subparsers(dest="command")

    p_run = sub.add_parser("run", help="Apply labels from the action inputs (default)")
    p_run.set_defaults(func=cmd_run)

    p_labels = sub.add_parser("labels", help="List the repository's labels")
    p_labels.set_defaults(func=cmd_labels)

    p_ensure = sub.add_parser("ensure", help="Create the action's labels if missing")
    p_ensure.add_argument("--status", required=True, type=str.lower, choices=STATUS_LABELS)
    p_ensure.add_argument("--environment", required=True)
    p_ensure.add_argument("--prefix", default=CURRENT_LABEL_PREFIX)
    p_ensure.set_defaults(func=cmd_ensure)

    p_add = sub.add_parser("add", help="Add a label to an issue")
    p_add.add_argument("name")
    p_add.add_argument("issue", type=int)
    p_add.set_defaults(func=cmd_add)

    p_remove = sub.add_parser("remove", help="Remove a label from an issue")
    p_remove.add_argument("name")
    p_remove.add_argument("issue", type=int)
    p_remove.set_defaults(func=cmd_remove)

    p_find = sub.add_parser("find", help="List issues carrying a label")
    p_find.add_argument("label")
    p_find.add_argument("--deployable-type")
    p_find.set_defaults(func=cmd_find)

    p_reconcile = sub.add_parser("reconcile", help="Remove stale status labels from an issue")
    p_reconcile.add_argument("issue", type=int)
    p_reconcile.add_argument("--status", required=True, type=str.lower, choices=STATUS_LABELS)
    p_reconcile.set_defaults(func=cmd_reconcile)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    func = getattr(args, "func", cmd_run)
    func(args)
    if is_failed():
        info("The job has been marked as failed.")
        sys.exit(1)
