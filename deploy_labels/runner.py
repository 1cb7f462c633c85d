"""
runner — End-to-end label update for one deployment run.
"""

import os
from dataclasses import dataclass, field

from .actions import GREEN, RESET, info, is_failed, set_output
from .gh import (
    GhError, add_label_to_issue, remove_label_from_issue,
    find_issues_with_label, list_labels_for_issue,
)
from .labels import (
    ActionLabels, build_labels,
    make_sure_labels_for_this_action_exist, remove_status_labels_from_issue,
)


@dataclass
class RunResult:
    labels: ActionLabels
    moved_from: list = field(default_factory=list)
    failed: bool = False


def move_current_label(repo, labels, issue_number, deployable_type=None):
    """Take the currently-in-env label off every other issue and onto this one."""
    moved_from = []
    # A label created during this run can't be on any issue yet.
    others = []
    if labels.currently_in_env_exists:
        others = find_issues_with_label(repo, labels.currently_in_env, deployable_type)
    for other in others:
        if other == issue_number:
            continue
        remove_label_from_issue(repo, labels.currently_in_env, other)
        moved_from.append(other)
    add_label_to_issue(repo, labels.currently_in_env, issue_number)
    return moved_from


def run(inputs):
    """Apply the deployment labels for `inputs` to its issue."""
    os.environ["GH_TOKEN"] = inputs.github_token
    repo = inputs.repository
    issue_number = inputs.issue_number
    labels = build_labels(inputs)
    result = RunResult(labels=labels)

    info(f"Updating deployment labels on {repo}#{issue_number} "
         f"({labels.deploy_status} in {inputs.environment})")

    try:
        make_sure_labels_for_this_action_exist(repo, labels)
    except GhError:
        result.failed = True
        return result

    if labels.deploy_status == "success":
        result.moved_from = move_current_label(repo, labels, issue_number, inputs.deployable_type)

    existing = list_labels_for_issue(repo, issue_number)
    remove_status_labels_from_issue(repo, existing, issue_number, labels.deploy_status)

    add_label_to_issue(repo, labels.deploy_status, issue_number)
    add_label_to_issue(repo, labels.default, issue_number)

    set_output("moved-from-issues", ",".join(str(n) for n in result.moved_from))
    result.failed = is_failed()
    if not result.failed:
        info(f"{GREEN}✅ Finished updating labels on issue #{issue_number}.{RESET}")
    return result
