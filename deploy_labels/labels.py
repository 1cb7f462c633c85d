"""
labels — The labels this action manages, and keeping them in shape.

Three labels are tracked per run: the deploy status (success, failure, ...),
the "currently in <env>" marker, and the environment's default label.
"""

from dataclasses import dataclass

from .actions import info, start_group, end_group
from .config import COLORS, STATUS_LABELS
from .gh import list_labels_for_repo, create_label, remove_label_from_issue


@dataclass
class ActionLabels:
    deploy_status: str
    currently_in_env: str
    default: str
    deploy_status_exists: bool = True
    currently_in_env_exists: bool = True
    default_exists: bool = True


def build_labels(inputs):
    environment = inputs.environment.lower()
    return ActionLabels(
        deploy_status=inputs.deploy_status.lower(),
        currently_in_env=f"{inputs.current_label_prefix}{environment}".lower(),
        default=environment,
    )


def remove_status_labels_from_issue(repo, existing_labels, issue_number, deploy_status):
    """Drop status labels left over from earlier runs.

    The label matching deploy_status is kept; every other status label
    present in existing_labels is removed.
    """
    start_group(f"Removing deployment status labels from issue #{issue_number} if it has them.")
    try:
        for status in STATUS_LABELS:
            if status in existing_labels and status != deploy_status:
                remove_label_from_issue(repo, status, issue_number)
        info(f"Finished removing deployment status labels from issue #{issue_number}.")
    except (OSError, ValueError) as exc:
        info(f"An error occurred removing status labels from issue #{issue_number}: {exc}")
    finally:
        end_group()


def make_sure_labels_for_this_action_exist(repo, labels):
    """Create any of the action's labels the repo doesn't have yet.

    Flips the matching *_exists flag on `labels` for each one created.
    A failed creation raises GhError.
    """
    start_group("Making sure the labels this action uses exist...")
    try:
        existing = list_labels_for_repo(repo)

        wanted = [
            ("deploy_status", COLORS.get(labels.deploy_status, COLORS["default"])),
            ("currently_in_env", COLORS["current"]),
            ("default", COLORS["default"]),
        ]
        for attr, color in wanted:
            name = getattr(labels, attr)
            if name not in existing:
                setattr(labels, f"{attr}_exists", False)
                create_label(repo, name, color)
                existing.append(name)
            else:
                info(f"The {name} label exists.")
        info("Finished checking that the labels exist.")
    finally:
        end_group()
