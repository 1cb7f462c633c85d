"""
gh — GitHub CLI wrappers, GraphQL helpers, and label/issue calls.
"""

import json
import subprocess
import sys
from urllib.parse import quote

from .actions import RED, RESET, info, start_group, end_group, set_failed

MAX_RESULTS_PER_PAGE = 40


class GhError(Exception):
    """A gh invocation exited non-zero."""

    def __init__(self, args, stderr):
        self.command = list(args)
        self.stderr = stderr
        super().__init__(stderr or f"gh {' '.join(self.command)} failed")


# ── Low-level gh CLI ─────────────────────────────────────────────────────

def gh(*args, json_output=False, check=False):
    cmd = ["gh"] + list(args)
    r = subprocess.run(cmd, capture_output=True, text=True)
    if r.returncode != 0:
        if check:
            raise GhError(args, r.stderr.strip())
        print(f"  {RED}❌ gh error: {r.stderr.strip()}{RESET}", file=sys.stderr)
        return None
    if json_output:
        out = r.stdout.strip()
        return json.loads(out) if out else None
    return r.stdout.strip()


def gh_graphql(query, **variables):
    cmd = ["gh", "api", "graphql", "-f", f"query={query}"]
    for key, value in variables.items():
        # -F sends typed values (ints, booleans); -f always sends strings
        flag = "-F" if isinstance(value, (bool, int)) else "-f"
        cmd.extend([flag, f"{key}={str(value).lower() if isinstance(value, bool) else value}"])
    r = subprocess.run(cmd, capture_output=True, text=True)
    if r.returncode != 0:
        print(f"  {RED}❌ GraphQL error: {r.stderr.strip()}{RESET}", file=sys.stderr)
        return None
    return json.loads(r.stdout)


def _split(repo):
    owner, _, name = repo.partition("/")
    return owner, name


# ── Label queries ────────────────────────────────────────────────────────

def list_labels_for_repo(repo):
    """Every label name in the repo, lower-cased, fetched 40 per page."""
    labels = []
    page = 1
    has_more = True

    try:
        info("Retrieving the existing labels for this repository...")

        while has_more:
            try:
                data = gh(
                    "api", "--method", "GET", f"repos/{repo}/labels",
                    "-F", f"per_page={MAX_RESULTS_PER_PAGE}",
                    "-F", f"page={page}",
                    json_output=True, check=True,
                )
            except GhError:
                set_failed(f"An error occurred retrieving page {page} of labels.")
                break
            if not data:
                info("Finished getting labels for the repository.")
                break

            if len(data) < MAX_RESULTS_PER_PAGE:
                has_more = False
            else:
                page += 1
            labels.extend(label["name"].lower() for label in data)

        if labels:
            info(f"The following labels were found in the {repo} repository: {', '.join(labels)}")
            return labels

        info(f"No labels were found for the {repo} repository.")
        return []
    except (ValueError, KeyError, TypeError, OSError) as exc:
        info(f"An error occurred while retrieving the labels for {repo}: {exc}")
        return []


def list_labels_for_issue(repo, issue_number):
    """Lower-cased label names currently on one issue."""
    try:
        data = gh(
            "api", "--method", "GET", f"repos/{repo}/issues/{issue_number}/labels",
            "-F", "per_page=100",
            json_output=True, check=True,
        )
    except (GhError, ValueError, OSError) as exc:
        info(f"An error occurred retrieving the labels on issue #{issue_number}: {exc}")
        return []
    return [label["name"].lower() for label in data or []]


# ── Label mutations ──────────────────────────────────────────────────────

def create_label(repo, name, color):
    try:
        info(f"Creating the {name} label with color {color}...")
        gh("api", f"repos/{repo}/labels", "-f", f"name={name}", "-f", f"color={color}",
           check=True)
        info(f"Successfully created the {name} label.")
    except GhError as exc:
        set_failed(f"An error occurred while creating the '{name}' label: {exc}")
        raise


def add_label_to_issue(repo, name, issue_number):
    start_group(f"Adding label '{name}' to issue #{issue_number}...")
    try:
        gh("api", f"repos/{repo}/issues/{issue_number}/labels", "-f", f"labels[]={name}",
           check=True)
        info(f"Successfully added label '{name}' to issue #{issue_number}...")
    except GhError as exc:
        # Keep going: the remaining label calls may still succeed.
        set_failed(f"An error occurred while adding the '{name}' label to issue #{issue_number}: {exc}")
    finally:
        end_group()


def remove_label_from_issue(repo, name, issue_number):
    start_group(f"Removing label {name} from issue #{issue_number}...")
    try:
        gh("api", "--method", "DELETE",
           f"repos/{repo}/issues/{issue_number}/labels/{quote(name, safe='')}",
           check=True)
        info(f"Successfully removed label {name} from issue #{issue_number}.")
    except GhError as exc:
        set_failed(f"An error occurred while removing the '{name}' label from issue #{issue_number}: {exc}")
    finally:
        end_group()


# ── Issue queries ─────────────────────────────────────────────────────────

ISSUES_WITH_LABEL_QUERY = """
query($owner: String!, $name: String!, $label: String!) {
  repository(owner: $owner, name: $name) {
    issues(first: 100, filterBy: {labels: [$label]}) {
      edges {
        node { number title }
      }
    }
  }
}
"""


def find_issues_with_label(repo, label_name, deployable_type=None):
    """Numbers of issues carrying a label, optionally narrowed by title.

    When deployable_type is given, only issues whose title contains it
    (case-insensitive) are kept.
    """
    start_group(f"Finding issues with label '{label_name}'...")
    try:
        owner, name = _split(repo)
        response = gh_graphql(ISSUES_WITH_LABEL_QUERY, owner=owner, name=name, label=label_name)
        if response is None:
            raise GhError(["api", "graphql"], "the GraphQL request failed")

        issues = (response["data"]["repository"] or {}).get("issues") or {}
        edges = issues.get("edges") or []
        if not edges:
            info(f"There were no issues with label '{label_name}'.")
            return []

        if deployable_type:
            wanted = deployable_type.lower()
            numbers = [e["node"]["number"] for e in edges if wanted in e["node"]["title"].lower()]
            info(f"The following issues had label '{label_name}' and deployable type "
                 f"'{deployable_type}': {numbers}")
        else:
            numbers = [e["node"]["number"] for e in edges]
            info(f"The following issues had label '{label_name}': {numbers}")
        return numbers
    except (GhError, KeyError, TypeError, AttributeError, ValueError, OSError) as exc:
        info(f"An error occurred retrieving issues with the '{label_name}' label: {exc}")
        info(f"You may need to manually remove the {label_name} from other issues")
        return []
    finally:
        end_group()
