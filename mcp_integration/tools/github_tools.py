from typing import List

from mcp_integration.core.github_client import GithubClient
from mcp_integration.tools.registry import registry

OWNER = {"type": "string", "description": "Repository owner"}
REPO = {"type": "string", "description": "Repository name"}
QUERY = {"type": "string", "description": "Search query"}


def _number(description: str) -> dict:
    return {"type": "integer", "description": description}


@registry.register(
    name="github_get_pull_request",
    service="github",
    description="Get details of a specific pull request",
    input_schema={
        "type": "object",
        "properties": {"owner": OWNER, "repo": REPO, "number": _number("Pull request number")},
        "required": ["owner", "repo", "number"]
    }
)
def github_get_pull_request(github: GithubClient, owner: str, repo: str, number: int) -> str:
    return github.get_pull_request(owner, repo, number)


@registry.register(
    name="github_get_pull_request_diff",
    service="github",
    description="Get the diff of a specific pull request for analysis",
    input_schema={
        "type": "object",
        "properties": {"owner": OWNER, "repo": REPO, "number": _number("Pull request number")},
        "required": ["owner", "repo", "number"]
    }
)
def github_get_pull_request_diff(github: GithubClient, owner: str, repo: str, number: int) -> str:
    return github.get_pull_request_diff(owner, repo, number)


@registry.register(
    name="github_create_issue",
    service="github",
    description="Create a new issue in a repository",
    input_schema={
        "type": "object",
        "properties": {
            "owner": OWNER,
            "repo": REPO,
            "title": {"type": "string", "description": "Issue title"},
            "body": {"type": "string", "description": "Issue body"}
        },
        "required": ["owner", "repo", "title"]
    }
)
def github_create_issue(github: GithubClient, owner: str, repo: str, title: str, body: str) -> str:
    return github.create_issue(owner, repo, title, body)


@registry.register(
    name="github_create_pull_request",
    service="github",
    description="Create a new pull request",
    input_schema={
        "type": "object",
        "properties": {
            "owner": OWNER,
            "repo": REPO,
            "title": {"type": "string", "description": "Pull request title"},
            "body": {"type": "string", "description": "Pull request body"},
            "head": {"type": "string", "description": "Source branch"},
            "base": {"type": "string", "description": "Target branch"}
        },
        "required": ["owner", "repo", "title", "head", "base"]
    }
)
def github_create_pull_request(
    github: GithubClient, owner: str, repo: str, title: str, body: str, head: str, base: str
) -> str:
    return github.create_pull_request(owner, repo, title, body, head, base)


@registry.register(
    name="github_get_issue",
    service="github",
    description="Get details of a specific issue",
    input_schema={
        "type": "object",
        "properties": {"owner": OWNER, "repo": REPO, "number": _number("Issue number")},
        "required": ["owner", "repo", "number"]
    }
)
def github_get_issue(github: GithubClient, owner: str, repo: str, number: int) -> str:
    return github.get_issue(owner, repo, number)


@registry.register(
    name="github_list_branches",
    service="github",
    description="List all branches in a repository",
    input_schema={
        "type": "object",
        "properties": {"owner": OWNER, "repo": REPO},
        "required": ["owner", "repo"]
    }
)
def github_list_branches(github: GithubClient, owner: str, repo: str) -> str:
    return github.list_branches(owner, repo)


@registry.register(
    name="github_list_commits",
    service="github",
    description="List commits in a repository",
    input_schema={
        "type": "object",
        "properties": {"owner": OWNER, "repo": REPO},
        "required": ["owner", "repo"]
    }
)
def github_list_commits(github: GithubClient, owner: str, repo: str) -> str:
    return github.list_commits(owner, repo)


@registry.register(
    name="github_search_repositories",
    service="github",
    description="Search for repositories",
    input_schema={
        "type": "object",
        "properties": {"query": QUERY},
        "required": ["query"]
    }
)
def github_search_repositories(github: GithubClient, query: str) -> str:
    return github.search_repositories(query)


@registry.register(
    name="github_search_issues",
    service="github",
    description="Search for issues across repositories",
    input_schema={
        "type": "object",
        "properties": {"query": QUERY},
        "required": ["query"]
    }
)
def github_search_issues(github: GithubClient, query: str) -> str:
    return github.search_issues(query)


@registry.register(
    name="github_get_workflows",
    service="github",
    description="Get workflows for a repository",
    input_schema={
        "type": "object",
        "properties": {"owner": OWNER, "repo": REPO},
        "required": ["owner", "repo"]
    }
)
def github_get_workflows(github: GithubClient, owner: str, repo: str) -> str:
    return github.get_workflows(owner, repo)


@registry.register(
    name="github_run_workflow",
    service="github",
    description="Trigger a workflow run",
    input_schema={
        "type": "object",
        "properties": {
            "owner": OWNER,
            "repo": REPO,
            "workflowID": {"type": "string", "description": "Workflow ID or workflow file name"},
            "ref": {"type": "string", "description": "Git reference"}
        },
        "required": ["owner", "repo", "workflowID", "ref"]
    }
)
def github_run_workflow(github: GithubClient, owner: str, repo: str, workflowID: str, ref: str) -> str:
    return github.run_workflow(owner, repo, workflowID, ref)


@registry.register(
    name="github_add_comment",
    service="github",
    description="Add a comment to an issue or pull request",
    input_schema={
        "type": "object",
        "properties": {
            "owner": OWNER,
            "repo": REPO,
            "number": _number("Issue or pull request number"),
            "body": {"type": "string", "description": "Comment body"}
        },
        "required": ["owner", "repo", "number", "body"]
    }
)
def github_add_comment(github: GithubClient, owner: str, repo: str, number: int, body: str) -> str:
    return github.add_comment(owner, repo, number, body)


@registry.register(
    name="github_get_comments",
    service="github",
    description="Get comments from an issue or pull request",
    input_schema={
        "type": "object",
        "properties": {"owner": OWNER, "repo": REPO, "number": _number("Issue or pull request number")},
        "required": ["owner", "repo", "number"]
    }
)
def github_get_comments(github: GithubClient, owner: str, repo: str, number: int) -> str:
    return github.get_comments(owner, repo, number)


@registry.register(
    name="github_assign_copilot",
    service="github",
    description="Assign users to an issue or pull request",
    input_schema={
        "type": "object",
        "properties": {
            "owner": OWNER,
            "repo": REPO,
            "number": _number("Issue or pull request number"),
            "assignees": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Array of usernames to assign"
            }
        },
        "required": ["owner", "repo", "number", "assignees"]
    }
)
def github_assign_copilot(github: GithubClient, owner: str, repo: str, number: int, assignees: List[str]) -> str:
    return github.assign_copilot(owner, repo, number, assignees)


@registry.register(
    name="github_create_branch",
    service="github",
    description="Create a new branch in a repository",
    input_schema={
        "type": "object",
        "properties": {
            "owner": OWNER,
            "repo": REPO,
            "branchName": {"type": "string", "description": "Name for the new branch"},
            "sha": {"type": "string", "description": "SHA of the commit to branch from"}
        },
        "required": ["owner", "repo", "branchName", "sha"]
    }
)
def github_create_branch(github: GithubClient, owner: str, repo: str, branchName: str, sha: str) -> str:
    return github.create_branch(owner, repo, branchName, sha)


@registry.register(
    name="github_create_repository",
    service="github",
    description="Create a new repository",
    input_schema={
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Repository name"},
            "description": {"type": "string", "description": "Repository description"},
            "private": {"type": "boolean", "description": "Whether the repository should be private"}
        },
        "required": ["name"]
    }
)
def github_create_repository(github: GithubClient, name: str, description: str, private: bool) -> str:
    return github.create_repository(name, description, private)


@registry.register(
    name="github_get_commit",
    service="github",
    description="Get details of a specific commit",
    input_schema={
        "type": "object",
        "properties": {"owner": OWNER, "repo": REPO, "sha": {"type": "string", "description": "Commit SHA"}},
        "required": ["owner", "repo", "sha"]
    }
)
def github_get_commit(github: GithubClient, owner: str, repo: str, sha: str) -> str:
    return github.get_commit(owner, repo, sha)


@registry.register(
    name="github_get_release_by_tag",
    service="github",
    description="Get release information by tag",
    input_schema={
        "type": "object",
        "properties": {"owner": OWNER, "repo": REPO, "tagName": {"type": "string", "description": "Tag name"}},
        "required": ["owner", "repo", "tagName"]
    }
)
def github_get_release_by_tag(github: GithubClient, owner: str, repo: str, tagName: str) -> str:
    return github.get_release_by_tag(owner, repo, tagName)


@registry.register(
    name="github_get_tag",
    service="github",
    description="Get tag information",
    input_schema={
        "type": "object",
        "properties": {"owner": OWNER, "repo": REPO, "tagName": {"type": "string", "description": "Tag name"}},
        "required": ["owner", "repo", "tagName"]
    }
)
def github_get_tag(github: GithubClient, owner: str, repo: str, tagName: str) -> str:
    return github.get_tag(owner, repo, tagName)


@registry.register(
    name="github_search_code",
    service="github",
    description="Search for code in repositories",
    input_schema={
        "type": "object",
        "properties": {"query": QUERY},
        "required": ["query"]
    }
)
def github_search_code(github: GithubClient, query: str) -> str:
    return github.search_code(query)


@registry.register(
    name="github_search_pull_requests",
    service="github",
    description="Search for pull requests",
    input_schema={
        "type": "object",
        "properties": {"query": QUERY},
        "required": ["query"]
    }
)
def github_search_pull_requests(github: GithubClient, query: str) -> str:
    return github.search_pull_requests(query)
