"""Fetch a pull request from GitHub and flatten it into PullRequestData.

Only the PR object itself has to be fetched first: PyGithub needs it to list
commits and files. Those lists (and the optional discussion enrichment) have
no ordering dependency on each other, so they are fanned out on a small
thread pool and joined before we return. Progress is reported from the
calling thread in fixed stage order, after the join, so callers see
non-decreasing percentages no matter which request finished first.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

from github import Auth, Github, GithubException, RateLimitExceededException

from pull2press_core.errors import InvalidUrlError, RateLimitError, UpstreamError
from pull2press_core.models import (
    Author,
    Commit,
    DiscussionComment,
    FetchProgress,
    FileChange,
    PRInfo,
    PRReview,
    PRStats,
    ProgressCallback,
    PullRequestData,
)

logger = logging.getLogger(__name__)

_PR_URL_RE = re.compile(r"github\.com/([^/]+)/([^/]+)/pull/(\d+)")

# Caps keep the user prompt a predictable size on very large PRs.
DEFAULT_MAX_COMMITS = 20
DEFAULT_MAX_FILES = 50
_MAX_DISCUSSION_ITEMS = 10


def extract_pr_info(url: str) -> PRInfo:
    """Return owner, repo and PR number parsed from a GitHub pull request URL."""
    match = _PR_URL_RE.search(url or "")
    if not match:
        raise InvalidUrlError(f"Invalid GitHub PR URL: {url!r}. Expected https://github.com/<owner>/<repo>/pull/<number>")
    return PRInfo(owner=match.group(1), repo=match.group(2), pull_number=int(match.group(3)))


def get_github(token: str | None = None) -> Github:
    """Authenticated client when a token is available, anonymous (60 req/h) otherwise."""
    if token:
        return Github(auth=Auth.Token(token))
    return Github()


def get_pull(github: Github, info: PRInfo):
    return github.get_repo(info.full_name).get_pull(info.pull_number)


def fetch_pr_data(
    pr_url: str,
    github: Github,
    *,
    max_commits: int = DEFAULT_MAX_COMMITS,
    max_files: int = DEFAULT_MAX_FILES,
    parallel: bool = True,
    include_discussion: bool = False,
    on_progress: ProgressCallback | None = None,
) -> PullRequestData:
    """Fetch PR metadata, commits and changed files for ``pr_url``.

    Raises InvalidUrlError before any network call when the URL is malformed,
    RateLimitError when GitHub reports an exhausted quota, and UpstreamError
    for any other GitHub failure. Comments and reviews are best-effort: a
    failure there is logged and yields empty lists.
    """
    info = extract_pr_info(pr_url)
    report = _reporter(on_progress)

    report("pr_details", 10, "Fetching pull request data...")
    try:
        pr = get_pull(github, info)

        tasks: dict[str, Callable[[], Any]] = {
            "commits": lambda: list(pr.get_commits()[:max_commits]),
            "files": lambda: list(pr.get_files()[:max_files]),
        }
        if include_discussion:
            tasks["comments"] = lambda: _fetch_optional(pr.get_issue_comments, "comments")
            tasks["reviews"] = lambda: _fetch_optional(pr.get_reviews, "reviews")

        results = _run_all(tasks, parallel)
    except RateLimitExceededException as e:
        raise RateLimitError(
            "GitHub API rate limit exceeded. Set GITHUB_TOKEN or run `gh auth login` to continue.",
            status=e.status,
        ) from e
    except GithubException as e:
        raise UpstreamError(f"Failed to fetch {info.full_name}#{info.pull_number} from GitHub: {e}", status=e.status) from e

    commits = [Commit(message=c.commit.message, sha=c.sha, url=c.html_url) for c in results["commits"]]
    report("commits", 40, f"Processed {len(commits)} commit(s)...")

    files = [
        FileChange(
            filename=f.filename,
            status=f.status,
            additions=f.additions,
            deletions=f.deletions,
            changes=f.changes,
            patch=f.patch,
        )
        for f in results["files"]
    ]
    report("files", 60, f"Processed {len(files)} changed file(s)...")

    raw_comments = results.get("comments", [])
    raw_reviews = results.get("reviews", [])
    comments = [
        DiscussionComment(body=c.body or "", user=_login(c.user) or "unknown", created_at=_iso(c.created_at))
        for c in raw_comments[:_MAX_DISCUSSION_ITEMS]
    ]
    reviews = [
        PRReview(
            body=r.body or "",
            state=r.state or "",
            user=_login(r.user) or "unknown",
            submitted_at=_iso(r.submitted_at),
        )
        for r in raw_reviews[:_MAX_DISCUSSION_ITEMS]
    ]

    data = PullRequestData(
        title=pr.title or "",
        description=pr.body or "",
        commits=commits,
        files=files,
        author=Author(login=_login(pr.user), avatar_url=(getattr(pr.user, "avatar_url", "") or "") if pr.user else ""),
        created_at=_iso(pr.created_at),
        updated_at=_iso(pr.updated_at),
        stats=PRStats(
            total_commits=pr.commits or len(commits),
            total_files=pr.changed_files or len(files),
            additions=pr.additions or sum(f.additions for f in files),
            deletions=pr.deletions or sum(f.deletions for f in files),
            total_comments=len(raw_comments),
            total_reviews=len(raw_reviews),
        ),
        comments=comments,
        reviews=reviews,
    )

    report("generating", 80, "Preparing content generation...")
    return data


def _run_all(tasks: dict[str, Callable[[], Any]], parallel: bool) -> dict[str, Any]:
    """Run independent fetches, concurrently when ``parallel`` is set, and join them.

    future.result() re-raises the worker's exception on this thread, so error
    translation in fetch_pr_data sees the same GithubException either way.
    """
    if not parallel:
        return {name: fn() for name, fn in tasks.items()}
    with ThreadPoolExecutor(max_workers=len(tasks)) as pool:
        futures = {name: pool.submit(fn) for name, fn in tasks.items()}
        return {name: future.result() for name, future in futures.items()}


def _fetch_optional(getter: Callable[[], Any], what: str) -> list:
    try:
        return list(getter())
    except GithubException as e:
        logger.warning("Could not fetch PR %s; continuing without them: %s", what, e)
        return []


def _reporter(on_progress: ProgressCallback | None) -> Callable[[str, int, str], None]:
    last = 0

    def report(stage: str, progress: int, message: str) -> None:
        nonlocal last
        last = max(last, progress)
        logger.debug("fetch progress: %s %d%% %s", stage, last, message)
        if on_progress is not None:
            on_progress(FetchProgress(stage=stage, progress=last, message=message))

    return report


def _login(user) -> str:
    if user is None:
        return ""
    return getattr(user, "login", "") or ""


def _iso(value) -> str:
    if value is None:
        return ""
    return value.isoformat() if hasattr(value, "isoformat") else str(value)
