"""Identity resolution: the GitHub token used for fetching and the local user id.

GitHub token resolution order (stops at first success):
  1. GITHUB_TOKEN environment variable (CI / explicit override)
  2. `gh auth token` (GitHub CLI session — works after `gh auth login`)
  3. None — PRs on public repos are still fetched anonymously, subject to
     GitHub's 60 requests/hour unauthenticated limit.

The user id scopes cached posts and preferences in the store. There is no
login flow here: the id comes from PULL2PRESS_USER, the config file, or the
OS account name.
"""

from __future__ import annotations

import getpass
import logging
import os
import subprocess

logger = logging.getLogger(__name__)


def resolve_github_token() -> str | None:
    """Return a GitHub token or None if no source is available.

    Never raises: an absent token means anonymous, rate-limited access.
    """
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        return token

    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            gh_token = result.stdout.strip()
            if gh_token:
                logger.debug("Resolved GitHub token via gh CLI session.")
                return gh_token
    except (FileNotFoundError, subprocess.TimeoutExpired):
        # gh is not installed or timed out; fall through to anonymous access.
        pass

    logger.debug("No GitHub token found; fetching anonymously.")
    return None


def resolve_user_id(config: dict) -> str:
    """Return the id that owns posts and preferences for this session."""
    user = os.environ.get("PULL2PRESS_USER") or config.get("user")
    if user:
        return str(user)
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        # No passwd entry (some containers): fall back to a shared local id.
        return "local"
