"""Tests for the CLI entry point and commands."""

import json
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import yaml
from click.testing import CliRunner

from pull2press_cli.cli import _build_store, main
from pull2press_cli.commands.edit import watch_file
from pull2press_core.errors import RateLimitError
from pull2press_core.models import Commit, FileChange, PullRequestData
from pull2press_store.base import PersistenceError
from pull2press_store.models import CachedPost, PreferencesRecord
from pull2press_store.noop import NoOpStore
from pull2press_store.sqlite import SQLiteStore

PR_URL = "https://github.com/octo/widgets/pull/42"


def _make_config(store="sqlite", provider="openai", openai_key="sk-test"):
    return {
        "provider": provider,
        "model": None,
        "proxy_url": None,
        "store": store,
        "store_path": None,
        "max_commits": 20,
        "max_files": 50,
        "parallel_fetch": False,
        "include_discussion": False,
        "autosave_delay": 0.01,
        "presets": None,
        "user": "alice",
        "github_token": "tok",
        "openai_api_key": openai_key,
        "anthropic_api_key": None,
        "proxy_key": None,
    }


def _pr_data():
    return PullRequestData(
        title="Add new feature",
        description="This PR adds a new feature",
        commits=[
            Commit(message="Initial implementation", sha="a" * 40, url=""),
            Commit(message="Add tests", sha="b" * 40, url=""),
        ],
        files=[FileChange(filename="src/feature.ts", status="modified", additions=50, deletions=10, changes=60)],
    )


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "posts.db")


@pytest.fixture
def cli_env(mocker, db_path, monkeypatch):
    """Patch config, token and store for most tests.

    Every invocation gets a fresh SQLiteStore on the same file, because the
    CLI closes its store when the command finishes.
    """
    monkeypatch.delenv("PULL2PRESS_USER", raising=False)
    config = _make_config()
    mocker.patch("pull2press_core.config.load_config", return_value=config)
    mocker.patch("pull2press_cli.auth.resolve_github_token", return_value="tok")
    mocker.patch("pull2press_cli.cli._build_store", side_effect=lambda cfg: SQLiteStore(db_path=db_path))
    return config


@pytest.fixture
def generator(mocker):
    gen = MagicMock()
    gen.NAME = "stub"
    gen.generate.return_value = "# My blog post\n\nI built a feature."
    gen.generate_stream.side_effect = lambda *args, **kwargs: iter(["# Streamed ", "post"])
    mocker.patch("pull2press_cli.commands.generate.get_generator", return_value=gen)
    mocker.patch("pull2press_cli.commands.generate.get_github", return_value=MagicMock())
    return gen


@pytest.fixture
def fetch(mocker):
    return mocker.patch("pull2press_core.pipeline.fetch_pr_data", return_value=_pr_data())


def _seed_post(db_path, content="# Saved post", user_id="alice", is_draft=False):
    store = SQLiteStore(db_path=db_path)
    post = store.save_post(CachedPost(pr_url=PR_URL, title="Add new feature", content=content, user_id=user_id, is_draft=is_draft))
    store.close()
    return post


def _load(db_path, post_id):
    store = SQLiteStore(db_path=db_path)
    try:
        return store.get_post(post_id)
    finally:
        store.close()


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


class TestGenerateCommand:
    def test_generates_and_saves_post(self, cli_env, generator, fetch, db_path):
        result = CliRunner().invoke(main, ["generate", PR_URL])

        assert result.exit_code == 0, result.output
        assert "I built a feature." in result.output
        assert "Saved as post #1" in result.output
        saved = _load(db_path, 1)
        assert saved.content == "# My blog post\n\nI built a feature."
        assert saved.title == "Add new feature"
        assert saved.user_id == "alice"

    def test_default_prompts_and_temperature(self, cli_env, generator, fetch):
        CliRunner().invoke(main, ["generate", PR_URL])

        system, user, temperature = generator.generate.call_args.args
        assert system.startswith("You are a software engineer")
        assert "Title: Add new feature" in user
        assert "- src/feature.ts (50 additions, 10 deletions)" in user
        assert temperature == 0.7

    def test_cached_post_returned_without_generation(self, cli_env, generator, fetch, db_path):
        _seed_post(db_path, content="# Cached")

        result = CliRunner().invoke(main, ["generate", PR_URL])

        assert result.exit_code == 0
        assert "# Cached" in result.output
        generator.generate.assert_not_called()
        fetch.assert_not_called()

    def test_force_generates_again(self, cli_env, generator, fetch, db_path):
        _seed_post(db_path, content="# Cached")

        result = CliRunner().invoke(main, ["generate", PR_URL, "--force"])

        assert result.exit_code == 0
        generator.generate.assert_called_once()
        assert "Saved as post #2" in result.output

    def test_cache_is_per_user(self, cli_env, generator, fetch, db_path):
        _seed_post(db_path, content="# Bob's post", user_id="bob")

        CliRunner().invoke(main, ["generate", PR_URL])

        generator.generate.assert_called_once()

    def test_preset_sets_modifiers_and_temperature(self, cli_env, generator, fetch):
        result = CliRunner().invoke(main, ["generate", PR_URL, "--preset", "casual"])

        assert result.exit_code == 0, result.output
        system, user, temperature = generator.generate.call_args.args
        assert "conversational voice" in system
        assert temperature == 0.9

    def test_temperature_override_wins(self, cli_env, generator, fetch):
        CliRunner().invoke(main, ["generate", PR_URL, "--preset", "casual", "--temperature", "0.3"])
        assert generator.generate.call_args.args[2] == 0.3

    def test_custom_prompt(self, cli_env, generator, fetch):
        CliRunner().invoke(main, ["generate", PR_URL, "--prompt", "Focus on the tests."])
        assert "Focus on the tests." in generator.generate.call_args.args[1]

    def test_my_style_uses_saved_samples(self, cli_env, generator, fetch, db_path):
        store = SQLiteStore(db_path=db_path)
        store.save_preferences(PreferencesRecord(user_id="alice", writing_samples=["Hey, awesome stuff. Cool. Gonna ship!"]))
        store.close()

        CliRunner().invoke(main, ["generate", PR_URL, "--my-style"])

        assert "Adapt your writing style" in generator.generate.call_args.args[0]

    def test_unknown_preset(self, cli_env, generator, fetch):
        result = CliRunner().invoke(main, ["generate", PR_URL, "--preset", "Sonnet"])
        assert result.exit_code != 0
        assert "Unknown preset" in result.output

    def test_missing_custom_presets_file(self, cli_env, generator, fetch):
        cli_env["presets"] = "/nonexistent/presets.yml"

        result = CliRunner().invoke(main, ["generate", PR_URL, "--preset", "Casual"])

        assert result.exit_code == 1
        assert "Presets file not found" in result.output
        assert not isinstance(result.exception, FileNotFoundError)
        fetch.assert_not_called()

    def test_options_are_mutually_exclusive(self, cli_env, generator, fetch):
        result = CliRunner().invoke(main, ["generate", PR_URL, "--preset", "Casual", "--prompt", "x"])
        assert result.exit_code != 0
        assert "mutually exclusive" in result.output
        generator.generate.assert_not_called()

    def test_out_of_range_temperature(self, cli_env, generator, fetch):
        result = CliRunner().invoke(main, ["generate", PR_URL, "--temperature", "1.5"])
        assert result.exit_code != 0
        assert "between 0 and 1" in result.output
        fetch.assert_not_called()

    def test_invalid_url(self, cli_env, generator):
        result = CliRunner().invoke(main, ["generate", "https://example.com/not-a-pr"])
        assert result.exit_code != 0
        assert "Invalid GitHub PR URL" in result.output

    def test_rate_limit_reported(self, cli_env, generator, mocker):
        mocker.patch("pull2press_core.pipeline.fetch_pr_data", side_effect=RateLimitError("GitHub API rate limit exceeded"))
        result = CliRunner().invoke(main, ["generate", PR_URL])
        assert result.exit_code != 0
        assert "Rate limited" in result.output

    def test_missing_api_key(self, cli_env, fetch, mocker):
        cli_env["openai_api_key"] = None
        mocker.patch("pull2press_cli.commands.generate.get_github", return_value=MagicMock())
        result = CliRunner().invoke(main, ["generate", PR_URL])
        assert result.exit_code != 0
        assert "OPENAI_API_KEY" in result.output

    def test_persistence_failure_still_shows_content(self, cli_env, generator, fetch, mocker):
        store = MagicMock(spec=SQLiteStore)
        store.find_post.return_value = None
        store.get_preferences.return_value = None
        store.save_post.side_effect = PersistenceError("disk I/O error")
        mocker.patch("pull2press_cli.cli._build_store", return_value=store)

        result = CliRunner().invoke(main, ["generate", PR_URL])

        assert result.exit_code == 0
        assert "I built a feature." in result.output
        assert "could not be saved" in result.output

    def test_stream_prints_deltas_and_saves_whole_post(self, cli_env, generator, fetch, db_path):
        result = CliRunner().invoke(main, ["generate", PR_URL, "--stream"])

        assert result.exit_code == 0, result.output
        assert "# Streamed post" in result.output
        generator.generate.assert_not_called()
        assert _load(db_path, 1).content == "# Streamed post"

    def test_output_file(self, cli_env, generator, fetch, tmp_path):
        out = tmp_path / "post.md"
        CliRunner().invoke(main, ["generate", PR_URL, "--output", str(out)])
        assert out.read_text() == "# My blog post\n\nI built a feature."

    def test_works_without_store(self, cli_env, generator, fetch, mocker):
        mocker.patch("pull2press_cli.cli._build_store", return_value=NoOpStore())
        result = CliRunner().invoke(main, ["generate", PR_URL])
        assert result.exit_code == 0
        assert "I built a feature." in result.output
        assert "Saved as" not in result.output


# ---------------------------------------------------------------------------
# regenerate
# ---------------------------------------------------------------------------


class TestRegenerateCommand:
    def test_overwrites_saved_post(self, cli_env, generator, fetch, db_path):
        post = _seed_post(db_path, content="# Old", is_draft=True)

        result = CliRunner().invoke(main, ["regenerate", str(post.id), "--preset", "Concise"])

        assert result.exit_code == 0, result.output
        updated = _load(db_path, post.id)
        assert updated.content == "# My blog post\n\nI built a feature."
        assert updated.is_draft is False
        assert generator.generate.call_args.args[2] == 0.6

    def test_missing_post(self, cli_env, generator, fetch):
        result = CliRunner().invoke(main, ["regenerate", "99"])
        assert result.exit_code != 0
        assert "not found" in result.output

    def test_other_users_post_is_not_found(self, cli_env, generator, fetch, db_path):
        post = _seed_post(db_path, user_id="bob")
        result = CliRunner().invoke(main, ["regenerate", str(post.id)])
        assert result.exit_code != 0
        generator.generate.assert_not_called()


# ---------------------------------------------------------------------------
# history / show / delete
# ---------------------------------------------------------------------------


class TestHistoryCommand:
    def test_shows_table_when_posts_exist(self, cli_env, db_path):
        _seed_post(db_path)

        result = CliRunner().invoke(main, ["history"])

        assert result.exit_code == 0
        assert "Add" in result.output
        assert "saved" in result.output

    def test_shows_empty_message_when_no_posts(self, cli_env):
        result = CliRunner().invoke(main, ["history"])
        assert result.exit_code == 0
        assert "No saved posts found" in result.output

    def test_drafts_filter(self, cli_env, db_path):
        _seed_post(db_path, is_draft=False)
        result = CliRunner().invoke(main, ["history", "--drafts"])
        assert "No saved posts found" in result.output

    def test_errors_when_noop_store(self, cli_env, mocker):
        mocker.patch("pull2press_cli.cli._build_store", return_value=NoOpStore())

        result = CliRunner().invoke(main, ["history"])

        assert result.exit_code != 0
        assert "No store configured" in result.output


class TestShowAndDelete:
    def test_show_prints_content(self, cli_env, db_path):
        post = _seed_post(db_path, content="# Hello there")
        result = CliRunner().invoke(main, ["show", str(post.id)])
        assert result.exit_code == 0
        assert "# Hello there" in result.output

    def test_show_missing(self, cli_env):
        result = CliRunner().invoke(main, ["show", "5"])
        assert result.exit_code != 0
        assert "Post #5 not found" in result.output

    def test_delete_with_yes(self, cli_env, db_path):
        post = _seed_post(db_path)
        result = CliRunner().invoke(main, ["delete", str(post.id), "--yes"])
        assert result.exit_code == 0
        assert _load(db_path, post.id) is None

    def test_delete_declined(self, cli_env, db_path):
        post = _seed_post(db_path)
        result = CliRunner().invoke(main, ["delete", str(post.id)], input="n\n")
        assert result.exit_code != 0
        assert _load(db_path, post.id) is not None


# ---------------------------------------------------------------------------
# edit
# ---------------------------------------------------------------------------


class TestEditCommand:
    def test_from_file_saves_and_clears_draft(self, cli_env, db_path, tmp_path):
        post = _seed_post(db_path, is_draft=True)
        src = tmp_path / "edited.md"
        src.write_text("# Edited by hand")

        result = CliRunner().invoke(main, ["edit", str(post.id), "--from-file", str(src)])

        assert result.exit_code == 0, result.output
        updated = _load(db_path, post.id)
        assert updated.content == "# Edited by hand"
        assert updated.is_draft is False

    def test_editor_changes_saved(self, cli_env, db_path, mocker):
        post = _seed_post(db_path)
        mocker.patch("click.edit", return_value="# From editor")

        CliRunner().invoke(main, ["edit", str(post.id)])

        assert _load(db_path, post.id).content == "# From editor"

    def test_editor_closed_without_changes(self, cli_env, db_path, mocker):
        post = _seed_post(db_path)
        mocker.patch("click.edit", return_value=None)

        result = CliRunner().invoke(main, ["edit", str(post.id)])

        assert "No changes" in result.output
        assert _load(db_path, post.id).updated_at == post.updated_at

    def test_from_file_and_watch_are_exclusive(self, cli_env, db_path, tmp_path):
        src = tmp_path / "a.md"
        src.write_text("x")
        result = CliRunner().invoke(main, ["edit", "1", "--from-file", str(src), "--watch", str(tmp_path / "b.md")])
        assert result.exit_code != 0

    def test_watch_autosaves_then_finalizes(self, cli_env, db_path, tmp_path, mocker):
        cli_env["autosave_delay"] = 60
        post = _seed_post(db_path, content="# Start")
        target = tmp_path / "draft.md"

        def _fake_watch(path, on_change, **kwargs):
            on_change("# Typing")
            path.write_text("# Done")
            raise KeyboardInterrupt

        mocker.patch("pull2press_cli.commands.edit.watch_file", side_effect=_fake_watch)

        result = CliRunner().invoke(main, ["edit", str(post.id), "--watch", str(target)])

        assert result.exit_code == 0, result.output
        final = _load(db_path, post.id)
        assert final.content == "# Done"
        assert final.is_draft is False


def test_watch_file_reports_changes(tmp_path, mocker):
    target = tmp_path / "draft.md"
    target.write_text("v0")
    writes = iter(["v1", "v1", "v2"])
    seen = []

    def _sleep(_interval):
        target.write_text(next(writes))

    mocker.patch("pull2press_cli.commands.edit.time.sleep", side_effect=_sleep)
    ticks = iter([False, False, False, True])

    watch_file(target, seen.append, should_stop=lambda: next(ticks))

    assert seen == ["v1", "v2"]


# ---------------------------------------------------------------------------
# presets / style
# ---------------------------------------------------------------------------


class TestPresetsCommand:
    def test_lists_builtin_presets(self, cli_env):
        result = CliRunner().invoke(main, ["presets"])
        assert result.exit_code == 0
        assert "Casual" in result.output
        assert "Tutorial" in result.output

    def test_missing_custom_file(self, cli_env):
        cli_env["presets"] = "/nonexistent/presets.yml"
        result = CliRunner().invoke(main, ["presets"])
        assert result.exit_code != 0
        assert "Presets file not found" in result.output


class TestStyleCommands:
    def test_set_and_show(self, cli_env):
        result = CliRunner().invoke(main, ["style", "set", "--tone", "technical", "--length", "long"])
        assert result.exit_code == 0, result.output

        result = CliRunner().invoke(main, ["style", "show"])
        assert "technical" in result.output
        assert "long" in result.output

    def test_set_requires_an_option(self, cli_env):
        result = CliRunner().invoke(main, ["style", "set"])
        assert result.exit_code != 0
        assert "Nothing to set" in result.output

    def test_add_sample_and_clear(self, cli_env, db_path, tmp_path):
        sample = tmp_path / "sample.md"
        sample.write_text("## Notes\n- First I tried one thing.")

        result = CliRunner().invoke(main, ["style", "add-sample", str(sample)])
        assert result.exit_code == 0, result.output

        store = SQLiteStore(db_path=db_path)
        assert store.get_preferences("alice").writing_samples == ["## Notes\n- First I tried one thing."]
        store.close()

        result = CliRunner().invoke(main, ["style", "show"])
        assert "Detected style" in result.output

        CliRunner().invoke(main, ["style", "clear-samples"])
        store = SQLiteStore(db_path=db_path)
        assert store.get_preferences("alice").writing_samples == []
        store.close()

    def test_style_needs_store(self, cli_env, mocker):
        mocker.patch("pull2press_cli.cli._build_store", return_value=NoOpStore())
        result = CliRunner().invoke(main, ["style", "show"])
        assert result.exit_code != 0
        assert "No store configured" in result.output


# ---------------------------------------------------------------------------
# links / assist / serve
# ---------------------------------------------------------------------------


class TestLinksCommand:
    def test_prints_and_appends_links(self, cli_env, db_path, mocker):
        post = _seed_post(db_path, content="# Post about pytest")
        gen = MagicMock()
        gen.generate.side_effect = [
            "pytest, fixtures",
            json.dumps([{"title": "pytest docs", "url": "https://docs.pytest.org", "relevance": "high"}]),
        ]
        mocker.patch("pull2press_cli.commands.links.get_generator", return_value=gen)

        result = CliRunner().invoke(main, ["links", str(post.id), "--append"])

        assert result.exit_code == 0, result.output
        assert "[pytest docs](https://docs.pytest.org)" in result.output
        content = _load(db_path, post.id).content
        assert content.startswith("# Post about pytest")
        assert "## Helpful Resources" in content


class TestAssistCommand:
    def test_streams_rewrite(self, cli_env, mocker):
        gen = MagicMock()
        gen.generate_stream.side_effect = lambda *args, **kwargs: iter(["Much ", "better."])
        mocker.patch("pull2press_cli.commands.assist.get_generator", return_value=gen)

        result = CliRunner().invoke(main, ["assist", "--text", "bad sentence", "-i", "Improve it"], input="\n")

        assert result.exit_code == 0, result.output
        assert "Much better." in result.output
        assert 'Selected text: "bad sentence"' in gen.generate_stream.call_args.args[1]

    def test_reads_piped_text_and_answers_once(self, cli_env, mocker):
        gen = MagicMock()
        gen.generate_stream.side_effect = lambda *args, **kwargs: iter(["Better."])
        mocker.patch("pull2press_cli.commands.assist.get_generator", return_value=gen)

        result = CliRunner().invoke(main, ["assist", "-i", "Improve it"], input="bad sentence\n")

        assert result.exit_code == 0, result.output
        assert "Better." in result.output
        assert "Aborted" not in result.output
        assert gen.generate_stream.call_count == 1
        assert 'Selected text: "bad sentence\n"' in gen.generate_stream.call_args.args[1]

    def test_piped_text_requires_instruction(self, cli_env):
        result = CliRunner().invoke(main, ["assist"], input="bad sentence\n")
        assert result.exit_code == 2
        assert "--instruction" in result.output

    def test_requires_text(self, cli_env):
        result = CliRunner().invoke(main, ["assist", "--text", "  ", "-i", "x"])
        assert result.exit_code != 0


class TestServeCommand:
    def test_runs_uvicorn(self, cli_env, mocker):
        run = mocker.patch("uvicorn.run")
        result = CliRunner().invoke(main, ["serve", "--port", "9000"])
        assert result.exit_code == 0, result.output
        assert run.call_args.kwargs["port"] == 9000


# ---------------------------------------------------------------------------
# auth.py
# ---------------------------------------------------------------------------


class TestResolveGithubToken:
    def test_returns_env_var_when_set(self, monkeypatch):
        from pull2press_cli.auth import resolve_github_token

        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        assert resolve_github_token() == "env-token"

    def test_falls_back_to_gh_cli(self, monkeypatch):
        from pull2press_cli.auth import resolve_github_token

        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="gh-token\n")
            result = resolve_github_token()
        assert result == "gh-token"

    def test_returns_none_when_gh_not_installed(self, monkeypatch):
        from pull2press_cli.auth import resolve_github_token

        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        with patch("subprocess.run", side_effect=FileNotFoundError):
            result = resolve_github_token()
        assert result is None

    def test_returns_none_when_gh_times_out(self, monkeypatch):
        from pull2press_cli.auth import resolve_github_token

        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired(cmd="gh", timeout=5)):
            result = resolve_github_token()
        assert result is None


class TestResolveUserId:
    def test_env_wins(self, monkeypatch):
        from pull2press_cli.auth import resolve_user_id

        monkeypatch.setenv("PULL2PRESS_USER", "carol")
        assert resolve_user_id({"user": "alice"}) == "carol"

    def test_config_user(self, monkeypatch):
        from pull2press_cli.auth import resolve_user_id

        monkeypatch.delenv("PULL2PRESS_USER", raising=False)
        assert resolve_user_id({"user": "alice"}) == "alice"

    def test_falls_back_to_os_user(self, monkeypatch):
        from pull2press_cli.auth import resolve_user_id

        monkeypatch.delenv("PULL2PRESS_USER", raising=False)
        with patch("getpass.getuser", return_value="osuser"):
            assert resolve_user_id({}) == "osuser"


# ---------------------------------------------------------------------------
# _build_store
# ---------------------------------------------------------------------------


class TestBuildStore:
    def test_returns_noop_by_default(self):
        assert isinstance(_build_store({}), NoOpStore)

    def test_returns_noop_when_explicitly_set(self):
        assert isinstance(_build_store({"store": "noop"}), NoOpStore)

    def test_returns_sqlite_store(self, tmp_path):
        store = _build_store({"store": "sqlite", "store_path": str(tmp_path / "test.db")})
        assert isinstance(store, SQLiteStore)
        store.close()

    def test_sqlite_uses_default_path_when_not_specified(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        store = _build_store({"store": "sqlite"})
        assert isinstance(store, SQLiteStore)
        store.close()
        assert (tmp_path / ".pull2press.db").exists()

    def test_unknown_store_falls_back_to_noop(self):
        assert isinstance(_build_store({"store": "redis"}), NoOpStore)


# ---------------------------------------------------------------------------
# init command
# ---------------------------------------------------------------------------


class TestInitCommand:
    def test_writes_config_with_provider_and_store(self, cli_env, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = CliRunner().invoke(main, ["init"], input="anthropic\nsqlite\n\n")

        assert result.exit_code == 0, result.output
        config = yaml.safe_load((tmp_path / ".pull2press.yml").read_text())
        assert config["provider"] == "anthropic"
        assert config["store"] == "sqlite"
        assert "store_path" not in config
        assert "ANTHROPIC_API_KEY" in result.output

    def test_proxy_asks_for_url(self, cli_env, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        CliRunner().invoke(main, ["init"], input="proxy\nhttps://fn.example\nnone\n")

        config = yaml.safe_load((tmp_path / ".pull2press.yml").read_text())
        assert config["provider"] == "proxy"
        assert config["proxy_url"] == "https://fn.example"
        assert config["store"] == "noop"

    def test_preserves_existing_keys(self, cli_env, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        Path(".pull2press.yml").write_text("max_commits: 5\n")

        CliRunner().invoke(main, ["init"], input="openai\nnone\n")

        config = yaml.safe_load((tmp_path / ".pull2press.yml").read_text())
        assert config["max_commits"] == 5
        assert config["provider"] == "openai"
