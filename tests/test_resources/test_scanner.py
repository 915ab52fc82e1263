"""Tests for the resource scanner."""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC
from datetime import datetime
from unittest.mock import patch

from skillhub_cli.repos.config import RepoEntry
from skillhub_cli.resources.models import ResourceType
from skillhub_cli.resources.scanner import Scanner


def entry(name, path):
    return RepoEntry(name=name, url=f"https://example.com/{name}.git", path=path, added_at=datetime.now(UTC))


class TestScanRepo:
    def test_finds_all_resource_kinds(self, make_repo, md):
        repo = make_repo(
            "r",
            {
                "skills/pdf/SKILL.md": md("pdf", "PDF tools"),
                "commands/deploy/command.md": md("deploy"),
                "commands/lint.md": md("lint"),
                "agents/reviewer/AGENT.md": md("reviewer"),
                "agents/planner.md": md("planner"),
                "mcp/github.json": {"name": "github", "command": "npx"},
            },
        )
        resources = Scanner().scan_repo(repo, "r", "https://example.com/r.git")

        by_type = {}
        for r in resources:
            by_type.setdefault(r.type, set()).add(r.name)
        assert by_type == {
            ResourceType.SKILL: {"pdf"},
            ResourceType.COMMAND: {"deploy", "lint"},
            ResourceType.AGENT: {"reviewer", "planner"},
            ResourceType.MCP: {"github"},
        }
        assert all(r.repo_url == "https://example.com/r.git" for r in resources)

    def test_skill_name_falls_back_to_directory(self, make_repo, md):
        repo = make_repo("r", {"skills/code-review/SKILL.md": md(description="Reviews code")})
        (resource,) = Scanner().scan_repo(repo, "r")
        assert resource.name == "code-review"
        assert resource.description == "Reviews code"

    def test_mcp_name_falls_back_to_filename(self, make_repo):
        repo = make_repo("r", {"mcp/filesystem.json": {"command": "mcp-fs"}})
        (resource,) = Scanner().scan_repo(repo, "r")
        assert resource.name == "filesystem"
        assert resource.description == "Local MCP server: mcp-fs"

    def test_empty_repository(self, make_repo):
        assert Scanner().scan_repo(make_repo("r", {}), "r") == []

    def test_malformed_manifests_are_skipped(self, make_repo, md, caplog):
        repo = make_repo(
            "r",
            {
                "skills/good/SKILL.md": md("good"),
                "skills/bad/SKILL.md": "---\nname: [broken\n---\n",
                "skills/no-manifest/README.md": "# nothing",
                "mcp/broken.json": "{not json",
            },
        )
        with caplog.at_level(logging.WARNING):
            resources = Scanner().scan_repo(repo, "r")

        assert [r.name for r in resources] == ["good"]
        assert "skills/bad/SKILL.md" in caplog.text
        assert "mcp/broken.json" in caplog.text

    def test_file_in_place_of_directory_is_skipped(self, make_repo, md):
        repo = make_repo("r", {"skills": "oops", "agents/a.md": md("a")})
        assert [r.name for r in Scanner().scan_repo(repo, "r")] == ["a"]

    def test_scalar_header_values_are_stringified(self, make_repo):
        repo = make_repo(
            "r",
            {
                "skills/year/SKILL.md": "---\ndescription: 2024\n---\n",
                "skills/flag/SKILL.md": "---\nname: 404\ndescription: yes\n---\n",
            },
        )
        resources = {r.name: r.description for r in Scanner().scan_repo(repo, "r")}
        assert resources == {"404": "true", "year": "2024"}

    def test_unreadable_resource_directory_is_skipped(self, make_repo, md, deny_access, caplog):
        repo = make_repo(
            "r",
            {
                "skills/good/SKILL.md": md("good"),
                "skills/locked/SKILL.md": md("locked"),
                "agents/a.md": md("a"),
            },
        )
        deny_access("is_dir", repo / "skills" / "locked")

        with caplog.at_level(logging.WARNING):
            resources = Scanner().scan_repo(repo, "r")

        assert sorted(r.name for r in resources) == ["a", "good"]
        assert "skills/locked" in caplog.text

    def test_unreadable_manifest_is_skipped(self, make_repo, md, deny_access, caplog):
        repo = make_repo("r", {"skills/good/SKILL.md": md("good"), "skills/locked/SKILL.md": md("locked")})
        deny_access("is_file", repo / "skills" / "locked" / "SKILL.md")

        with caplog.at_level(logging.WARNING):
            resources = Scanner().scan_repo(repo, "r")

        assert [r.name for r in resources] == ["good"]
        assert "skills/locked/SKILL.md" in caplog.text

    def test_unlistable_kind_directory_yields_nothing_for_that_kind(self, make_repo, md, deny_access, caplog):
        repo = make_repo("r", {"skills/pdf/SKILL.md": md("pdf"), "commands/lint.md": md("lint")})
        deny_access("iterdir", repo / "skills")

        with caplog.at_level(logging.WARNING):
            resources = Scanner().scan_repo(repo, "r")

        assert [r.name for r in resources] == ["lint"]
        assert any(rec.levelno == logging.WARNING and "Permission denied" in rec.getMessage() for rec in caplog.records)


class TestScanAll:
    def test_attributes_resources_to_their_repository(self, make_repo, md):
        r1 = make_repo("r1", {"skills/a/SKILL.md": md("a"), "skills/b/SKILL.md": md("b")})
        r2 = make_repo("r2", {"commands/c.md": md("c")})
        r3 = make_repo("r3", {"agents/d.md": md("d"), "mcp/e.json": {"command": "e"}})

        resources = Scanner().scan_all([entry("r1", r1), entry("r2", r2), entry("r3", r3)])

        assert len(resources) == 5
        assert {(r.name, r.repo_name) for r in resources} == {
            ("a", "r1"),
            ("b", "r1"),
            ("c", "r2"),
            ("d", "r3"),
            ("e", "r3"),
        }

    def test_ghost_repository_does_not_hide_others(self, make_repo, md, tmp_path):
        valid = make_repo("valid", {"skills/a/SKILL.md": md("a")})
        ghost = tmp_path / "does-not-exist"

        resources = Scanner().scan_all([entry("valid", valid), entry("ghost", ghost)])

        assert [(r.name, r.repo_name) for r in resources] == [("a", "valid")]

    def test_failing_repository_scan_is_isolated(self, make_repo, md, caplog):
        good = make_repo("good", {"skills/a/SKILL.md": md("a")})
        bad = make_repo("bad", {"skills/b/SKILL.md": md("b")})
        scanner = Scanner()
        real_scan = scanner.scan_repo

        def flaky(path, name, url=""):
            if name == "bad":
                raise RuntimeError("disk on fire")
            return real_scan(path, name, url)

        with patch.object(scanner, "scan_repo", side_effect=flaky), caplog.at_level(logging.WARNING):
            resources = scanner.scan_all([entry("bad", bad), entry("good", good)])

        assert [r.name for r in resources] == ["a"]
        assert "disk on fire" in caplog.text

    def test_unreadable_entry_keeps_rest_of_repository(self, make_repo, md, deny_access):
        repo = make_repo(
            "r",
            {
                "skills/good/SKILL.md": md("good"),
                "skills/locked/SKILL.md": md("locked"),
                "agents/a.md": md("a"),
            },
        )
        deny_access("is_dir", repo / "skills" / "locked")

        resources = Scanner().scan_all([entry("r", repo)])

        assert sorted(r.name for r in resources) == ["a", "good"]

    def test_empty_input(self):
        assert Scanner().scan_all([]) == []

    def test_worker_count_is_capped(self, make_repo, md):
        repo = make_repo("only", {"skills/a/SKILL.md": md("a")})
        with patch("skillhub_cli.resources.scanner.ThreadPoolExecutor", wraps=ThreadPoolExecutor) as pool:
            Scanner(max_workers=8).scan_all([entry("only", repo)])
        assert pool.call_args.kwargs["max_workers"] == 1
