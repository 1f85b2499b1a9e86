"""
Tests for project file discovery.
"""

import os

import pytest

from monotag.discovery import find_project_files, split_patterns


@pytest.fixture
def repo_tree(tmp_path):
    """A small monorepo layout with mixed project files."""
    files = [
        "src/Api/Api.csproj",
        "src/Core/Core.fsproj",
        "src/Legacy/Legacy.vbproj",
        "tests/Api.Tests/Api.Tests.csproj",
        "docs/readme.txt",
        "Root.csproj",
    ]
    for rel in files:
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("<Project />\n")
    # A directory whose name looks like a project file
    (tmp_path / "weird.csproj").mkdir()
    return tmp_path


def rel(paths, root):
    return [os.path.relpath(p, root).replace(os.sep, '/') for p in paths]


class TestSplitPatterns:
    def test_single(self):
        assert split_patterns("**/*.csproj") == ["**/*.csproj"]

    def test_comma_and_newline(self):
        assert split_patterns("a.csproj, b.csproj\nc.csproj,,") == ["a.csproj", "b.csproj", "c.csproj"]

    def test_empty(self):
        assert split_patterns("") == []

    def test_comments_dropped(self):
        assert split_patterns("# projects\nsrc\n!src/Legacy") == ["src", "!src/Legacy"]

    def test_list_input(self):
        assert split_patterns(["a.csproj", "b.csproj, c.csproj"]) == ["a.csproj", "b.csproj", "c.csproj"]


class TestFindProjectFiles:
    def test_recursive_csproj(self, repo_tree):
        found = find_project_files("**/*.csproj", str(repo_tree))

        assert rel(found, repo_tree) == [
            "Root.csproj",
            "src/Api/Api.csproj",
            "tests/Api.Tests/Api.Tests.csproj",
        ]

    def test_results_are_absolute(self, repo_tree):
        found = find_project_files("**/*.csproj", str(repo_tree))

        assert all(os.path.isabs(p) for p in found)

    def test_non_project_files_dropped(self, repo_tree):
        found = find_project_files("**/*", str(repo_tree))

        assert rel(found, repo_tree) == [
            "Root.csproj",
            "src/Api/Api.csproj",
            "src/Core/Core.fsproj",
            "src/Legacy/Legacy.vbproj",
            "tests/Api.Tests/Api.Tests.csproj",
        ]

    def test_comma_list_deduplicated(self, repo_tree):
        found = find_project_files("src/Api/Api.csproj,src/**/*.csproj, src/Core/Core.fsproj", str(repo_tree))

        assert rel(found, repo_tree) == ["src/Api/Api.csproj", "src/Core/Core.fsproj"]

    def test_no_matches(self, repo_tree):
        assert find_project_files("nothing/**/*.csproj", str(repo_tree)) == []

    def test_directory_matches_descendants(self, repo_tree):
        found = find_project_files("src", str(repo_tree))

        assert rel(found, repo_tree) == [
            "src/Api/Api.csproj",
            "src/Core/Core.fsproj",
            "src/Legacy/Legacy.vbproj",
        ]

    def test_negated_pattern_excludes(self, repo_tree):
        found = find_project_files("**/*.csproj\n!tests/**", str(repo_tree))

        assert rel(found, repo_tree) == ["Root.csproj", "src/Api/Api.csproj"]

    def test_negated_directory_excludes_descendants(self, repo_tree):
        found = find_project_files("src, !src/Legacy", str(repo_tree))

        assert rel(found, repo_tree) == ["src/Api/Api.csproj", "src/Core/Core.fsproj"]

    def test_patterns_apply_in_order(self, repo_tree):
        found = find_project_files("!src/**\nsrc/Api", str(repo_tree))

        assert rel(found, repo_tree) == ["src/Api/Api.csproj"]

    def test_list_of_patterns(self, repo_tree):
        found = find_project_files(["src/Api", "Root.csproj"], str(repo_tree))

        assert rel(found, repo_tree) == ["Root.csproj", "src/Api/Api.csproj"]

    def test_git_directory_skipped(self, repo_tree):
        git_dir = repo_tree / ".git" / "modules"
        git_dir.mkdir(parents=True)
        (git_dir / "Stale.csproj").write_text("<Project />\n")

        found = find_project_files(".", str(repo_tree))

        assert "Stale.csproj" not in [os.path.basename(p) for p in found]
        assert len(found) == 5
