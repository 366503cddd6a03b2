"""Test configuration and fixtures."""

from pathlib import Path
from typing import Generator

import pytest
from git import Actor, Repo

AUTHOR = Actor("Test User", "test@example.com")


def init_repo(path: Path) -> Repo:
    """Initialize a repository with a committer identity."""
    repo = Repo.init(path)
    repo.config_writer().set_value("user", "name", AUTHOR.name).release()
    repo.config_writer().set_value("user", "email", AUTHOR.email).release()
    return repo


@pytest.fixture
def test_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a repository with branches main and feature/x, on main with a clean tree.

    Returns:
        Path to the working tree
    """
    path = tmp_path / "repo"
    path.mkdir()
    repo = init_repo(path)

    # Create initial commit
    readme = path / "README.md"
    readme.write_text("# Test Repository")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit", author=AUTHOR)

    # Ensure the only branch so far is main, whatever init.defaultBranch says
    if repo.active_branch.name != "main":
        default = repo.active_branch
        repo.create_head("main").checkout()
        repo.delete_head(default)
    main_branch = repo.heads.main

    # Add a feature branch with its own commit
    repo.create_head("feature/x").checkout()
    feature_file = path / "feature.txt"
    feature_file.write_text("Feature content")
    repo.index.add(["feature.txt"])
    repo.index.commit("Add feature", author=AUTHOR)

    main_branch.checkout()

    yield path

    # Cleanup is handled by pytest's tmp_path fixture


@pytest.fixture
def empty_repo(tmp_path: Path) -> Path:
    """Create a freshly initialized repository with no commits and therefore no branches."""
    path = tmp_path / "empty"
    path.mkdir()
    init_repo(path)
    return path


@pytest.fixture
def not_a_repo(tmp_path: Path) -> Path:
    """Create a plain directory outside any repository."""
    path = tmp_path / "plain"
    path.mkdir()
    return path
