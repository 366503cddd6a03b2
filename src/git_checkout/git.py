"""Git repository operations."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Git operation error."""


class NotARepositoryError(GitError):
    """The path is not inside a usable git working tree."""


class NoBranchesError(GitError):
    """The repository has no local branches."""


class DirtyWorkingTreeError(GitError):
    """Checkout refused because tracked files have uncommitted changes."""

    def __init__(self, paths: list[str]) -> None:
        """Initialize error.

        Args:
            paths: Tracked files with staged or unstaged modifications
        """
        shown = ", ".join(paths[:3])
        if len(paths) > 3:
            shown += f" and {len(paths) - 3} more"
        super().__init__(f"Uncommitted changes would be overwritten by checkout: {shown}. Commit or stash them first.")
        self.paths = paths


class CheckoutFailedError(GitError):
    """The underlying checkout failed."""


@dataclass(frozen=True)
class Branch:
    """A local branch snapshot."""

    name: str
    is_current: bool = False


class Repository(ABC):
    """The repository operations the selector depends on.

    Implementations: GitRepo (GitPython) and FakeRepository (in-memory, for tests).
    """

    @property
    @abstractmethod
    def root(self) -> Path:
        """Root of the working tree."""
        ...

    @abstractmethod
    def get_branch_names(self) -> list[str]:
        """Get local branch names, in display order."""
        ...

    @abstractmethod
    def get_current_branch_name(self) -> str:
        """Get the active branch name, or an empty string when HEAD is detached."""
        ...

    @abstractmethod
    def get_dirty_paths(self) -> list[str]:
        """Get tracked paths with staged or unstaged modifications."""
        ...

    @abstractmethod
    def checkout(self, branch_name: str) -> None:
        """Switch to a local branch.

        Raises:
            CheckoutFailedError: If the checkout could not be performed
        """
        ...

    def get_branch_last_commit(self, branch_name: str) -> str:
        """Get the last commit timestamp for a branch, or an empty string."""
        return ""


class GitRepo(Repository):
    """Git repository operations."""

    def __init__(self, path: Path) -> None:
        """Initialize repository.

        The path may point anywhere inside the working tree.
        """
        try:
            self.repo: Repo = Repo(path, search_parent_directories=True)
        except (NoSuchPathError, InvalidGitRepositoryError) as err:
            raise NotARepositoryError(f"Not a git repository: {path}") from err
        except (GitCommandError, ValueError) as err:
            raise NotARepositoryError(f"Failed to open repository: {err}") from err
        if self.repo.bare:
            raise NotARepositoryError("Cannot operate on bare repository")
        logger.debug("Opened repository at %s", self.repo.working_tree_dir)

    @property
    def root(self) -> Path:
        """Root of the working tree."""
        return Path(str(self.repo.working_tree_dir))

    def get_branch_names(self) -> list[str]:
        """Get local branch names sorted by name."""
        try:
            return sorted(head.name for head in self.repo.heads)
        except (GitCommandError, ValueError) as err:
            raise GitError(f"Failed to list branches: {err}") from err

    def get_current_branch_name(self) -> str:
        """Get current branch name."""
        try:
            try:
                return self.repo.active_branch.name
            except TypeError:
                # Detached HEAD
                return ""
        except (GitCommandError, ValueError) as err:
            raise GitError(f"Failed to get current branch: {err}") from err

    def get_dirty_paths(self) -> list[str]:
        """Get tracked paths that differ from the index or from HEAD."""
        try:
            paths = {diff.a_path or diff.b_path for diff in self.repo.index.diff(None)}
            if self.repo.head.is_valid():
                paths.update(diff.a_path or diff.b_path for diff in self.repo.index.diff("HEAD"))
            return sorted(paths)
        except GitCommandError as err:
            raise GitError(f"Failed to check working tree: {err}") from err

    def checkout(self, branch_name: str) -> None:
        """Switch to a local branch with `git checkout`."""
        try:
            self.repo.git.checkout(branch_name)
        except GitCommandError as err:
            raise CheckoutFailedError(f"Failed to checkout '{branch_name}': {git_error_message(err)}") from err
        logger.debug("Checked out %s", branch_name)

    def get_branch_last_commit(self, branch_name: str) -> str:
        """Get the last commit timestamp for a branch."""
        try:
            return str(
                self.repo.git.log(
                    "-1",
                    "--format=%cd",
                    "--date=format:'%a - %B %d @ %H:%M'",
                    branch_name,
                ).strip("'")
            )
        except GitCommandError:
            return ""


def git_error_message(err: GitCommandError) -> str:
    """Get git's own error output from a failed command, on one line.

    GitPython formats stderr as "stderr: '<output>'"; the wrapper, the quotes
    and git's leading "error: " are dropped.
    """
    stderr = str(err.stderr or "").strip()
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:") :].strip().strip("'")
    lines = [line.strip() for line in stderr.splitlines() if line.strip()]
    if not lines:
        return " ".join(str(err).split())
    if lines[0].startswith("error: "):
        lines[0] = lines[0][len("error: ") :]
    return " ".join(lines)


def list_branches(repo: Repository) -> list[Branch]:
    """List local branches with the active one flagged.

    Raises:
        NoBranchesError: If the repository has no local branches
    """
    names = repo.get_branch_names()
    if not names:
        raise NoBranchesError("No local branches found")
    current = repo.get_current_branch_name()
    logger.debug("Found %d branches, current is %r", len(names), current)
    return [Branch(name, name == current) for name in names]


def checkout_branch(repo: Repository, branch_name: str) -> None:
    """Check out a branch unless the working tree has uncommitted changes.

    Raises:
        DirtyWorkingTreeError: If tracked files are modified; nothing is checked out
        CheckoutFailedError: If the checkout itself failed
    """
    dirty = repo.get_dirty_paths()
    if dirty:
        logger.debug("Refusing checkout of %s, dirty paths: %s", branch_name, dirty)
        raise DirtyWorkingTreeError(dirty)
    repo.checkout(branch_name)
