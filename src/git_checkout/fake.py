"""In-memory repository for testing."""

from pathlib import Path
from typing import Optional

from git_checkout.git import CheckoutFailedError, Repository


class FakeRepository(Repository):
    """In-memory fake implementation of the repository operations.

    State Management:
    -----------------
    checkout() moves the current branch, so later calls see the switch.

    Mutation Tracking:
    -----------------
    checked_out_branches records every branch passed to checkout(), including
    ones that failed, so tests can assert checkout was never attempted.
    """

    def __init__(
        self,
        branches: Optional[list[str]] = None,
        current: str = "",
        dirty_paths: Optional[list[str]] = None,
        checkout_errors: Optional[dict[str, str]] = None,
        root: Path = Path("/fake/repo"),
    ) -> None:
        """Create FakeRepository with pre-configured state.

        Args:
            branches: Local branch names, returned in the given order
            current: Active branch name, empty for a detached HEAD
            dirty_paths: Tracked files reported as modified
            checkout_errors: Mapping of branch name -> message raised by checkout()
            root: Reported working tree root
        """
        self._branches = list(branches) if branches is not None else []
        self._current = current
        self._dirty_paths = list(dirty_paths) if dirty_paths is not None else []
        self._checkout_errors = checkout_errors if checkout_errors is not None else {}
        self._root = root
        self._checked_out_branches: list[str] = []

    @property
    def root(self) -> Path:
        """Reported working tree root."""
        return self._root

    def get_branch_names(self) -> list[str]:
        return list(self._branches)

    def get_current_branch_name(self) -> str:
        return self._current

    def get_dirty_paths(self) -> list[str]:
        return list(self._dirty_paths)

    def checkout(self, branch_name: str) -> None:
        self._checked_out_branches.append(branch_name)
        if branch_name in self._checkout_errors:
            raise CheckoutFailedError(self._checkout_errors[branch_name])
        self._current = branch_name

    @property
    def checked_out_branches(self) -> list[str]:
        """Branches passed to checkout(), in call order."""
        return list(self._checked_out_branches)
