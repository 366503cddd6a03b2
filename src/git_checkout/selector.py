"""Branch selection state machine.

The selector owns the branch snapshot and the cursor. It has no knowledge of
the terminal: the TUI forwards key actions to it and renders its state.
"""

import logging
from enum import Enum
from typing import Optional

from git_checkout.git import Branch, GitError, NoBranchesError, Repository, checkout_branch, list_branches

logger = logging.getLogger(__name__)


class SelectorState(Enum):
    """Selector state."""

    BROWSING = "browsing"
    SUCCESS = "success"
    ERROR = "error"
    QUIT = "quit"


class CursorPolicy(Enum):
    """What the cursor does when moved past either end of the list."""

    WRAP = "wrap"
    CLAMP = "clamp"


class Selector:
    """Cursor navigation and guarded checkout over a fixed branch list."""

    def __init__(
        self,
        repo: Repository,
        branches: list[Branch],
        policy: CursorPolicy = CursorPolicy.WRAP,
    ) -> None:
        """Initialize selector.

        Args:
            repo: Repository used for the checkout
            branches: Branch snapshot, in display order
            policy: Cursor behaviour at the list ends
        """
        self.repo = repo
        self.branches = list(branches)
        self.policy = policy
        self.state = SelectorState.BROWSING
        self.message: Optional[str] = None
        self.is_error = False
        self.cursor = next((i for i, branch in enumerate(self.branches) if branch.is_current), 0)

    @classmethod
    def from_repository(cls, repo: Repository, policy: CursorPolicy = CursorPolicy.WRAP) -> "Selector":
        """Create a selector from the repository's local branches.

        A repository without branches gives an empty selector with a message
        instead of an error.
        """
        try:
            branches = list_branches(repo)
        except NoBranchesError as err:
            selector = cls(repo, [], policy)
            selector.message = str(err)
            return selector
        return cls(repo, branches, policy)

    @property
    def is_empty(self) -> bool:
        """Whether there is nothing to select."""
        return not self.branches

    @property
    def selected(self) -> Optional[Branch]:
        """Branch under the cursor."""
        if self.is_empty:
            return None
        return self.branches[self.cursor]

    @property
    def current(self) -> Optional[Branch]:
        """Active branch, if it is in the list."""
        return next((branch for branch in self.branches if branch.is_current), None)

    def move_up(self) -> None:
        self._move(-1)

    def move_down(self) -> None:
        self._move(1)

    def _move(self, step: int) -> None:
        if self.is_empty:
            return
        target = self.cursor + step
        if self.policy == CursorPolicy.WRAP:
            self.cursor = target % len(self.branches)
        else:
            self.cursor = min(max(target, 0), len(self.branches) - 1)
        self._browse()

    def _browse(self) -> None:
        self.state = SelectorState.BROWSING
        self.message = None
        self.is_error = False

    def confirm(self) -> None:
        """Check out the branch under the cursor.

        Failures are recorded in the state and message, never raised, and
        leave the branch snapshot unchanged.
        """
        branch = self.selected
        if branch is None:
            return

        if branch.is_current:
            self.is_error = False
            self.state = SelectorState.SUCCESS
            self.message = f"Already on '{branch.name}'"
            return

        try:
            checkout_branch(self.repo, branch.name)
        except GitError as err:
            logger.debug("Checkout of %s failed: %s", branch.name, err)
            self.state = SelectorState.ERROR
            self.message = str(err)
            self.is_error = True
            return

        self.branches = [Branch(b.name, b.name == branch.name) for b in self.branches]
        self.is_error = False
        self.state = SelectorState.SUCCESS
        self.message = f"Switched to branch '{branch.name}'"

    def quit(self) -> None:
        """Stop browsing. The last message and is_error are kept for reporting."""
        self.state = SelectorState.QUIT
