"""Textual application for interactive branch checkout."""

from pathlib import Path

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Label, Static

from git_checkout.selector import Selector, SelectorState

HELP_TEXT = "Press 'q' to quit, Enter to checkout, j/k to navigate"


class BranchList(Static):
    """Branch rows with the cursor row marked and the active branch in green."""

    DEFAULT_CSS = """
    BranchList {
        width: 100%;
        height: auto;
    }
    """

    def __init__(self, selector: Selector) -> None:
        super().__init__()
        self._selector = selector
        self.rendered_text = Text()

    def on_mount(self) -> None:
        self.refresh_display()

    def refresh_display(self) -> None:
        """Render one line per branch from the selector's state."""
        text = Text()
        for i, branch in enumerate(self._selector.branches):
            if i > 0:
                text.append("\n")
            selected = i == self._selector.cursor
            row_style = "bold on grey23" if selected else ""
            text.append("> " if selected else "  ", style=row_style)
            if branch.is_current:
                text.append(branch.name, style=f"bold green {row_style}".strip())
                text.append(" (current)", style=f"turquoise2 {row_style}".strip())
            else:
                text.append(branch.name, style=row_style)
        self.rendered_text = text
        self.update(text)


class TitleBar(Static):
    """Tool name and repository root."""

    def __init__(self, root: Path) -> None:
        super().__init__(id="title")
        self.rendered_text = Text(f"Git Checkout - {root}")

    def on_mount(self) -> None:
        self.update(self.rendered_text)


class StatusLine(Static):
    """Last checkout message, or key help when there is none."""

    DEFAULT_CSS = """
    StatusLine {
        dock: bottom;
        height: auto;
        min-height: 3;
        border: solid $primary;
        padding: 0 1;
    }
    """

    def __init__(self, selector: Selector) -> None:
        super().__init__()
        self._selector = selector
        self.rendered_text = Text()

    def on_mount(self) -> None:
        self.refresh_display()

    def refresh_display(self) -> None:
        message = self._selector.message
        if message is None:
            text = Text(HELP_TEXT)
        elif self._selector.is_error:
            text = Text(message, style="red")
        else:
            text = Text(message, style="green")
        self.rendered_text = text
        self.update(text)


class CheckoutApp(App):
    """Interactive TUI listing local branches for checkout.

    The selector does all state handling; this class maps keys to selector
    calls and re-renders after each one.
    """

    CSS = """
    #title {
        dock: top;
        height: 3;
        border: solid $primary;
        padding: 0 1;
        color: cyan;
        text-style: bold;
    }

    #branch-scroll {
        border: solid $primary;
        border-title-align: left;
        height: 1fr;
    }

    #empty-message {
        padding: 1 2;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("q", "exit_app", "Quit", priority=True),
        Binding("escape", "exit_app", "Quit", priority=True),
        Binding("up", "cursor_up", "Up", show=False, priority=True),
        Binding("k", "cursor_up", "Up", show=False, priority=True),
        Binding("down", "cursor_down", "Down", show=False, priority=True),
        Binding("j", "cursor_down", "Down", show=False, priority=True),
        Binding("enter", "checkout", "Checkout", priority=True),
    ]

    def __init__(self, selector: Selector, exit_on_checkout: bool = False) -> None:
        """Initialize the app.

        Args:
            selector: Selector over the repository's branches
            exit_on_checkout: Exit as soon as a checkout succeeds
        """
        super().__init__()
        self.selector = selector
        self._exit_on_checkout = exit_on_checkout

    def compose(self) -> ComposeResult:
        """Create the application layout."""
        yield TitleBar(self.selector.repo.root)
        with VerticalScroll(id="branch-scroll"):
            if self.selector.is_empty:
                yield Label("No local branches found. Press 'q' to quit.", id="empty-message")
            else:
                yield BranchList(self.selector)
        yield StatusLine(self.selector)

    def on_mount(self) -> None:
        self.query_one("#branch-scroll", VerticalScroll).border_title = "Branches"

    def action_exit_app(self) -> None:
        """Quit the application."""
        self.selector.quit()
        self.exit()

    def action_cursor_up(self) -> None:
        self.selector.move_up()
        self._refresh_view()

    def action_cursor_down(self) -> None:
        self.selector.move_down()
        self._refresh_view()

    def action_checkout(self) -> None:
        """Check out the highlighted branch."""
        if self.selector.is_empty:
            return
        self.selector.confirm()
        self._refresh_view()
        if self._exit_on_checkout and self.selector.state == SelectorState.SUCCESS:
            self.action_exit_app()

    def _refresh_view(self) -> None:
        """Re-render the list and status line and keep the cursor row visible."""
        for branch_list in self.query(BranchList):
            branch_list.refresh_display()
            self._scroll_to_cursor()
        self.query_one(StatusLine).refresh_display()

    def _scroll_to_cursor(self) -> None:
        scroll = self.query_one("#branch-scroll", VerticalScroll)
        height = scroll.scrollable_content_region.height
        cursor = self.selector.cursor
        if cursor < scroll.scroll_y:
            scroll.scroll_to(y=cursor, animate=False)
        elif height and cursor >= scroll.scroll_y + height:
            scroll.scroll_to(y=cursor - height + 1, animate=False)
