"""Interactive git branch checkout.

Features:
- List local branches with the current one highlighted
- Navigate with arrow keys or j/k, check out with Enter
- Refuse checkout while tracked files have uncommitted changes
- Non-interactive branch listing with --list
"""

__version__ = "0.1.0"
