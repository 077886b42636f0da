"""Project Tools reload command."""

from __future__ import annotations

from ..exceptions import NotImplementedCommand


def cmd_project_reload() -> None:
    """Reload a target site from a source site.

    Not implemented yet; kept on the command line so the gap stays visible.
    """
    raise NotImplementedCommand()
