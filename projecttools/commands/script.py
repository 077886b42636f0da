"""Project Tools script command."""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import TYPE_CHECKING

from ..exceptions import CommandFailureError
from ..process import CommandRunner
from ..utils import find_script, scripts_path

if TYPE_CHECKING:
    from ..cli_types import ProjectScriptArgs


def cmd_project_script(args: ProjectScriptArgs, runner: CommandRunner | None = None) -> None:
    """Run a site script from the drupal root.

    Scripts live in the scripts directory next to the drupal root and are
    run with the drupal root as working directory.
    """
    drupal_root = Path(args.root or os.getcwd()).resolve()
    script = find_script(args.name, scripts_path(drupal_root))

    runner = runner or CommandRunner(timeout_s=args.timeout)
    result = runner.run_local(shlex.quote(str(script)), str(drupal_root))
    if not result.success:
        print(f"Script {script.name} failed (rc={result.returncode}).")
        if result.error_output:
            print(result.error_output.rstrip("\n"))
        raise CommandFailureError
