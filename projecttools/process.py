"""Project Tools process execution: drush, local shell and interactive tools."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

import click

from .constants import DEFAULT_DRUSH, TIMEOUT_EXIT_CODE
from .exceptions import ProjectToolsError

if TYPE_CHECKING:
    from .aliases import SiteTarget

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    """Outcome of a single command run."""

    success: bool
    output: str = ""
    error_output: str = ""
    returncode: int = 0


def command_succeeded(result: Any) -> bool:
    """Return False if result represents a failed call.

    A failure is the boolean False (or None), a RunResult that did not
    succeed, or a mapping carrying a non-empty error status.
    """
    if result is None or result is False:
        return False
    if isinstance(result, RunResult):
        return result.success
    if isinstance(result, Mapping):
        return not (result.get("error_status") or result.get("error_log"))
    return True


def render_options(options: Mapping[str, Any] | None) -> list[str]:
    """Render an options mapping as drush-style --key=value arguments."""
    rendered: list[str] = []
    for key, value in (options or {}).items():
        if value is None or value is False:
            continue
        flag = key if key.startswith("-") else f"--{key}"
        if value is True or value == "":
            rendered.append(flag)
        else:
            rendered.append(f"{flag}={value}")
    return rendered


def run_process(
    cmd: Sequence[str] | str,
    *,
    cwd: str | None = None,
    shell: bool = False,
    timeout_s: int | None = None,
) -> tuple[int, str, str]:
    """
    Executes cmd and waits for it to finish.

    Returns (returncode, stdout, stderr). Does NOT raise on non-zero rc.
    """
    logger.debug("Process command: %s", cmd if isinstance(cmd, str) else shlex.join(cmd))
    if cwd:
        logger.debug("Process cwd: %s", cwd)

    start_time = time.time()
    try:
        p = subprocess.run(
            cmd,
            cwd=cwd,
            shell=shell,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout_s,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        elapsed = time.time() - start_time
        logger.debug("Process timeout after %.2fs", elapsed)
        return (
            TIMEOUT_EXIT_CODE,
            e.stdout.decode("utf-8", "replace") if e.stdout else "",
            e.stderr.decode("utf-8", "replace") if e.stderr else "command timeout",
        )
    except FileNotFoundError:
        if shell:
            raise ProjectToolsError(f"Working directory not found: {cwd}")
        raise ProjectToolsError(f"{cmd[0]} binary not found on PATH.")

    elapsed = time.time() - start_time
    logger.debug("Process completed in %.2fs (rc=%d)", elapsed, p.returncode)
    return (
        p.returncode,
        p.stdout.decode("utf-8", "replace"),
        p.stderr.decode("utf-8", "replace"),
    )


class CommandRunner:
    """Run drush commands against site targets, or shell commands locally.

    Captured stdout is echoed on success; stderr of a failed command only goes
    to the debug log. Command failure never raises, it is reported through
    RunResult.success. Each command is attempted once.
    """

    def __init__(
        self,
        drush: str = DEFAULT_DRUSH,
        *,
        timeout_s: int | None = None,
        echo: Callable[[str], None] = click.echo,
    ):
        self.drush = drush
        self.timeout_s = timeout_s
        self.echo = echo

    def drush_command(
        self,
        site_target: SiteTarget,
        command_name: str,
        arguments: Sequence[str] = (),
        options: Mapping[str, Any] | None = None,
    ) -> list[str]:
        """Build the drush argv for a command on a site target."""
        return [
            self.drush,
            site_target.alias,
            command_name,
            *arguments,
            *render_options(options),
            "--yes",
        ]

    def run_remote(
        self,
        site_target: SiteTarget,
        command_name: str,
        arguments: Sequence[str] = (),
        options: Mapping[str, Any] | None = None,
    ) -> RunResult:
        self.echo(
            "INVOKE: drush {} {} {}".format(
                command_name, " ".join(arguments), " ".join(render_options(options))
            ).rstrip()
        )
        cmd = self.drush_command(site_target, command_name, arguments, options)
        rc, out, err = run_process(cmd, timeout_s=self.timeout_s)
        return self._report(rc, out, err)

    def run_local(self, command_line: str, working_directory: str | None = None) -> RunResult:
        cwd = working_directory or None
        self.echo(f"SHELL: {command_line} [{cwd or os.getcwd()}]")
        rc, out, err = run_process(command_line, cwd=cwd, shell=True, timeout_s=self.timeout_s)
        return self._report(rc, out, err)

    def run_interactive(self, cmd: Sequence[str], cwd: str | None = None) -> int:
        """Run cmd attached to the terminal and return its exit code."""
        logger.debug("Interactive command: %s", shlex.join(cmd))
        try:
            p = subprocess.run(list(cmd), cwd=cwd, check=False)
        except FileNotFoundError:
            raise ProjectToolsError(f"{cmd[0]} binary not found on PATH.")
        logger.debug("Interactive command finished (rc=%d)", p.returncode)
        return p.returncode

    def _report(self, rc: int, out: str, err: str) -> RunResult:
        result = RunResult(success=(rc == 0), output=out, error_output=err, returncode=rc)
        if result.success:
            if out:
                self.echo(out.rstrip("\n"))
        else:
            logger.debug("Command failed (rc=%d): %s", rc, err.strip())
        return result
