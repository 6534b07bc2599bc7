"""
Shell command adapter — package managers and installer scripts.

Runs argv lists (never a shell string) and captures their output.
Installer scripts that upstream documents as ``curl ... | sh`` are
downloaded to a scoped temp directory first and run as a file, so a
truncated download can never be half-executed.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import tempfile
import time
from pathlib import Path

from devstrap.adapters.base import Adapter, ExecutionContext
from devstrap.core.context import RunContext
from devstrap.core.errors import FetchError
from devstrap.core.fetch import download
from devstrap.core.models.action import Receipt

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 1800


class ShellCommandAdapter(Adapter):
    """Execute external commands and capture output.

    Action params:
        argv (list[str]): Command to execute.
        sudo (bool): Prefix with sudo when not root (default: False).
        preserve_env (bool): Use ``sudo -E`` (default: False).
        env (dict[str, str]): Extra environment variables.
        script_url (str): Download this script and append its path to argv.
        script_args (list[str]): Arguments after the script path.
        timeout (int): Timeout in seconds (default: 1800).
    """

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self, run: RunContext) -> bool:
        return run.which("sh") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        argv = context.params.get("argv")
        if not argv or not isinstance(argv, list):
            return False, "Missing required param: 'argv'"
        if context.run.which(argv[0]) is None and not os.path.isabs(argv[0]):
            return False, f"Command not found: {argv[0]}"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        params = context.params
        script_url = params.get("script_url")

        if not script_url:
            return self._run(context, list(params["argv"]))

        with tempfile.TemporaryDirectory(prefix="devstrap-script-") as tmp:
            script = Path(tmp) / "install.sh"
            try:
                download(script_url, script)
            except FetchError as e:
                return Receipt.failure(
                    adapter=self.name,
                    action_id=context.action.id,
                    error=str(e),
                    metadata={"script_url": script_url},
                )
            argv = [*params["argv"], str(script), *params.get("script_args", [])]
            return self._run(context, argv)

    def _run(self, context: ExecutionContext, argv: list[str]) -> Receipt:
        params = context.params
        run = context.run
        timeout = params.get("timeout", DEFAULT_TIMEOUT)

        if params.get("sudo"):
            argv = run.sudo(argv, preserve_env=params.get("preserve_env", False))

        env = dict(run.environ)
        env["PATH"] = run.search_path
        env["HOME"] = str(run.home)
        env.update(params.get("env", {}))

        command = shlex.join(argv)
        logger.info("CMD %s", command)
        start = time.monotonic()

        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=timeout,
                env=env,
                cwd=str(run.home),
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command timed out after {timeout}s",
                metadata={"command": command, "timeout": timeout},
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command execution error: {e}",
                metadata={"command": command},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = result.stdout.strip()
        stderr = result.stderr.strip()
        if output:
            logger.debug("STDOUT %s", output[-2000:])
        if stderr:
            logger.debug("STDERR %s", stderr[-2000:])

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                action_id=context.action.id,
                output=output[-2000:],
                duration_ms=elapsed_ms,
                metadata={"command": command, "return_code": 0},
            )
        return Receipt.failure(
            adapter=self.name,
            action_id=context.action.id,
            error=stderr[-2000:] or f"Command exited with code {result.returncode}",
            duration_ms=elapsed_ms,
            metadata={"command": command, "return_code": result.returncode},
        )
