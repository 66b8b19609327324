"""Runs submitted command lines.

``cd`` and ``exit`` are built-ins: there is no ``cd`` executable to
delegate to, and ``exit`` must end this process rather than a child.
Everything else is spawned as a foreground child process that inherits
the shell's standard streams.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Callable, Protocol

from pi.shell.errors import ExecutionFailure

logger = logging.getLogger(__name__)

CHDIR = "cd"
EXIT = "exit"


class Executor(Protocol):
    def execute(self, command_line: str) -> int: ...


class CommandExecutor:
    """Executes command lines split on whitespace.

    Args:
        chdir: Function used by the ``cd`` built-in.
        home_dir: Function returning the user's home directory.
    """

    def __init__(
        self,
        *,
        chdir: Callable[[str], None] = os.chdir,
        home_dir: Callable[[], Path] = Path.home,
    ) -> None:
        self._chdir = chdir
        self._home_dir = home_dir

    def execute(self, command_line: str) -> int:
        """Run *command_line* and return its exit status (0 on success).

        Raises:
            ExecutionFailure: the program could not be started, a built-in
                failed, or the program exited with a non-zero status.
            SystemExit: the ``exit`` built-in was invoked.
        """
        argv = command_line.split()
        if not argv:
            return 0

        prog, args = argv[0], argv[1:]
        if prog == CHDIR:
            return self._change_directory(args)
        if prog == EXIT:
            self._exit(args)

        return self._spawn(argv)

    def _change_directory(self, args: list[str]) -> int:
        if args:
            target = args[0]
        else:
            try:
                target = str(self._home_dir())
            except (RuntimeError, KeyError) as exc:
                raise ExecutionFailure("cd: path required") from exc
        try:
            self._chdir(target)
        except OSError as exc:
            raise ExecutionFailure(f"cd: {exc.strerror or exc}: {target}") from exc
        logger.debug("Changed directory to %s", target)
        return 0

    def _exit(self, args: list[str]) -> None:
        status = 0
        if args:
            try:
                status = int(args[0])
            except ValueError as exc:
                raise ExecutionFailure(f"exit: numeric argument required: {args[0]}") from exc
        logger.debug("exit built-in called with status %d", status)
        raise SystemExit(status)

    def _spawn(self, argv: list[str]) -> int:
        logger.debug("Running %s", argv)
        try:
            proc = subprocess.Popen(argv)
        except FileNotFoundError as exc:
            raise ExecutionFailure(f"{argv[0]}: command not found") from exc
        except OSError as exc:
            raise ExecutionFailure(f"{argv[0]}: {exc.strerror or exc}") from exc

        # Ctrl-C belongs to the child; keep waiting until it is gone.
        while True:
            try:
                status = proc.wait()
                break
            except KeyboardInterrupt:
                continue

        if status < 0:
            raise ExecutionFailure(f"terminated by signal {-status}", status=status)
        if status != 0:
            raise ExecutionFailure(f"exit status {status}", status=status)
        return status
