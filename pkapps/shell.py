"""A small command shell with pipes, output redirection, ``cd`` and ``exit``.

Commands are looked up by name in a mapping of callables taking
``(argv, out)``. Input piped into a command is available to it as the
shell's ``stdin`` attribute while it runs.
"""

import io
import os
import sys

from . import coreutils

MAX_ARGS = 100
PIPE = "'"
REDIRECT = "."

DEFAULT_COMMANDS = {
    "cat": coreutils.cat,
    "echo": coreutils.echo,
    "ls": coreutils.ls,
    "tree": coreutils.tree,
    "mkdir": coreutils.mkdir,
    "touch": coreutils.touch,
    "rm": coreutils.rm,
}


class ShellExit(Exception):
    """Raised by the ``exit`` built-in to end the shell."""

    def __init__(self, code=0):
        super().__init__(code)
        self.code = code


def split_line(line):
    """Split a command line at every single space.

    Consecutive spaces yield empty arguments. An empty line has no arguments.
    """
    if not line:
        return []
    args = line.split(" ")
    if len(args) > MAX_ARGS:
        raise ValueError(f"too many arguments: {len(args)}, at most {MAX_ARGS}")
    return args


class Shell:
    """Runs command lines against a table of named commands."""

    def __init__(self, commands=None, out=None):
        self.commands = dict(DEFAULT_COMMANDS if commands is None else commands)
        self.out = sys.stdout if out is None else out
        self.stdin = sys.stdin
        self.status = 0

    def run(self, argv, out):
        """Run one parsed command, handling pipes and redirection, writing to ``out``."""
        argv = list(argv)
        for pos, arg in enumerate(argv):
            if arg == PIPE:
                self._run_pipe(argv[:pos], argv[pos + 1:], out)
                return
            if arg == REDIRECT:
                self._run_redirect(argv[:pos], argv[pos + 1:], out)
                return

        if not argv:
            return

        name = argv[0]
        if name == "cd":
            self._change_directory(argv)
        elif name == "exit":
            raise ShellExit(0)
        else:
            command = self.commands.get(name)
            if command is None:
                out.write(f'Unable to execute "{name}"\n')
                self.status = 1
                return
            result = command(argv, out)
            self.status = result if isinstance(result, int) else 0

    def _run_pipe(self, left, right, out):
        captured = io.StringIO()
        self.run(left, captured)
        saved = self.stdin
        self.stdin = io.StringIO(captured.getvalue())
        try:
            self.run(right, out)
        finally:
            self.stdin = saved

    def _run_redirect(self, argv, rest, out):
        if not rest:
            out.write("Missing redirection target\n")
            self.status = 1
            return
        try:
            target = open(rest[0], "w", encoding="utf-8")
        except OSError:
            out.write(f'Unable to open "{rest[0]}"\n')
            self.status = 1
            return
        with target:
            self.run(argv, target)

    def _change_directory(self, argv):
        try:
            if len(argv) < 2:
                raise FileNotFoundError("no directory given")
            os.chdir(argv[1])
        except OSError:
            self.out.write("cd: Unable to change directory\n")
            self.status = 1
        else:
            self.status = 0

    def run_line(self, line):
        """Parse and run one command line; empty lines do nothing."""
        args = split_line(line)
        if not args:
            return
        self.run(args, self.out)

    def run_script(self, path):
        """Run every non-empty line of the file at ``path``."""
        with open(path, encoding="utf-8") as script:
            for line in script:
                self.run_line(line.rstrip("\r\n"))

    def repl(self, stdin):
        """Prompt for and run lines read from ``stdin`` until it ends."""
        self.stdin = stdin
        while True:
            self.out.write("> ")
            line = stdin.readline()
            if not line:
                return
            self.out.write(line if line.endswith("\n") else line + "\n")
            self.run_line(line.rstrip("\r\n"))


def main(argv=None):
    """Run the shell interactively, or on a script file; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    shell = Shell()
    shell.out.write("SHELL START\n")
    try:
        if not args:
            shell.repl(sys.stdin)
        elif len(args) == 1:
            shell.run_script(args[0])
        else:
            shell.out.write("Invalid arguments\n")
    except ShellExit as exc:
        return exc.code
    return 0