"""Small file utilities: cat, echo, ls, tree, mkdir, touch and rm.

Each utility takes its argument vector (the program name first) and a text
stream to write to, and returns the exit status.
"""

import codecs
import os
import sys

_CHUNK_SIZE = 1024
_TREE_MAX_DEPTH = 50


def _prog(argv, default):
    return argv[0] if argv else default


def cat(argv, out=None):
    """Write the contents of every named file to ``out`` in turn."""
    out = sys.stdout if out is None else out
    if len(argv) < 2:
        out.write(
            f"Invalid arguments\nUsage: {_prog(argv, 'cat')} <file 1> [<file 2> ...]\n"
        )
        return 1

    for path in argv[1:]:
        try:
            handle = open(path, "rb")
        except IsADirectoryError:
            out.write(f'Unable to read "{path}"\n')
            return 1
        except OSError:
            out.write(f'Unable to open "{path}"\n')
            return 1

        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        with handle:
            while True:
                try:
                    chunk = handle.read(_CHUNK_SIZE)
                except OSError:
                    out.write(f'Unable to read "{path}"\n')
                    return 1
                if not chunk:
                    break
                out.write(decoder.decode(chunk))
        out.write(decoder.decode(b"", final=True))

    return 0


def echo(argv, out=None):
    """Write the arguments separated by spaces, followed by a newline."""
    out = sys.stdout if out is None else out
    out.write(" ".join(argv[1:]) + "\n")
    return 0


def ls(argv, out=None):
    """List the entries of a directory, one per line, in name order."""
    out = sys.stdout if out is None else out
    if len(argv) <= 1:
        path = "."
    elif len(argv) == 2:
        path = argv[1]
    else:
        out.write(f"Invalid arguments\nUsage: {_prog(argv, 'ls')} [<dir>]\n")
        return 1

    try:
        names = sorted(os.listdir(path))
    except OSError:
        out.write("Unable to open directory\n")
        return 1

    for name in names:
        out.write(f"{name}\n")
    return 0


def _list_tree(path, indent, out):
    if indent == _TREE_MAX_DEPTH:
        out.write("Max reached\n")
        return

    try:
        with os.scandir(path) as scan:
            entries = sorted(scan, key=lambda entry: entry.name)
    except OSError:
        out.write(f"Unable to open directory: {path}\n")
        return

    for entry in entries:
        out.write("| " * indent + entry.name + "\n")
        if entry.is_dir(follow_symlinks=False):
            _list_tree(f"{path}/{entry.name}", indent + 1, out)


def tree(argv, out=None):
    """Print a directory and everything beneath it as an indented tree."""
    out = sys.stdout if out is None else out
    if len(argv) == 2:
        root = argv[1]
    elif len(argv) <= 1:
        root = "."
    else:
        out.write("Invalid arguments!\n")
        return 1

    out.write(f"{root}\n")
    _list_tree(root, 1, out)
    return 0


def mkdir(argv, out=None):
    """Create one directory."""
    out = sys.stdout if out is None else out
    if len(argv) != 2:
        out.write(f"Invalid arguments\nUsage: {_prog(argv, 'mkdir')} <path>\n")
        return 1

    try:
        os.mkdir(argv[1])
    except OSError:
        out.write("Error while creating directory\n")
        return 1
    return 0


def touch(argv, out=None):
    """Create every named file that does not exist; existing files are kept."""
    if len(argv) <= 1:
        return 1

    for path in argv[1:]:
        try:
            with open(path, "ab"):
                pass
        except OSError:
            continue
    return 0


def rm(argv, out=None):
    """Remove every named file; files that cannot be removed are skipped."""
    out = sys.stdout if out is None else out
    if len(argv) <= 1:
        out.write(
            f"Invalid arguments\nUsage: {_prog(argv, 'rm')} <file 1> <file 2> ...\n"
        )
        return 1

    for path in argv[1:]:
        try:
            os.remove(path)
        except OSError:
            continue
    return 0


_UTILITIES = {
    "cat": cat,
    "echo": echo,
    "ls": ls,
    "tree": tree,
    "mkdir": mkdir,
    "touch": touch,
    "rm": rm,
}


def main(argv=None):
    """Run the utility named by the first argument; return its exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args or args[0] not in _UTILITIES:
        names = "|".join(_UTILITIES)
        print(f"Usage: coreutils {{{names}}} [<args> ...]", file=sys.stderr)
        return 1
    return _UTILITIES[args[0]](args, sys.stdout)