#!/usr/bin/env python3

"""
usage: head.py [-h] [-n COUNT] FILE [FILE ...]

show just the leading lines of a file

positional arguments:
  FILE                  a file to show the leading lines of

options:
  -h, --help            show this help message and exit
  -n COUNT, --lines COUNT
                        how many leading lines to show (default: 10)

quirks:
  requires a FILE, unlike bash "head" reading stdin when given no files
  takes "-5" and such as "-n 5", like mac "head -5"
  rejects "-n 0", "-n -5" and "-n +5", unlike linux "head -n -5" dropping trailing lines
  complains of each unreadable FILE and carries on, then exits 1 at the end

unsurprising quirks:
  prints "==> FILE <==" above each file, and a blank line between, when given two or more
  prompts for stdin, like mac bash "grep -R .", unlike bash "head"
  takes file "-" as meaning "/dev/stdin", like linux "head -", unlike mac "head -"

examples:
  head.py -n 3 /etc/passwd
  head.py head.py
  head.py -5 head.py
  head.py -n 5 head.py argdoc.py
  ls |head.py -n 3 -
"""


import contextlib
import os
import re
import sys

import argdoc


# deffed in many files  # missing from docs.python.org
class BrokenPipeErrorSink(contextlib.ContextDecorator):
    """Cut unhandled BrokenPipeError down to sys.exit(1)

    Test with large Stdout cut sharply, such as:  seq 99999 |head.py -99999 - |head -1

    More narrowly than:  signal.signal(signal.SIGPIPE, handler=signal.SIG_DFL)
    As per https://docs.python.org/3/library/signal.html#note-on-sigpipe
    """

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        (exc_type, exc, exc_traceback) = exc_info
        if isinstance(exc, BrokenPipeError):  # catch this one

            null_fileno = os.open(os.devnull, flags=os.O_WRONLY)
            os.dup2(null_fileno, sys.stdout.fileno())  # avoid the next one

            sys.exit(1)


@BrokenPipeErrorSink()
def main(argv=None):
    """Run from the command line, and return an exit status"""

    alt_argv = sys.argv if (argv is None) else argv

    # Parse the command line

    parser = argdoc.ArgumentParser(doc=__doc__)

    head_argv_tail = head_argv_tail_from(alt_argv[1:])
    args = parser.parse_args(head_argv_tail)

    count = head_count_from(parser, chars=args.lines)

    main.args = args

    # Show the leading lines of each file

    exit_status = head_paths(args.files, count=count)

    return exit_status


def head_argv_tail_from(argv_tail):
    """Take "-5" and such as "-n5", except as the value of "-n" or after "--" """

    alt_argv_tail = list(argv_tail)

    for (index, arg) in enumerate(argv_tail):
        if arg == "--":

            break

        if index and head_arg_takes_count(argv_tail[index - 1]):

            continue

        if re.match(r"^[-][0-9]+$", string=arg):
            alt_argv_tail[index] = "-n{}".format(-int(arg))

    return alt_argv_tail


def head_arg_takes_count(arg):
    """Say if the Arg is "-n" or "--lines", or an abbreviation such as "--li" """

    if arg == "-n":

        return True

    if arg.startswith("--l") and "--lines".startswith(arg):

        return True

    return False


def head_count_from(parser, chars):
    """Take the Chars of "-n COUNT" as a positive Int, else reject the usage"""

    if not re.match(r"^[0-9]+$", string=chars):
        parser.error("invalid number of lines: {!r}".format(chars))  # exits 2

    count = int(chars)
    if count < 1:
        parser.error("invalid number of lines: {!r}".format(chars))  # exits 2

    return count


#
# Show up to Count leading Lines of each File
#


def head_paths(paths, count, stdout=None, stderr=None):
    """Show the leading lines of each file in order, and return an exit status"""

    if count < 1:
        raise ValueError("count must be 1 or more, not {!r}".format(count))

    alt_stdout = sys.stdout if (stdout is None) else stdout
    alt_stderr = sys.stderr if (stderr is None) else stderr

    headed = len(paths) > 1

    exit_status = 0
    heads = 0

    for path in paths:

        # Separate and label each File's Lines, when showing more than one File

        header = None
        if headed:
            header = "\n" if heads else ""
            header += "==> {} <==\n".format(head_label(path))

        # Complain of each unreadable File, but carry on

        try:
            head_file(path, count=count, stdout=alt_stdout, header=header)
        except HeadFileError as exc:
            alt_stdout.flush()
            alt_stderr.write("head.py: error: {}\n".format(exc))
            alt_stderr.flush()

            exit_status = 1
            if not exc.opened:

                continue

        heads += 1

    return exit_status


class HeadFileError(Exception):
    """Say a File couldn't be opened, or couldn't be read through to Count Lines"""

    def __init__(self, message, opened):
        super().__init__(message)
        self.opened = opened


def head_file(path, count, stdout, header=None):
    """Show the Header and leading Lines of one File, and return how many Lines"""

    try:
        incoming = head_open(path)
    except OSError as exc:
        message = '"{}" is not a readable file'.format(path)
        raise HeadFileError(message, opened=False) from exc

    with incoming as reading:
        if header is not None:
            stdout.write(header)

        # Stop reading after Count Lines

        try:
            shown = head_lines(reading, count=count, stdout=stdout)
        except BrokenPipeError:
            raise
        except (OSError, UnicodeDecodeError) as exc:
            message = '"{}": {}: {}'.format(path, type(exc).__name__, exc)
            raise HeadFileError(message, opened=True) from exc

    return shown


def head_open(path):
    """Open a File to read as Text, else raise OSError"""

    if path == "-":
        prompt_tty_stdin()

        return contextlib.nullcontext(sys.stdin)

    if not os.path.isfile(path):
        raise OSError("not a regular file: {!r}".format(path))

    incoming = open(path, newline="")  # keep each line's own end, such as "\r\n"

    return incoming


def head_label(path):
    """Name the File in its "==> FILE <==" header"""

    if path == "-":

        return "standard input"

    return path


def head_lines(incoming, count, stdout):
    """Copy out up to Count Lines, don't read past them, and return how many"""

    shown = 0
    for line in incoming:
        stdout.write(line)
        shown += 1

        if shown >= count:

            break

    return shown


#
# Define some Python idioms
#


# deffed in many files  # missing from docs.python.org
def prompt_tty_stdin():
    if sys.stdin.isatty():
        stderr_print("Press ⌃D EOF to quit")


# deffed in many files  # missing from docs.python.org
def stderr_print(*args, **kwargs):
    sys.stdout.flush()
    print(*args, **kwargs, file=sys.stderr)
    sys.stderr.flush()  # esp. when kwargs["end"] != "\n"


if __name__ == "__main__":
    sys.exit(main(sys.argv))
