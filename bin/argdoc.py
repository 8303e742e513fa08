#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
usage: argdoc.py [-h] [FILE] [WORD ...]

parse command line args as per a top-of-file docstring of help lines

positional arguments:
  FILE        some python file begun by a docstring (often your main py file)
  WORD        an arg to parse for the file

options:
  -h, --help  show this help message and exit

quirks:
  plural args go to an english plural key, such as '[FILE ...]' to '.files'
  takes a trailing '(default: VALUE)' of an option's help as its default
  you lose your '-h' and '--help' options if you drop all your 'options:'

examples:
  argdoc.py -h                             # show this help message and exit
  argdoc.py head.py                        # show the help compiled from the file doc
  argdoc.py head.py -- -n 3 a.txt b.txt    # run the file doc to parse:  -n 3 a.txt b.txt
"""


import argparse
import ast
import inspect
import json
import re
import sys
import textwrap


#
# Run as a command line:  ./argdoc.py ...
#


def main(argv=None):
    """Run an Arg Doc Py command line"""

    run_self_tests()

    alt_argv = sys.argv if (argv is None) else argv

    args = parse_args(alt_argv[1:])
    if not args.file:
        print(format_help().rstrip())

        return 0

    doc = eval_doc_from_path(args.file)
    if doc is None:
        stderr_print(
            "argdoc.py: error: no docstring at top of file:  {}".format(args.file)
        )

        return 1

    parser = ArgumentParser(doc=doc)
    if not args.words:
        print(parser.format_help().rstrip())

        return 0

    words = args.words[1:] if (args.words[0] == "--") else args.words
    file_args = parser.parse_args(words)
    print(json.dumps(vars(file_args), indent=2))

    return 0


def run_self_tests():
    """Run some Self Tests, as part of every Launch"""

    _plural_en_test()
    _textwrap_split_paras_test()
    _textwrap_para_unbreakdent_lines_test()


def eval_doc_from_path(path):
    """Pick the DocString out of the top of a Python File, else None"""

    with open(path) as incoming:
        pychars = incoming.read()

    module = ast.parse(pychars)
    doc = ast.get_docstring(module, clean=False)

    return doc


#
# Work with an ArgumentParser compiled from the DocString of the Calling Module
#


def parse_args(args=None, namespace=None, doc=None):
    """
    Call 'argparse.parse_args' on a Parser of the calling Module's DocString

    However,
    + work instead from the given Doc, if any
    + print help and exit zero when Args call for Help
    + print usage and exit 2 when Args don't fit the Doc
    """

    alt_argv = sys.argv[1:] if (args is None) else args

    f = inspect.currentframe()
    alt_doc = module_find_doc(doc=doc, f=f)
    parser = ArgumentParser(doc=alt_doc)

    alt_namespace = parser.parse_args(alt_argv, namespace=namespace)

    return alt_namespace


# deffed in many files  # missing from docs.python.org
def module_find_doc(doc, f):
    """Take the Doc as given, else pick the Doc out of the Calling Module"""

    if doc is not None:

        return doc

    module = inspect.getmodule(f.f_back)
    module_doc = module.__doc__

    return module_doc


def format_help():
    """Call 'argparse.format_help' on a Parser of the calling Module's DocString"""

    f = inspect.currentframe()
    alt_doc = module_find_doc(doc=None, f=f)
    parser = ArgumentParser(doc=alt_doc)

    chars = parser.format_help()

    return chars


def format_usage():
    """Call 'argparse.format_usage' on a Parser of the calling Module's DocString"""

    f = inspect.currentframe()
    alt_doc = module_find_doc(doc=None, f=f)
    parser = ArgumentParser(doc=alt_doc)

    chars = parser.format_usage()

    return chars


class ArgumentParser(argparse.ArgumentParser):
    """Form an ArgumentParser with Args and Options and Epilog, from a Doc"""

    def __init__(self, doc=None):

        # Pick the Doc to compile into an ArgumentParser

        f = inspect.currentframe()
        alt_doc = module_find_doc(doc=doc, f=f)

        alt_doc = textwrap.dedent(alt_doc) if alt_doc else None
        paras = textwrap_split_paras(alt_doc) if alt_doc else None
        if not (paras and paras[1:]):
            paras = textwrap_split_paras("usage: prog\n\ndesc")
            alt_doc = None

        # Pick the ArgParse Prog out of the top line

        usage_words = paras[0][0].split()
        prog = usage_words[1] if usage_words[1:] else "prog"

        # Pick the ArgParse Description out of the 2nd Paragraph of Doc

        description = " ".join(_.strip() for _ in paras[1])

        # Conclude ArgParse Help Option wanted, except if it's partly/ wholly missing

        add_help = bool(parser_add_help_from_doc(doc=alt_doc))

        # Take up all the rest of the Doc as the ArgParse Epilog

        epilog = None
        epi = parser_epi_from_doc(alt_doc)
        if epi:
            epilog_at = alt_doc.index(epi)
            epilog = alt_doc[epilog_at:].rstrip()

        # Form an ArgumentParser with Epilog, but begin with no Args and no Options

        super().__init__(
            prog=prog,
            description=description,
            add_help=add_help,
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=epilog,
        )

        # Add zero or more Args and/or Options from the Doc

        parser_adds_from_doc(parser=self, doc=alt_doc)


def parser_add_help_from_doc(doc):
    """Find the conventional H/ Help Option and return True, else False or None"""

    if doc is None:

        return None

    lines = doc.splitlines()
    for (index, line) in enumerate(lines):
        next_line = lines[index + 1] if lines[(index + 1) :] else ""
        next_rejoined = " ".join(next_line.split())

        rejoined = " ".join(line.split())
        if rejoined.startswith("-h, --help"):
            help_tail = "show this help message and exit"
            if rejoined.endswith(help_tail) or (next_rejoined == help_tail):

                return True

    return False


def parser_epi_from_doc(doc):
    """Pick the first Line of an ArgParse Epilog out of a Doc"""

    if doc is None:

        return None

    paras = textwrap_split_paras(text=doc.strip())

    paras = paras[2:]  # Skip over Usage and Desc

    if paras:
        if paras[0][0].startswith("positional arguments"):
            paras = paras[1:]  # mutate

    if paras:
        if para_is_options(paras[0]):
            paras = paras[1:]  # mutate

    if paras:
        epi = paras[0][0]

        return epi

    return None


def para_is_options(para):
    """Say if the Para is the Lines of Options"""

    head = para[0]
    if head.startswith("options") or head.startswith("optional arguments"):

        return True

    return False


#
# Rip Add_Argument calls out from the Doc
#


def parser_adds_from_doc(parser, doc):
    """Add the Positional Arguments and/or Options of the Doc to the Parser"""

    if doc is None:

        return

    paras = textwrap_split_paras(text=doc.strip())

    # Take one Para of Usage

    usage = " ".join(_.strip() for _ in paras[0])
    assert usage.startswith("usage: "), repr(usage)
    paras = paras[1:]

    # Skip the Para of Description

    paras = paras[1:]

    # Take the next Para as Lines of Args, if tagged as Positional Arguments

    if paras:
        if paras[0][0].startswith("positional arguments"):
            for line in textwrap_para_unbreakdent_lines(para=paras[0][1:]):
                parser_add_arg_line(parser, usage=usage, line=line)
            paras = paras[1:]

    # Take the next Para as Lines of Options, if tagged as Options

    if paras:
        if para_is_options(paras[0]):
            for line in textwrap_para_unbreakdent_lines(para=paras[0][1:]):
                parser_add_option_line(parser, line=line)


def parser_add_arg_line(parser, usage, line):
    """Rip out one Add_Argument Call of a Positional Arg from one Doc Line"""

    words = line.split()
    if not words:

        return

    # Divide the Line into Metavar and Help

    metavar = words[0]
    help_tail = line.split(None, 1)[-1] if words[1:] else ""

    dest = metavar.lower()

    # Take mentions of NArgs ? or + or * from Usage

    nargs = None
    if "[{}]".format(metavar) in usage:
        nargs = "?"  # argparse.OPTIONAL
    elif " {} [{} ...]".format(metavar, metavar) in usage:
        dest = plural_en(dest)
        nargs = "+"  # argparse.ONE_OR_MORE
    elif "[{} ...]".format(metavar) in usage:
        dest = plural_en(dest)
        nargs = "*"  # argparse.ZERO_OR_MORE

    # Tell the Parser to add this Arg

    alt_help_tail = help_tail.replace("%", "%%") if help_tail else None
    parser.add_argument(dest, metavar=metavar, nargs=nargs, help=alt_help_tail)


def parser_add_option_line(parser, line):
    """Rip one Add_Argument Call of an Option or two from one Doc Line"""

    words = line.split()

    option_strings = list()
    metavar = None

    # Take each Dashed Option, and the Metavar after it, if any

    index = 0
    while index < len(words):
        word = words[index]
        if not word.startswith("-"):

            break

        option_strings.append(word.rstrip(","))
        index += 1

        if word.endswith(","):

            continue

        next_word = words[index] if words[index:] else ""
        if re.match(r"^\[?[A-Z][A-Z0-9_]*\]?,?$", string=next_word):
            metavar = next_word.rstrip(",")
            index += 1

            if next_word.endswith(","):

                continue

        break

    if len(option_strings) not in (1, 2):

        return

    help_tail = line.split(None, index)[-1] if words[index:] else ""

    # Take NArgs "?" from an Option Metavar marked as optional

    nargs = None
    if metavar and metavar.startswith("[") and metavar.endswith("]"):
        metavar = metavar[len("[") : -len("]")]
        nargs = "?"  # argparse.OPTIONAL

    option = argparse.Namespace(
        option_strings=option_strings,
        metavar=metavar,
        nargs=nargs,
        action=(None if metavar else "count"),
    )

    parser_add_option_call(parser, option=option, help_tail=help_tail)


def parser_add_option_call(parser, option, help_tail):
    """Tell the Parser to add this Option"""

    option_strings = option.option_strings
    metavar = option.metavar
    nargs = option.nargs
    action = option.action

    # Call victory when Parser Add_Help already did add this Option

    if option_strings == ["-h", "--help"]:
        if help_tail == "show this help message and exit":
            if parser.add_help:

                return

    # Default to Count up from Zero, so that the Int of Count is Int, not TypeError
    # Default to Arg False when Option NArgs "?", to set apart No Option from None Arg
    # Default to the Chars of "(default: VALUE)" when the Help ends that way

    default = None
    if action == "count":
        default = 0
    elif nargs == "?":
        default = False
    else:
        default = help_find_default(help_tail)

    alt_help_tail = help_tail.replace("%", "%%") if help_tail else None

    if action == "count":
        parser.add_argument(
            *option_strings, action=action, default=default, help=alt_help_tail
        )
    else:
        parser.add_argument(
            *option_strings,
            metavar=metavar,
            nargs=nargs,
            default=default,
            help=alt_help_tail,
        )


def help_find_default(help_tail):
    """Pick the VALUE out of a Help ending in '(default: VALUE)', else None"""

    if not help_tail:

        return None

    match = re.search(r"[(]default: ([^()]+)[)]$", string=help_tail.rstrip())
    if not match:

        return None

    default = match.group(1).strip()

    return default

    # such as:  "how many leading lines to show (default: 10)"  ->  "10"


def textwrap_para_unbreakdent_lines(para):
    """Join the continuation lines dented beneath each leading line"""

    above_dent = None

    lines = list()
    for line in para:
        lstripped = line.lstrip()
        dent = line[: -len(lstripped)] if (line != lstripped) else ""

        if lines:
            if len(dent) > len(above_dent):
                lines[-1] += " " + line.strip()

                continue

        lines.append(line)
        above_dent = dent

    return lines

    # such as:  [' a', '    b', ' c']  ->  [' a b', ' c']


def _textwrap_para_unbreakdent_lines_test():

    para = ["  -n COUNT, --lines COUNT", "      how many", "  -h, --help  help"]
    lines = textwrap_para_unbreakdent_lines(para)
    assert lines == ["  -n COUNT, --lines COUNT how many", "  -h, --help  help"]


# deffed in many files  # missing from docs.python.org
def plural_en(word):
    """Guess the English plural of a word"""

    consonants = "bcdfghjklmnpqrstvwxz"  # without "y"

    if re.match(r"^.*ex$", string=word):
        plural = word[: -len("ex")] + "ices"  # vortex, vortices
    elif re.match(r"^.*f$", string=word):
        plural = word[: -len("f")] + "ves"  # leaf, leaves
    elif re.match(r"^.*is$", string=word):
        plural = word[: -len("is")] + "es"  # basis, bases
    elif re.match(r"^.*ix$", string=word):
        plural = word[: -len("ix")] + "ices"  # appendix, appendices
    elif re.match(r"^.*o$", string=word):
        plural = word + "es"  # tomato, tomatoes
    elif re.match(r"^.*on$", string=word):
        plural = word[: -len("on")] + "a"  # criterion, criteria
    elif re.match(r"^.*[{}]y$".format(consonants), string=word):
        plural = word[: -len("y")] + "ies"  # lorry, lorries
    elif re.match(r"^.*(ch|s|sh|x|z)$", string=word):
        plural = word + "es"  # stitch bus ash box lutz
    else:
        plural = word + "s"  # word, words

    return plural


def _plural_en_test():

    singulars = "file vortex leaf basis appendix tomato criterion lorry lutz".split()
    plurals = "files vortices leaves bases appendices tomatoes criteria lorries lutzes"

    guesses = " ".join(plural_en(_) for _ in singulars)
    assert guesses == plurals, (guesses, plurals)


# deffed in many files  # missing from docs.python.org
def textwrap_split_paras(text):
    """Divide the Chars into a List of non-empty Lists of possibly dented Lines"""

    if text is None:

        return None

    paras = list()

    para = None
    for line in (text + "\n\n").splitlines():
        if not line.strip():
            if para is not None:
                paras.append(para)
            para = None
        elif not para:
            para = [line]
        else:
            para.append(line)

    assert para is None

    return paras

    # such as:  "  a\n    b\n  c\n"  ->  [['  a', '    b', '  c']]


def _textwrap_split_paras_test():

    paras = textwrap_split_paras("usage: p\n\n\ndesc\n  more\n")
    assert paras == [["usage: p"], ["desc", "  more"]], paras


# deffed in many files  # missing from docs.python.org
def stderr_print(*args):
    """Print the Args, but to Stderr, not to Stdout"""

    sys.stdout.flush()
    print(*args, file=sys.stderr)
    sys.stderr.flush()  # like for kwargs["end"] != "\n"


if __name__ == "__main__":
    sys.exit(main(sys.argv))


