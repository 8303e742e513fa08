"""
usage: test_argdoc.py [-h] [-v] [-w WIDTH] [WORD ...]

echo some words, split to fit a width

positional arguments:
  WORD                  a word to echo

options:
  -h, --help            show this help message and exit
  -v, --verbose         say more
  -w WIDTH, --width WIDTH
                        width to split at or before (default: 72)

examples:
  test_argdoc.py -v hello world
"""

import pytest

import argdoc
import head


def test_parse_args_takes_the_doc_of_the_calling_module():
    args = argdoc.parse_args(["-vv", "--width", "9", "hello", "world"])

    assert args.verbose == 2
    assert args.width == "9"
    assert args.words == ["hello", "world"]


def test_parse_args_takes_defaults_from_the_doc():
    args = argdoc.parse_args([])

    assert args.verbose == 0
    assert args.width == "72"
    assert args.words == []


def test_format_usage_and_help_of_the_calling_module():
    assert argdoc.format_usage().startswith("usage: test_argdoc.py [-h] [-v] [-w WIDTH]")

    chars = argdoc.format_help()
    assert "echo some words, split to fit a width" in chars
    assert chars.rstrip().endswith("test_argdoc.py -v hello world")


def test_head_doc_compiles_to_a_parser():
    parser = argdoc.ArgumentParser(doc=head.__doc__)

    args = parser.parse_args(["-n", "3", "a.txt", "b.txt"])
    assert args.lines == "3"
    assert args.files == ["a.txt", "b.txt"]

    args = parser.parse_args(["a.txt"])
    assert args.lines == "10"

    assert parser.prog == "head.py"
    assert parser.description == "show just the leading lines of a file"
    assert parser.epilog.startswith("quirks:")
    assert parser.format_usage() == "usage: head.py [-h] [-n COUNT] FILE [FILE ...]\n"


def test_one_or_more_positional_is_required(capsys):
    parser = argdoc.ArgumentParser(doc=head.__doc__)

    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args([])

    assert exc_info.value.code == 2
    assert "FILE" in capsys.readouterr().err


def test_optional_positional_and_optional_option_value():
    doc = """
    usage: p.py [-h] [-c [COLOR]] [FILE]

    do good stuff

    positional arguments:
      FILE        a file to color

    options:
      -h, --help  show this help message and exit
      -c [COLOR]  a color, else the default color
    """

    parser = argdoc.ArgumentParser(doc=doc)

    args = parser.parse_args([])
    assert args.file is None
    assert args.c is False

    args = parser.parse_args(["-c", "p.txt"])
    assert args.c == "p.txt"
    assert args.file is None

    args = parser.parse_args(["p.txt", "-c"])
    assert args.c is None
    assert args.file == "p.txt"


def test_dropping_the_help_option_drops_help():
    doc = """
    usage: q.py [-x]

    do quiet stuff

    options:
      -x  do more
    """

    parser = argdoc.ArgumentParser(doc=doc)
    assert not parser.add_help

    with pytest.raises(SystemExit):
        parser.parse_args(["-h"])

    assert parser.parse_args(["-xx"]).x == 2


def test_help_find_default():
    assert argdoc.help_find_default("how many (default: 10)") == "10"
    assert argdoc.help_find_default("how many (default: 10)  ") == "10"
    assert argdoc.help_find_default("how many (default: 10) lines") is None
    assert argdoc.help_find_default("how many") is None
    assert argdoc.help_find_default("") is None


def test_plural_en():
    words = "file word box lorry criterion".split()
    plurals = "files words boxes lorries criteria".split()

    assert [argdoc.plural_en(_) for _ in words] == plurals


def test_self_tests_pass():
    argdoc.run_self_tests()


def test_main_parses_args_for_a_file(capsys):
    exit_status = argdoc.main(["argdoc.py", head.__file__, "--", "-n", "3", "a.txt"])

    (out, _) = capsys.readouterr()
    assert exit_status == 0
    assert '"lines": "3"' in out
    assert '"a.txt"' in out
