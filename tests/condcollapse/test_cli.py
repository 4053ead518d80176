import logging

import pytest

from condcollapse.__main__ import EXIT_ERROR, EXIT_OK, build_parser, main


@pytest.fixture(autouse=True)
def _detach_cli_handlers():
    yield
    # main() binds a handler to the captured stderr of the current test
    root = logging.getLogger("condcollapse")
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(logging.NOTSET)

INI = """[test.html]
  expected:
    if os == "win" and (version == "6.1.7601") and e10s: FAIL
    if os == "win" and (version == "10.0.15063") and e10s: FAIL
    PASS
"""


def test_parser_defaults():
    args = build_parser().parse_args(["x.ini"])
    assert args.path == "x.ini"
    assert args.verbose == 0
    assert not args.no_validate and not args.check_catalog and not args.suggest_inversion


def test_verbose_is_repeatable():
    assert build_parser().parse_args(["-vv", "x.ini"]).verbose == 2


def test_main_rewrites_file(tmp_path, capsys):
    p = tmp_path / "test.html.ini"
    p.write_text(INI, encoding="utf-8")
    assert main([str(p)]) == EXIT_OK
    out = capsys.readouterr().out
    assert out == '[test.html]\n  expected:\n    if (os == "win") and e10s: FAIL\n    PASS\n'
    # the input file is never modified
    assert p.read_text(encoding="utf-8") == INI


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.ini")]) == EXIT_ERROR
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Cannot read" in captured.err


def test_main_requires_path():
    with pytest.raises(SystemExit):
        main([])


def test_check_catalog(capsys):
    assert main(["--check-catalog"]) == EXIT_OK
    assert "catalog OK" in capsys.readouterr().out


def test_verify_flag(tmp_path, capsys):
    p = tmp_path / "a.ini"
    p.write_text(INI, encoding="utf-8")
    assert main(["--verify", "--suggest-inversion", "-v", str(p)]) == EXIT_OK
    assert '    if (os == "win") and e10s: FAIL' in capsys.readouterr().out
