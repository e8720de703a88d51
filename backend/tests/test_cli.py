from unittest.mock import patch

import pytest

from app.cli import USAGE, create_parser, main
from app.config.settings import settings


def test_parser_reads_init_switch() -> None:
    args = create_parser().parse_args(["-i", "new.db"])

    assert args.init_file == "new.db"
    assert args.dbfile is None


def test_parser_reads_database_file() -> None:
    args = create_parser().parse_args(["quotes.db"])

    assert args.init_file is None
    assert args.dbfile == "quotes.db"


def test_no_arguments_prints_usage(capsys) -> None:
    assert main([]) == 0
    assert USAGE in capsys.readouterr().out


def test_init_creates_database(tmp_path) -> None:
    db_file = tmp_path / "quotes.db"

    assert main(["-i", str(db_file)]) == 0
    assert db_file.exists()


def test_init_refuses_existing_database(tmp_path, capsys) -> None:
    db_file = tmp_path / "quotes.db"
    db_file.write_bytes(b"")

    assert main(["-i", str(db_file)]) == 1
    assert capsys.readouterr().out.count("already exists") == 1


def test_serve_requires_existing_database(tmp_path, capsys) -> None:
    with patch("app.cli.uvicorn.run") as run_mock:
        exit_code = main([str(tmp_path / "missing.db")])

    assert exit_code == 1
    assert "doesn't exist" in capsys.readouterr().out
    assert run_mock.called is False


def test_serve_starts_uvicorn(tmp_path) -> None:
    db_file = tmp_path / "quotes.db"
    assert main(["-i", str(db_file)]) == 0

    with patch("app.cli.uvicorn.run") as run_mock:
        exit_code = main([str(db_file)])

    assert exit_code == 0
    assert run_mock.call_count == 1
    assert run_mock.call_args.kwargs["port"] == settings.port


def test_init_switch_requires_value() -> None:
    with pytest.raises(SystemExit):
        main(["-i"])
