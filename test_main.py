import argparse

import pandas as pd
import pytest

import config_paths
from main import _parse_column, _parse_sort, main


@pytest.fixture(autouse=True)
def no_user_config(tmp_path, monkeypatch):
    monkeypatch.setattr(config_paths, "CONFIG_JSON", str(tmp_path / "missing.json"))


@pytest.mark.parametrize(
    "text, expected",
    [
        ("age", ("age", None)),
        ("age:desc", ("age", "desc")),
        ("name:ASC", ("name", "asc")),
    ],
)
def test_parse_sort(text, expected):
    assert _parse_sort(text) == expected


def test_parse_sort_rejects_bad_direction():
    with pytest.raises(argparse.ArgumentTypeError):
        _parse_sort("age:up")


def test_parse_column():
    assert _parse_column("Team") == ("Team", "text")
    assert _parse_column("Score:number") == ("Score", "number")


def test_main_prints_filtered_page(capsys):
    assert main(["--search", "User 1", "--page-size", "5"]) == 0
    out = capsys.readouterr().out
    assert "User 1" in out
    assert "Page 1/3 rows 1-5 of 11" in out


def test_main_page_past_the_end(capsys):
    assert main(["--page", "9", "--page-size", "5"]) == 0
    out = capsys.readouterr().out
    assert "(no rows)" in out
    assert "Page 9/5 no rows on this page of 25" in out


def test_main_imports_sorts_and_exports(tmp_path, capsys):
    src = tmp_path / "people.csv"
    src.write_text(
        "Name,Email,Age,Role,Team\n"
        "Ann,ann@x.io,31,Dev,Blue\n"
        "Bob,bob@x.io,45,Ops,Red\n"
        "Cid,cid@x.io,28,Dev,Blue\n"
    )
    out = tmp_path / "out.csv"

    rc = main([str(src), "--sort", "age:desc", "--add-column", "Team", "--columns", "name,team,age", "--export", str(out)])

    assert rc == 0
    exported = pd.read_csv(out)
    assert list(exported.columns) == ["name", "team", "age"]
    assert list(exported["age"]) == [45, 31, 28]
    assert list(exported["team"]) == ["Red", "Blue", "Blue"]
    assert "Bob" in capsys.readouterr().out


def test_main_reports_bad_column_order(capsys):
    assert main(["--columns", "name,ghost"]) == 1
    assert "Unknown column ids" in capsys.readouterr().err
