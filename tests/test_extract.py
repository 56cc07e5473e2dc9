import csv

import pytest

from moviedb.extract import read_records


def test_header_is_kept_as_first_record(write_csv):
    path = write_csv("IMDB-movies.csv", ["id,name,year,rank", "1,Alpha,2000,8.5"])
    assert read_records(path) == [["id", "name", "year", "rank"], ["1", "Alpha", "2000", "8.5"]]


def test_records_keep_their_own_width(write_csv):
    path = write_csv("IMDB-actors.csv", ["id,first_name,last_name,gender", '1,Jo"e,Smith,M', "2,Ann,Lee,F"])
    records = read_records(path)
    assert records[1] == ["1", 'Jo"e', "Smith", "M"]
    assert [len(r) for r in records] == [4, 4, 4]


def test_quoted_fields_and_literal_values_survive(write_csv):
    path = write_csv("IMDB-roles.csv", [
        "actor_id,movie_id,role",
        '10,20,"Himself, narrator"',
        "11,21,",
        "12,22,NULL",
    ])
    records = read_records(path)
    assert records[1] == ["10", "20", "Himself, narrator"]
    assert records[2] == ["11", "21", ""]
    assert records[3] == ["12", "22", "NULL"]


def test_variable_field_counts(write_csv):
    path = write_csv("ragged.csv", ["a,b,c", "1,2", "1,2,3,4", "1,2,"])
    assert read_records(path)[1:] == [["1", "2"], ["1", "2", "3", "4"], ["1", "2", ""]]


def test_blank_lines_are_skipped(write_csv):
    path = write_csv("gaps.csv", ["a,b", "", "1,2", ""])
    assert read_records(path) == [["a", "b"], ["1", "2"]]


def test_quote_closing_a_field_early(write_csv):
    path = write_csv("quotes.csv", ["name", '"Bob "Junior" Smith"'])
    assert read_records(path)[1] == ['Bob Junior" Smith"']


def test_numbers_stay_strings(write_csv):
    path = write_csv("nums.csv", ["id", "007"])
    assert read_records(path)[1] == ["007"]


def test_oversized_field_is_malformed(write_csv):
    path = write_csv("huge.csv", ["a", "x" * (csv.field_size_limit() + 1)])
    with pytest.raises(csv.Error):
        read_records(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_records(tmp_path / "IMDB-nope.csv")
