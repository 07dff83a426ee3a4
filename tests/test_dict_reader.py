import io

from typeconv import LowerCaseDictReader


def test_dict_reader():
    csv_data = io.StringIO("Name,Age,City\nAlice,30,New York\nBob,25,Chicago\n")
    lower_case_reader = LowerCaseDictReader(csv_data)
    assert ["name", "age", "city"] == lower_case_reader.fieldnames
    assert list(lower_case_reader) == [
        {"name": "Alice", "age": "30", "city": "New York"},
        {"name": "Bob", "age": "25", "city": "Chicago"},
    ]


def test_dict_reader_strips_headers():
    csv_data = io.StringIO(" Joined_On , SCORE\n2024-01-15,7\n")
    assert [{"joined_on": "2024-01-15", "score": "7"}] == list(
        LowerCaseDictReader(csv_data)
    )


def test_dict_reader_given_fieldnames():
    csv_data = io.StringIO("1,2\n")
    reader = LowerCaseDictReader(csv_data, fieldnames=["A", "B"])
    assert [{"a": "1", "b": "2"}] == list(reader)


def test_dict_reader_empty():
    assert LowerCaseDictReader(io.StringIO("")).fieldnames is None
