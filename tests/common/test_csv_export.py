from hrm_system.common.csv_export import to_csv


def test_header_from_first_record_and_quoting():
    rows = [
        {"Name": "Ali, Hassan", "Note": 'said "hi"', "Hours": 8},
        {"Name": "Fatima", "Note": None, "Hours": 7.5},
    ]
    assert to_csv(rows) == 'Name,Note,Hours\n"Ali, Hassan","said ""hi""",8\nFatima,,7.5'


def test_empty_input_is_empty_string():
    assert to_csv([]) == ""
