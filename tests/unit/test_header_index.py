from labsheet.infrastructure.sheets.header_index import HeaderIndex


def test_headers_are_trimmed_and_looked_up_case_insensitively() -> None:
    index = HeaderIndex.from_cells([" id ", "contactPerson", "Protein"])

    assert index.texts == ["id", "contactPerson", "Protein"]
    assert [c.key for c in index] == ["id", "contactperson", "protein"]
    assert index.position("ID") == 0
    assert index.position("contactperson") == 1
    assert index.position(" PROTEIN ") == 2
    assert index.position("fat") is None
    assert index.position("Id") == 0
    assert len(index) == 3


def test_duplicate_headers_resolve_to_the_last_column() -> None:
    index = HeaderIndex.from_cells(["id", "name", "Name"])

    assert index.position("name") == 2


def test_none_cells_become_empty_headers() -> None:
    index = HeaderIndex.from_cells(["id", None, "name"])

    assert index.texts == ["id", "", "name"]
    assert index.position("name") == 2
