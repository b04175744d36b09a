import pytest

from catalog.services.csv_importer import CSVImporter, CSVImportError


def test_parse_maps_columns():
    content = (
        "\ufeffName,Category,ImageURL,comment\n"
        "iPhone 15, Electronics > Phones ,iphone.jpg,\n"
        ",Groceries,,\n"
        "Chips,Groceries > Snacks,,Crunchy\n"
    ).encode("utf-8")

    items = CSVImporter.parse(content)

    assert items == [
        {"name": "iPhone 15", "category": "Electronics > Phones", "imageurl": "iphone.jpg", "comment": None},
        {"name": "Chips", "category": "Groceries > Snacks", "imageurl": None, "comment": "Crunchy"},
    ]


def test_parse_handles_bangla_text():
    items = CSVImporter.parse("name,category\nবই,বাংলা > বই\n".encode("utf-8"))
    assert items[0]["name"] == "বই"


def test_parse_rejects_unusable_files():
    with pytest.raises(CSVImportError):
        CSVImporter.parse(b"")
    with pytest.raises(CSVImportError):
        CSVImporter.parse(b"title,price\nfoo,1\n")
    with pytest.raises(CSVImportError):
        CSVImporter.parse(b"\xff\xfe\x00bad")
