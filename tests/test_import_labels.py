"""Tests for the import pipeline."""

import logging

import pytest
from openpyxl import load_workbook

from label_tools.errors import MissingFileError, ShapeError
from label_tools.excel_client import ExcelClient
from label_tools.export_labels import export_labels
from label_tools.import_labels import import_labels
from label_tools.metadata import load_custom_labels
from label_tools.table import LabelChange


@pytest.fixture
def client():
    return ExcelClient(sheet_name="custom labels", column_width=39)


@pytest.fixture
def project(make_project):
    return make_project(
        [
            ("K1", "Desc1", "Hola", "es", "CatA"),
            ("K2", "Desc2", "Hi", "en", "CatB"),
            ("K3", "Desc3", "Adiós", "es", "CatA"),
        ],
        {"en": {"K1": "Hello", "K3": "Bye"}},
    )


@pytest.fixture
def exported(project, tmp_path, client):
    return export_labels(project, "en,es", output_path=tmp_path / "export.xlsx", client=client)


def _edit_cell(path, cell, value):
    wb = load_workbook(path)
    wb.active[cell] = value
    wb.save(path)


def _values(project):
    custom_labels = load_custom_labels(project / "labels" / "CustomLabels.labels")
    return {label.full_name: label.value for label in custom_labels}


def test_reimporting_untouched_export_changes_nothing(project, exported, client):
    labels_file = project / "labels" / "CustomLabels.labels"
    before = _values(project)

    changes = import_labels(project, exported, client=client)

    assert changes == []
    assert _values(project) == before
    assert labels_file.exists()


def test_edited_cell_updates_matching_label(project, exported, client):
    # Row 2 is K1, column D is "es", K1's own language
    _edit_cell(exported, "D2", "Hola mundo")

    changes = import_labels(project, exported, client=client)

    assert changes == [LabelChange("K1", "es", "Hola", "Hola mundo")]
    assert _values(project) == {"K1": "Hola mundo", "K2": "Hi", "K3": "Adiós"}


def test_edits_in_other_language_columns_are_ignored(project, exported, client):
    # Column C is "en"; K1 is a Spanish label
    _edit_cell(exported, "C2", "Hello world")

    assert import_labels(project, exported, client=client) == []
    assert _values(project)["K1"] == "Hola"


def test_change_is_logged(project, exported, client, caplog):
    _edit_cell(exported, "C3", "Hey")

    with caplog.at_level(logging.INFO):
        import_labels(project, exported, client=client)

    assert "key [K2], old value [Hi], new value [Hey]" in caplog.text
    assert "CustomLabels.labels saved..." in caplog.text


def test_dry_run_does_not_write(project, exported, client):
    labels_file = project / "labels" / "CustomLabels.labels"
    original = labels_file.read_bytes()
    _edit_cell(exported, "D2", "Hola mundo")

    changes = import_labels(project, exported, dry_run=True, client=client)

    assert [change.key for change in changes] == ["K1"]
    assert labels_file.read_bytes() == original


def test_missing_import_file_fails_fast(project, tmp_path, client):
    labels_file = project / "labels" / "CustomLabels.labels"
    original = labels_file.read_bytes()

    with pytest.raises(MissingFileError, match="import file not exist"):
        import_labels(project, tmp_path / "missing.xlsx", client=client)

    assert labels_file.read_bytes() == original


def test_missing_project_folder_fails_fast(exported, tmp_path, client):
    with pytest.raises(MissingFileError, match="project folder not exist"):
        import_labels(tmp_path / "nowhere", exported, client=client)


def test_missing_labels_file_fails_fast(exported, tmp_path, client):
    empty_project = tmp_path / "empty"
    empty_project.mkdir()

    with pytest.raises(MissingFileError, match="CustomLabels.labels not exist"):
        import_labels(empty_project, exported, client=client)


def test_header_without_language_is_fatal(project, tmp_path, client):
    labels_file = project / "labels" / "CustomLabels.labels"
    original = labels_file.read_bytes()
    sheet = tmp_path / "bad.xlsx"
    client.write_table(sheet, [["Translation key", "Description"], ["K1", "Desc1"]])

    with pytest.raises(ShapeError):
        import_labels(project, sheet, client=client)

    assert labels_file.read_bytes() == original


def test_key_only_row_keeps_label_value(project, tmp_path, client, caplog):
    sheet = tmp_path / "short.xlsx"
    client.write_table(sheet, [["Translation key", "Description", "en"], ["K2"]])

    with caplog.at_level(logging.WARNING):
        changes = import_labels(project, sheet, client=client)

    assert changes == []
    assert _values(project)["K2"] == "Hi"
    assert "invalid row [2]" in caplog.text


def test_invalid_row_warning_uses_sheet_row_number(project, tmp_path, client, caplog):
    sheet = tmp_path / "gaps.xlsx"
    client.write_table(sheet, [
        ["Translation key", "Description", "en"],
        ["", "", ""],
        ["K2"],
    ])

    with caplog.at_level(logging.WARNING):
        import_labels(project, sheet, client=client)

    assert "invalid row [3]" in caplog.text
    assert _values(project)["K2"] == "Hi"
