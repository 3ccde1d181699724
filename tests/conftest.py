"""Shared fixtures: small Salesforce projects written into tmp_path."""

from textwrap import dedent

import pytest


LABEL_TEMPLATE = """\
    <labels>
        <fullName>{full_name}</fullName>
        <categories>{categories}</categories>
        <language>{language}</language>
        <protected>false</protected>
        <shortDescription>{description}</shortDescription>
        <value>{value}</value>
    </labels>
"""


def labels_xml(labels):
    """Build a CustomLabels.labels document from (key, description, value, language, categories) tuples."""
    body = "".join(
        LABEL_TEMPLATE.format(
            full_name=key, description=description, value=value,
            language=language, categories=categories,
        )
        for key, description, value, language, categories in labels
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<CustomLabels xmlns="http://soap.sforce.com/2006/04/metadata">\n'
        f'{body}'
        '</CustomLabels>\n'
    )


def translation_xml(entries):
    """Build a <lang>.translation document from a {key: text} mapping."""
    body = "".join(
        f"    <customLabels>\n"
        f"        <label>{label}</label>\n"
        f"        <name>{name}</name>\n"
        f"    </customLabels>\n"
        for name, label in entries.items()
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<Translations xmlns="http://soap.sforce.com/2006/04/metadata">\n'
        f'{body}'
        '</Translations>\n'
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's .env overrides out of the tests."""
    for name in ("LABELS_EXPORT_FILE", "LABELS_SHEET_NAME", "LABELS_COLUMN_WIDTH"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_project(tmp_path):
    """Factory writing a project 'src' folder with labels and translation files."""

    def _make(labels, translations=None, name="src"):
        project = tmp_path / name
        (project / "labels").mkdir(parents=True)
        (project / "labels" / "CustomLabels.labels").write_text(
            labels_xml(labels), encoding="utf-8"
        )
        if translations:
            (project / "translations").mkdir()
            for lang, entries in translations.items():
                (project / "translations" / f"{lang}.translation").write_text(
                    translation_xml(entries), encoding="utf-8"
                )
        return project

    return _make


@pytest.fixture
def sample_labels():
    return [
        ("K1", "Desc1", "Hola", "es", "CatA"),
        ("K2", "Desc2", "Hi", "en", "CatB"),
    ]


@pytest.fixture
def sample_project(make_project, sample_labels):
    """Two labels and an English translation file overriding K1."""
    return make_project(sample_labels, {"en": {"K1": "Hello"}})


@pytest.fixture
def unnamespaced_labels_xml():
    return dedent("""\
        <?xml version="1.0" encoding="UTF-8"?>
        <CustomLabels>
            <labels>
                <fullName>Plain</fullName>
                <language>de</language>
                <shortDescription>No namespace</shortDescription>
                <value>Hallo</value>
            </labels>
        </CustomLabels>
    """)
