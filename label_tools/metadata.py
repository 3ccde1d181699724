"""
Salesforce Metadata Reader/Writer

Parses CustomLabels.labels and <lang>.translation files with lxml and writes
CustomLabels.labels back. Labels stay attached to their XML elements, so
fields this tool does not model (e.g. <protected>) survive a round trip.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, NamedTuple, Optional, Union

from lxml import etree

from label_tools.errors import ParseError

logger = logging.getLogger(__name__)

METADATA_NAMESPACE = 'http://soap.sforce.com/2006/04/metadata'
INDENT = '    '


class TranslationEntry(NamedTuple):
    """One <customLabels> override from a translation file."""
    name: str
    label: str


def _qualify(namespace: Optional[str], tag: str) -> str:
    return f"{{{namespace}}}{tag}" if namespace else tag


def _child_text(element, tag: str) -> Optional[str]:
    namespace = etree.QName(element).namespace
    child = element.find(_qualify(namespace, tag))
    if child is None:
        return None
    return child.text or ''


def _parse(path: Union[str, Path], root_tag: str):
    """Parse an XML file and check its root element name."""
    parser = etree.XMLParser(remove_blank_text=True)
    try:
        tree = etree.parse(str(path), parser)
    except OSError as e:
        raise ParseError(f"Cannot read {path}: {e}") from e
    except etree.XMLSyntaxError as e:
        raise ParseError(f"Malformed XML in {path}: {e}") from e

    root = tree.getroot()
    if etree.QName(root).localname != root_tag:
        raise ParseError(
            f"Unexpected root element <{etree.QName(root).localname}> in {path}, "
            f"expected <{root_tag}>"
        )
    return tree


class CustomLabel:
    """A single <labels> entry of CustomLabels.labels."""

    def __init__(self, element):
        self.element = element

    @property
    def full_name(self) -> str:
        return _child_text(self.element, 'fullName') or ''

    @property
    def short_description(self) -> str:
        return _child_text(self.element, 'shortDescription') or ''

    @property
    def categories(self) -> Optional[str]:
        return _child_text(self.element, 'categories')

    @property
    def language(self) -> Optional[str]:
        """The label's own language code, or None when missing or blank."""
        language = _child_text(self.element, 'language')
        if language is None or not language.strip():
            return None
        return language

    @property
    def value(self) -> str:
        return _child_text(self.element, 'value') or ''

    @value.setter
    def value(self, new_value: str):
        namespace = etree.QName(self.element).namespace
        child = self.element.find(_qualify(namespace, 'value'))
        created = child is None
        if created:
            child = etree.SubElement(self.element, _qualify(namespace, 'value'))
        try:
            child.text = new_value
        except ValueError as e:
            # lxml rejects control characters and NULs
            if created:
                self.element.remove(child)
            raise ParseError(f"invalid value for label [{self.full_name}]: {e}") from e

    def __repr__(self):
        return (
            f"CustomLabel(full_name={self.full_name!r}, language={self.language!r}, "
            f"value={self.value!r})"
        )


class CustomLabelsFile:
    """
    In-memory CustomLabels.labels document.

    labels keeps file order; mutate label values in place, then call save().
    """

    def __init__(self, path: Path, tree):
        self.path = Path(path)
        self.tree = tree
        root = tree.getroot()
        self.namespace = etree.QName(root).namespace
        self.labels: List[CustomLabel] = [
            CustomLabel(element)
            for element in root.findall(_qualify(self.namespace, 'labels'))
        ]

    def __iter__(self):
        return iter(self.labels)

    def __len__(self):
        return len(self.labels)

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        """
        Write the document back as indented UTF-8 XML.

        Args:
            path: Target path (defaults to the file it was read from)

        Returns:
            The path written to
        """
        target = Path(path) if path is not None else self.path
        etree.indent(self.tree, space=INDENT)
        self.tree.write(
            str(target),
            encoding='UTF-8',
            xml_declaration=True,
            pretty_print=True,
        )
        logger.info(f"{target.name} saved...")
        return target


def load_custom_labels(path: Union[str, Path]) -> CustomLabelsFile:
    """
    Parse a CustomLabels.labels file.

    Raises:
        ParseError: If the file is unreadable, malformed or not a CustomLabels document
    """
    tree = _parse(path, 'CustomLabels')
    custom_labels = CustomLabelsFile(Path(path), tree)
    logger.info(f"total custom labels found [{len(custom_labels)}]")
    return custom_labels


def load_translations(path: Union[str, Path]) -> List[TranslationEntry]:
    """
    Parse a <lang>.translation file into its custom label overrides.

    Entries without a <name> are ignored; a missing <label> reads as ''.

    Raises:
        ParseError: If the file is unreadable, malformed or not a Translations document
    """
    tree = _parse(path, 'Translations')
    root = tree.getroot()
    namespace = etree.QName(root).namespace

    entries = []
    for element in root.findall(_qualify(namespace, 'customLabels')):
        name = _child_text(element, 'name')
        if not name:
            continue
        entries.append(TranslationEntry(name, _child_text(element, 'label') or ''))

    logger.info(f"total translations found [{len(entries)}]")
    return entries


def translation_map(entries: Iterable[TranslationEntry]) -> Dict[str, str]:
    """Map label key -> translated text. Later duplicates win."""
    return {entry.name: entry.label for entry in entries}
