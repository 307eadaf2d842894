# src/prefnet/formats/xml_spec.py

"""
Read and write CP-nets as ``PREFERENCE-SPECIFICATION`` XML documents.

The layout follows the CRISNER input format for binary, consistent CP-nets::

    <PREFERENCE-SPECIFICATION>
      <PREFERENCE-VARIABLE>
        <VARIABLE-NAME>Wine</VARIABLE-NAME>
        <DOMAIN-VALUE>Red</DOMAIN-VALUE>      <!-- first value is True -->
        <DOMAIN-VALUE>White</DOMAIN-VALUE>
      </PREFERENCE-VARIABLE>
      ...
      <PREFERENCE-STATEMENT>
        <STATEMENT-ID>0</STATEMENT-ID>
        <PREFERENCE-VARIABLE>Wine</PREFERENCE-VARIABLE>
        <CONDITION>Entree=Fish</CONDITION>     <!-- zero or more -->
        <PREFERENCE>White:Red</PREFERENCE>     <!-- better:worse -->
      </PREFERENCE-STATEMENT>
    </PREFERENCE-SPECIFICATION>

Every variable must have exactly two domain values. Condition values are read
against the declared labels of the conditioning variable.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Union

from ..errors import FormatError, PreferenceError
from ..model.assignment import Assignment
from ..model.specification import PreferenceSpecification

__all__ = [
    "load_specification",
    "loads_specification",
    "write_specification",
    "dumps_specification",
]

logger = logging.getLogger(__name__)

ROOT = "PREFERENCE-SPECIFICATION"
VARIABLE = "PREFERENCE-VARIABLE"
VARIABLE_NAME = "VARIABLE-NAME"
DOMAIN_VALUE = "DOMAIN-VALUE"
STATEMENT = "PREFERENCE-STATEMENT"
STATEMENT_ID = "STATEMENT-ID"
CONDITION = "CONDITION"
PREFERENCE = "PREFERENCE"

PathLike = Union[str, Path]


def _text(el: ET.Element, tag: str, where: str) -> str:
    child = el.find(tag)
    if child is None or child.text is None or not child.text.strip():
        raise FormatError(f"{where}: missing <{tag}>")
    return child.text.strip()


# ──────────────────────────────────────────────────────────────────────────────
# Reading
# ──────────────────────────────────────────────────────────────────────────────

def _from_root(root: ET.Element) -> PreferenceSpecification:
    if root.tag != ROOT:
        raise FormatError(f"expected <{ROOT}> root element, found <{root.tag}>")
    spec = PreferenceSpecification()

    # Only direct children declare variables; statements reuse the tag for their subject.
    for i, var_el in enumerate(root.findall(VARIABLE)):
        name = _text(var_el, VARIABLE_NAME, f"variable #{i}")
        values = [v.text.strip() for v in var_el.findall(DOMAIN_VALUE) if v.text is not None]
        if len(values) != 2:
            raise FormatError(f"variable {name!r} must have exactly two <{DOMAIN_VALUE}>s, found {len(values)}")
        try:
            spec.add_var(name, values[0], values[1])
        except PreferenceError as e:
            raise FormatError(str(e)) from e

    for i, stmt_el in enumerate(root.findall(STATEMENT)):
        where = f"statement #{i}"
        var = _text(stmt_el, VARIABLE, where)
        try:
            condition: Dict[str, bool] = {}
            for cond_el in stmt_el.findall(CONDITION):
                raw = (cond_el.text or "").strip()
                if raw.count("=") != 1:
                    raise FormatError(f"{where}: condition {raw!r} is not of the form var=value")
                parent, label = (s.strip() for s in raw.split("="))
                condition[parent] = spec.value_for(parent, label)

            pref = _text(stmt_el, PREFERENCE, where)
            if pref.count(":") != 1:
                raise FormatError(f"{where}: preference {pref!r} is not of the form better:worse")
            better, worse = (s.strip() for s in pref.split(":"))
            preferred = spec.value_for(var, better)
            if spec.value_for(var, worse) == preferred:
                raise FormatError(f"{where}: preference {pref!r} ranks a value over itself")

            spec.add_preference(var, Assignment(condition), preferred, preserve_acyclicity=False)
        except FormatError:
            raise
        except PreferenceError as e:
            raise FormatError(f"{where}: {e}") from e

    logger.debug("loaded net over %d variables", len(spec))
    return spec


def loads_specification(text: str) -> PreferenceSpecification:
    """Parse a net from an XML string."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise FormatError(f"malformed XML: {e}") from e
    return _from_root(root)


def load_specification(path: PathLike) -> PreferenceSpecification:
    """Read a net from an XML file."""
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise FormatError(f"{path}: malformed XML: {e}") from e
    return _from_root(root)


# ──────────────────────────────────────────────────────────────────────────────
# Writing
# ──────────────────────────────────────────────────────────────────────────────

def _to_root(spec: PreferenceSpecification) -> ET.Element:
    root = ET.Element(ROOT)
    for var in spec.variables:
        var_el = ET.SubElement(root, VARIABLE)
        ET.SubElement(var_el, VARIABLE_NAME).text = var
        for label in spec.value_names(var):
            ET.SubElement(var_el, DOMAIN_VALUE).text = label

    stmt_id = 0
    for table in spec.tables():
        var = table.var
        for parent_assignment, preferred in table.items():
            stmt_el = ET.SubElement(root, STATEMENT)
            ET.SubElement(stmt_el, STATEMENT_ID).text = str(stmt_id)
            stmt_id += 1
            ET.SubElement(stmt_el, VARIABLE).text = var
            for parent, value in parent_assignment.items():
                ET.SubElement(stmt_el, CONDITION).text = f"{parent}={spec.label_for(parent, value)}"
            better = spec.label_for(var, preferred)
            worse = spec.label_for(var, not preferred)
            ET.SubElement(stmt_el, PREFERENCE).text = f"{better}:{worse}"
    ET.indent(root)
    return root


def dumps_specification(spec: PreferenceSpecification) -> str:
    """Serialize a net to an XML string."""
    return ET.tostring(_to_root(spec), encoding="unicode")


def write_specification(spec: PreferenceSpecification, path: PathLike) -> None:
    """Write a net to an XML file (UTF-8), creating parent directories."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    ET.ElementTree(_to_root(spec)).write(p, encoding="utf-8", xml_declaration=True)
    logger.debug("wrote net over %d variables to %s", len(spec), p)
