"""Generic mapping -> XML serialization"""

from typing import Any, Mapping
from xml.etree.ElementTree import Element, SubElement, tostring


XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _fill(el: Element, value: Any, attr_prop: str, val_prop: str) -> None:
    """Populate el from value: mappings become attributes/text/children, scalars become text."""
    if not isinstance(value, Mapping):
        el.text = _text(value)
        return
    for key, child in value.items():
        if child is None:
            continue
        if key == attr_prop:
            for attr, attr_value in child.items():
                if attr_value is not None:
                    el.set(attr, _text(attr_value))
        elif key == val_prop:
            el.text = _text(child)
        elif isinstance(child, (list, tuple)):
            for item in child:
                if item is not None:
                    _fill(SubElement(el, key), item, attr_prop, val_prop)
        else:
            _fill(SubElement(el, key), child, attr_prop, val_prop)


def data_to_xml(root: str, data: Any, attr_prop: str = "@", val_prop: str = "#") -> str:
    """Serialize data under a root element named root.

    A key equal to attr_prop holds a mapping of XML attributes, a key equal to
    val_prop holds the element text. Lists repeat the element once per item and
    None values are left out.
    """
    el = Element(root)
    _fill(el, data, attr_prop, val_prop)
    return XML_DECLARATION + tostring(el, encoding="unicode")
