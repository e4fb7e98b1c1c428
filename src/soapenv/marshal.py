"""
Item marshalling — turns header and payload items into embeddable XML bytes.

Items are rendered back to back, without an XML declaration or a wrapper
element, so the result can be dropped verbatim inside a Header or Body.

Supported items:
- pydantic_xml models, rendered with their own XML mapping
- plain pydantic models, rendered from their JSON-mode dump (class name as
  tag, one child element per field)
- lxml elements
- bytes / str, treated as already-serialized XML
- None, rendered as nothing
- lists and tuples of the above, flattened in order
"""

from typing import Any, Iterable, Optional

from lxml import etree
from pydantic import BaseModel
from pydantic_xml import BaseXmlModel

from soapenv.errors import SerializationError


def marshal(items: Iterable[Any]) -> bytes:
    """Marshal `items` into a single XML fragment."""
    chunks: list[bytes] = []
    try:
        for item in items:
            _marshal_item(item, chunks)
    except SerializationError:
        raise
    except Exception as e:
        raise SerializationError(f"Failed to marshal item: {e}") from e
    return b"".join(chunks)


def _marshal_item(item: Any, out: list[bytes]) -> None:
    if item is None:
        return
    if isinstance(item, bytes):
        out.append(item)
    elif isinstance(item, str):
        out.append(item.encode("utf-8"))
    elif isinstance(item, (list, tuple)):
        for sub in item:
            _marshal_item(sub, out)
    elif isinstance(item, BaseXmlModel):
        xml = item.to_xml()
        out.append(xml.encode("utf-8") if isinstance(xml, str) else xml)
    elif isinstance(item, BaseModel):
        out.append(etree.tostring(model_to_element(item)))
    elif etree.iselement(item):
        out.append(etree.tostring(item, with_tail=False))
    else:
        raise SerializationError(
            f"Cannot marshal value of type {type(item).__name__}",
            {"type": type(item).__name__},
        )


def model_to_element(model: BaseModel, tag: Optional[str] = None, data: Any = None) -> etree._Element:
    """Render a plain pydantic model as an element tree.

    Values come from the model's JSON-mode dump, so field serializers,
    aliases and pydantic's own datetime / enum formatting apply. The element
    is named after the model class unless `tag` is given; nested models are
    named after their field. Fields set to None are omitted; list fields
    repeat the child element.
    """
    if data is None:
        data = model.model_dump(mode="json", by_alias=True, exclude_none=True)
    el = etree.Element(tag or type(model).__name__)
    if not isinstance(data, dict):
        el.text = _text(data)
        return el
    for name, field in type(model).model_fields.items():
        key = field.serialization_alias or field.alias or name
        if key in data:
            _append_field(el, key, getattr(model, name), data[key])
    return el


def _append_field(parent: etree._Element, tag: str, value: Any, dumped: Any) -> None:
    if dumped is None:
        return
    if isinstance(dumped, list):
        values = value if isinstance(value, (list, tuple)) and len(value) == len(dumped) else [None] * len(dumped)
        for v, d in zip(values, dumped):
            _append_field(parent, tag, v, d)
    elif isinstance(dumped, dict):
        if isinstance(value, BaseXmlModel):
            parent.append(value.to_xml_tree())
        elif isinstance(value, BaseModel):
            parent.append(model_to_element(value, tag, dumped))
        else:
            raise SerializationError(f"Cannot marshal mapping field {tag!r}", {"field": tag})
    else:
        child = etree.SubElement(parent, tag)
        child.text = _text(dumped)


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
