"""Tests for item marshalling."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

import pytest
from lxml import etree
from pydantic import BaseModel, Field, field_serializer
from pydantic_xml import BaseXmlModel, element

from soapenv import SerializationError, marshal


class Record(BaseModel):
    Foo: str


class Color(str, Enum):
    RED = "red"


class Address(BaseModel):
    City: str


class Customer(BaseModel):
    Name: str
    Nickname: Optional[str] = None
    Active: bool = True
    Tags: list[str] = []
    Favorite: Color = Color.RED
    Home: Optional[Address] = None
    customer_id: int = Field(0, alias="CustomerID")


class Ping(BaseXmlModel, tag="Ping"):
    id: int = element(tag="Id")


def test_empty_sequence_marshals_to_nothing():
    assert marshal([]) == b""
    assert marshal([None, None]) == b""
    assert marshal([[], ()]) == b""


def test_plain_model_uses_class_name_and_field_names():
    assert marshal([Record(Foo="bar")]) == b"<Record><Foo>bar</Foo></Record>"


def test_plain_model_field_rendering():
    customer = Customer(Name="Ada", Tags=["a", "b"], Home=Address(City="London"), CustomerID=7)
    root = etree.fromstring(marshal([customer]))
    assert root.tag == "Customer"
    assert root.findtext("Name") == "Ada"
    assert root.find("Nickname") is None
    assert root.findtext("Active") == "true"
    assert [t.text for t in root.findall("Tags")] == ["a", "b"]
    assert root.findtext("Favorite") == "red"
    assert root.find("Home").findtext("City") == "London"
    assert root.findtext("CustomerID") == "7"


def test_text_is_escaped():
    assert marshal([Record(Foo="a<b&c")]) == b"<Record><Foo>a&lt;b&amp;c</Foo></Record>"


def test_pydantic_xml_model():
    assert marshal([Ping(id=3)]) == b"<Ping><Id>3</Id></Ping>"


def test_lxml_element_and_raw_content_pass_through():
    el = etree.Element("Raw")
    el.text = "x"
    el.tail = "ignored"
    assert marshal([el]) == b"<Raw>x</Raw>"
    assert marshal([b"<a:B xmlns:a='urn:a'/>"]) == b"<a:B xmlns:a='urn:a'/>"
    assert marshal(["<C>é</C>"]) == "<C>é</C>".encode("utf-8")


def test_items_are_concatenated_in_order():
    out = marshal([Record(Foo="1"), None, [b"<X/>", Record(Foo="2")]])
    assert out == b"<Record><Foo>1</Foo></Record><X/><Record><Foo>2</Foo></Record>"


@pytest.mark.parametrize("item", [{"Foo": "bar"}, 42, object()])
def test_unsupported_items_raise(item):
    with pytest.raises(SerializationError) as exc_info:
        marshal([item])
    assert exc_info.value.details == {"type": type(item).__name__}


def test_mapping_field_raises():
    class Holder(BaseModel):
        data: dict[str, str]

    with pytest.raises(SerializationError):
        marshal([Holder(data={"a": "b"})])


def test_underlying_error_is_chained():
    with pytest.raises(SerializationError) as exc_info:
        marshal([Record(Foo="bad\x01char")])
    assert isinstance(exc_info.value.__cause__, ValueError)


class Stamp(BaseModel):
    At: datetime


class Money(BaseModel):
    Amount: float
    Currency: str = Field("EUR", serialization_alias="CurrencyCode")

    @field_serializer("Amount")
    def format_amount(self, value: float) -> str:
        return f"{value:.2f}"


class Order(BaseModel):
    Lines: list[Money]


def test_datetime_uses_iso_format():
    assert marshal([Stamp(At=datetime(2024, 1, 2, 3, 4, 5))]) == b"<Stamp><At>2024-01-02T03:04:05</At></Stamp>"
    aware = Stamp(At=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
    assert etree.fromstring(marshal([aware])).findtext("At") == "2024-01-02T03:04:05Z"


def test_field_serializer_and_serialization_alias():
    assert marshal([Money(Amount=1.5)]) == b"<Money><Amount>1.50</Amount><CurrencyCode>EUR</CurrencyCode></Money>"


def test_list_of_nested_models_keeps_serializers():
    root = etree.fromstring(marshal([Order(Lines=[Money(Amount=1), Money(Amount=2.25)])]))
    assert [line.findtext("Amount") for line in root.findall("Lines")] == ["1.00", "2.25"]
