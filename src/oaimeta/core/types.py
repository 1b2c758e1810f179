"""Type definitions for oaimeta."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union


@dataclass(frozen=True)
class LiteralValue:
    """A literal property value.

    Attributes:
        text: Lexical form of the literal.
        language: Language tag, or an empty string when the literal has none.
    """

    text: str
    language: str = ""

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class ReferenceValue:
    """A property value pointing at another entity."""

    uri: str

    def __str__(self) -> str:
        return self.uri


Value = Union[LiteralValue, ReferenceValue]

# Row of the resource-selection query (variable name -> bound value)
SearchResultRow = Mapping[str, Any]


class Cardinality(Enum):
    """How many output elements a property selector produces."""

    ONE = "1"
    AT_LEAST_ONE = "+"
    ANY = "*"

    @classmethod
    def parse(cls, token: str | None) -> "Cardinality":
        """Parse a template `count` attribute.

        Only `1` and `+` are special-cased; a missing or empty attribute
        means `1` and every other token behaves like `*`.
        """
        if not token or token == "1":
            return cls.ONE
        if token == "+":
            return cls.AT_LEAST_ONE
        return cls.ANY


class ProducerKind(Enum):
    """Metadata producer variants."""

    TEMPLATE = "template"
    RDFXML = "rdfxml"
