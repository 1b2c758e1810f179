"""Metadata as the RDF/XML serialization of a resource's own graph."""

import xml.etree.ElementTree as ET
from xml.etree.ElementTree import Element

from .base import BaseMetadata


class RdfXmlMetadata(BaseMetadata):
    """Passes the resource's metadata graph through as RDF/XML.

    Needs no template and no query extensions.
    """

    def produce(self) -> Element:
        return ET.fromstring(self.context.graph.serialize(self.resource))
