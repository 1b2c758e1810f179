"""Tests for TemplateEngine rendering."""

import xml.etree.ElementTree as ET
from datetime import date
from urllib.parse import parse_qs, urlsplit

from oaimeta.core.types import LiteralValue, ReferenceValue
from oaimeta.metadata import XML_LANG, TemplateEngine, TemplateLoader, oai_record_url, parse_template
from oaimeta.metadata.selectors import RECOGNIZED_ATTRIBUTES
from tests.fakes import vocab

DEU = "https://vocabs.example/iso6393/deu"


def render(engine, xml: str, fmt, resource: str = vocab.RES) -> ET.Element:
    return engine.render(parse_template(xml, fmt.prop_nmsp), resource, fmt)


def recognized_attributes(element: ET.Element) -> set[str]:
    return {a for el in element.iter() for a in el.attrib if a in RECOGNIZED_ATTRIBUTES}


class TestSpecialSelectors:
    """Tests for NOW, URI and OAIURI."""

    def test_now_is_current_date(self, engine, fmt):
        root = render(engine, '<r><d val="NOW"/></r>', fmt)

        assert date.fromisoformat(root.find("d").text) == date.today()

    def test_now_uses_engine_clock(self, graph, fmt):
        engine = TemplateEngine(graph, today=lambda: date(2024, 2, 29))

        root = render(engine, '<r><d val="NOW"/></r>', fmt)

        assert root.find("d").text == "2024-02-29"

    def test_uri(self, engine, graph, fmt):
        graph.add(vocab.RES, vocab.URI_PROP, ReferenceValue(vocab.PID))

        root = render(engine, '<r><u val="URI"/></r>', fmt)

        assert root.find("u").text == vocab.PID
        assert root.find("u").attrib == {}

    def test_uri_missing_is_empty(self, engine, fmt):
        root = render(engine, '<r><u val="URI"/></r>', fmt)

        assert root.find("u") is not None
        assert not root.find("u").text

    def test_oaiuri(self, engine, graph, fmt):
        graph.add(vocab.RES, vocab.URI_PROP, ReferenceValue(vocab.PID))

        root = render(engine, '<r><u val="OAIURI"/></r>', fmt)

        assert root.find("u").text == (
            "https://repo.example/oai?verb=GetRecord&metadataPrefix=cmdi"
            "&identifier=https%3A%2F%2Fhdl.handle.net%2F21.11115%2F0000-000C-29F3-4"
        )

    def test_oai_record_url_encodes_parameters(self):
        url = oai_record_url("https://r.example/oai", "cmdi prefix&x", "https://a.example/b?c=d")

        query = parse_qs(urlsplit(url).query)
        assert query == {
            "verb": ["GetRecord"],
            "metadataPrefix": ["cmdi prefix&x"],
            "identifier": ["https://a.example/b?c=d"],
        }

    def test_special_value_replaces_content(self, engine, fmt):
        root = render(engine, '<r><d val="NOW"><child/>text</d></r>', fmt)

        assert len(root.find("d")) == 0


class TestPropertySelectors:
    """Tests for property selectors inside a tree."""

    def test_one_without_values_keeps_empty_node(self, engine, fmt):
        root = render(engine, '<r><t val="/acdh:hasTitle" count="1"/></r>', fmt)

        title = root.find("t")
        assert title is not None
        assert not title.text
        assert title.attrib == {}

    def test_any_without_values_removes_node(self, engine, fmt):
        root = render(engine, '<r><a/><t val="/acdh:hasTitle" count="*"/><b/></r>', fmt)

        assert [child.tag for child in root] == ["a", "b"]

    def test_any_emits_siblings_in_graph_order(self, engine, graph, fmt):
        graph.add(vocab.RES, vocab.TITLE, LiteralValue("B", "de"), LiteralValue("A", "en"))

        root = render(engine, '<r><t val="/acdh:hasTitle" count="*" lang="true"/></r>', fmt)

        titles = root.findall("t")
        assert [t.text for t in titles] == ["B", "A"]
        assert [t.get(XML_LANG) for t in titles] == ["de", "en"]

    def test_clones_take_node_position(self, engine, graph, fmt):
        graph.add(vocab.RES, vocab.TITLE, LiteralValue("x"), LiteralValue("y"))

        root = render(engine, '<r><a/><t val="/acdh:hasTitle" count="*"/><b/></r>', fmt)

        assert [(child.tag, child.text) for child in root] == [
            ("a", None),
            ("t", "x"),
            ("t", "y"),
            ("b", None),
        ]

    def test_one_default_language(self, engine, graph, fmt):
        graph.add(vocab.RES, vocab.TITLE, LiteralValue("A", "en"), LiteralValue("B", "de"))

        root = render(engine, '<r><t val="/acdh:hasTitle"/></r>', fmt)

        assert [t.text for t in root.findall("t")] == ["A"]

    def test_one_falls_back_to_other_language(self, engine, graph, fmt):
        graph.add(vocab.RES, vocab.TITLE, LiteralValue("B", "de"))

        texts = [render(engine, '<r><t val="/acdh:hasTitle"/></r>', fmt).find("t").text for _ in range(3)]

        assert texts == ["B", "B", "B"]

    def test_nested_removal_is_post_order(self, engine, graph, fmt):
        """Children are settled before their parent is evaluated."""
        graph.add(vocab.RES, vocab.TITLE, LiteralValue("A", "en"))
        xml = (
            "<r><group>"
            '<t val="/acdh:hasTitle" count="*"/>'
            '<c val="/acdh:hasContributor" count="*"/>'
            '<e val="/acdh:hasExtent" count="*"/>'
            "</group></r>"
        )

        root = render(engine, xml, fmt)

        assert [child.tag for child in root.find("group")] == ["t"]

    def test_removable_root_yields_empty_root(self, engine, fmt):
        root = render(engine, '<r val="/acdh:hasTitle" count="*" type="x"><a/></r>', fmt)

        assert root.tag == "r"
        assert root.attrib == {"type": "x"}
        assert len(root) == 0

    def test_unrecognized_selector_drops_node(self, engine, fmt):
        root = render(engine, '<r><a val="TODAY"/><b/></r>', fmt)

        assert [child.tag for child in root] == ["b"]


class TestMixedContent:
    """Tests for text between template elements."""

    XML = '<r>a<t val="/acdh:hasTitle" count="*"/>b<u/>c</r>'

    def test_removed_node_keeps_following_text(self, engine, fmt):
        root = render(engine, self.XML, fmt)

        assert ET.tostring(root, encoding="unicode") == "<r>ab<u />c</r>"

    def test_removed_node_after_sibling(self, engine, fmt):
        root = render(engine, '<r><u/>a<t val="NOPE"/>b</r>', fmt)

        assert ET.tostring(root, encoding="unicode") == "<r><u />ab</r>"

    def test_clones_do_not_repeat_following_text(self, engine, graph, fmt):
        graph.add(vocab.RES, vocab.TITLE, LiteralValue("x"), LiteralValue("y"))

        root = render(engine, self.XML, fmt)

        assert ET.tostring(root, encoding="unicode") == "<r>a<t>x</t><t>y</t>b<u />c</r>"


class TestLabels:
    """Tests for getLabel during rendering."""

    XML = '<r><l val="/acdh:hasLanguage" count="*" getLabel="true"/></r>'

    def test_label_replaces_reference(self, engine, graph, fmt):
        graph.add(vocab.RES, vocab.LANGUAGE, ReferenceValue(DEU))
        graph.add_label(DEU, "German", "en")

        root = render(engine, self.XML, fmt)

        assert root.find("l").text == "German"

    def test_cached_across_resources(self, engine, graph, fmt):
        """A second resource referencing the same URI causes no label query."""
        graph.add(vocab.RES, vocab.LANGUAGE, ReferenceValue(DEU))
        graph.add(vocab.RES2, vocab.LANGUAGE, ReferenceValue(DEU))
        graph.add_label(DEU, "German", "en")
        template = parse_template(self.XML, fmt.prop_nmsp)

        engine.render(template, vocab.RES, fmt)
        queries = graph.calls["label_values"]
        root = engine.render(template, vocab.RES2, fmt)

        assert queries == 1
        assert graph.calls["label_values"] == 1
        assert root.find("l").text == "German"


class TestTemplates:
    """Tests rendering whole template files."""

    def test_template_without_selectors_is_identity(self, engine, fmt, template_dir):
        path = str(template_dir / "static.xml")
        template = TemplateLoader().load(path, fmt.prop_nmsp)

        root = engine.render(template, vocab.RES, fmt)

        expected = ET.parse(path).getroot()
        assert [(el.tag, el.attrib, (el.text or "").strip()) for el in root.iter()] == [
            (el.tag, el.attrib, (el.text or "").strip()) for el in expected.iter()
        ]

    def test_no_recognized_attributes_remain(self, engine, graph, fmt, template_dir):
        graph.add(vocab.RES, vocab.TITLE, LiteralValue("A", "en"), LiteralValue("B", "de"))
        graph.add(vocab.RES, vocab.LANGUAGE, ReferenceValue(DEU))
        template = TemplateLoader().load(str(template_dir / f"{vocab.PROFILE}.xml"), fmt.prop_nmsp)

        root = engine.render(template, vocab.RES, fmt)

        assert recognized_attributes(root) == set()

    def test_template_is_not_modified(self, engine, graph, fmt):
        graph.add(vocab.RES, vocab.TITLE, LiteralValue("A", "en"))
        template = parse_template('<r><t val="/acdh:hasTitle" count="*"/></r>', fmt.prop_nmsp)

        first = engine.render(template, vocab.RES, fmt)
        second = engine.render(template, vocab.RES2, fmt)

        assert [t.text for t in first] == ["A"]
        assert list(second) == []

    def test_full_profile(self, engine, graph, fmt, template_dir):
        graph.add(vocab.RES, vocab.URI_PROP, ReferenceValue(vocab.PID))
        graph.add(vocab.RES, vocab.TITLE, LiteralValue("Ein Titel", "de"), LiteralValue("A title", "en"))
        graph.add(vocab.RES, vocab.LANGUAGE, ReferenceValue(DEU))
        graph.add(vocab.RES, vocab.EXTENT, LiteralValue("pages: 12"))
        graph.add_label(DEU, "German", "en")
        template = TemplateLoader().load(str(template_dir / f"{vocab.PROFILE}.xml"), fmt.prop_nmsp)

        root = engine.render(template, vocab.RES, fmt)

        ns = {"cmd": "http://www.clarin.eu/cmd/1"}
        record = root.find("cmd:Components/Record", ns)
        assert root.find("cmd:Header/cmd:MdSelfLink", ns).text == vocab.PID
        assert root.find("cmd:Header/cmd:MdProfile", ns).text == vocab.PROFILE
        assert [(t.text, t.get(XML_LANG)) for t in record.findall("Title")] == [
            ("Ein Titel", "de"),
            ("A title", "en"),
        ]
        assert record.find("MainTitle").text == "A title"
        assert [(l.text, l.get(XML_LANG)) for l in record.findall("Language")] == [("German", "en")]
        assert record.find("Pages").text == "12"
        assert record.find("Contributor") is None
