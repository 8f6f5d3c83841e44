from delaunay.svg.xml import (
    MAX_ATTRIBUTES,
    EventKind,
    XmlEvent,
    iter_xml,
    parse_element,
)


def test_start_tag_with_attributes():
    events = parse_element('rect x="1" y="2"')
    assert events == [
        XmlEvent(EventKind.START, "rect", (("x", "1"), ("y", "2")))
    ]


def test_end_tag():
    assert parse_element("/g") == [XmlEvent(EventKind.END, "g")]


def test_end_tag_ignores_attributes():
    assert parse_element('/g x="1"') == [XmlEvent(EventKind.END, "g")]


def test_self_closing_tag_gives_start_and_end():
    events = parse_element('path d="M0 0"/')
    assert [e.kind for e in events] == [EventKind.START, EventKind.END]
    assert events[0].name == "path"
    assert events[0].attributes == (("d", "M0 0"),)
    assert events[1].name == "path"


def test_declarations_and_comments_ignored():
    assert parse_element('?xml version="1.0"?') == []
    assert parse_element("!-- comment --") == []
    assert parse_element("   ") == []


def test_single_quotes_and_spaced_equals():
    events = parse_element("circle r = '5' fill='red'")
    assert events[0].attributes == (("r", "5"), ("fill", "red"))


def test_unquoted_value_dropped():
    events = parse_element("a b=c")
    assert events == [XmlEvent(EventKind.START, "a", ())]


def test_leading_whitespace_before_name():
    events = parse_element('  svg width="10"')
    assert events[0].name == "svg"
    assert events[0].attributes == (("width", "10"),)


def test_attribute_count_is_capped():
    body = "g " + " ".join(f'a{k}="{k}"' for k in range(200))
    events = parse_element(body)
    assert len(events[0].attributes) == MAX_ATTRIBUTES
    assert events[0].attributes[0] == ("a0", "0")


def test_iter_xml_document():
    doc = '<?xml version="1.0"?>\n<svg width="10">\n  <g>hello </g><rect x="1"/></svg>'
    events = list(iter_xml(doc))
    assert [(e.kind, e.name) for e in events] == [
        (EventKind.START, "svg"),
        (EventKind.START, "g"),
        (EventKind.CONTENT, ""),
        (EventKind.END, "g"),
        (EventKind.START, "rect"),
        (EventKind.END, "rect"),
        (EventKind.END, "svg"),
    ]
    assert events[0].attributes == (("width", "10"),)
    assert events[2].text == "hello "


def test_iter_xml_drops_trailing_text_and_open_tag():
    events = list(iter_xml("<a>text after<b"))
    assert events == [
        XmlEvent(EventKind.START, "a"),
        XmlEvent(EventKind.CONTENT, text="text after"),
    ]


def test_iter_xml_empty():
    assert list(iter_xml("")) == []