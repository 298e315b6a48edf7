import pytest
from markuptree.node import Comment, Element, Property, Text
from markuptree.parser import MarkupParser, parse, print_tree
from markuptree.state_machine import ParserState
from markuptree.tokenizer import MarkupSyntaxError


####
# Text-only input
####

@pytest.mark.ci
def test_empty_string_returns_empty_list():
    assert parse("") == []


@pytest.mark.ci
@pytest.mark.parametrize("content", [" ", "1", "a", "1a", "^", "&", "a &amp; b"])
def test_text_without_tags_is_single_text_node(content):
    assert parse(content) == [Text(value=content)]


@pytest.mark.ci
@pytest.mark.parametrize("content, expected", [
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&apos;", "'"),
    ("&#38;", "&"),
    ("&zzz;", "&zzz;"),
])
def test_single_entity_is_decoded(content, expected):
    assert parse(content) == [Text(value=expected)]


####
# Elements
####

@pytest.mark.ci
def test_self_closing_tag():
    assert parse("<br />") == [Element(name="br")]


@pytest.mark.ci
def test_single_tag_without_content():
    assert parse("<p></p>") == [Element(name="p")]


@pytest.mark.ci
def test_uppercase_tag_is_lowercased():
    assert parse("<P></P>") == parse("<p></p>")
    assert parse("<P></P>")[0].name == "p"


@pytest.mark.ci
def test_extra_space_on_closing_tag():
    assert parse("<p></p >") == [Element(name="p")]


@pytest.mark.ci
def test_single_tag_with_content():
    assert parse("<p> Lorem ipsum </p>") == [
        Element(name="p", children=[Text(value=" Lorem ipsum ")])
    ]


@pytest.mark.ci
def test_text_before_and_after_tags_are_siblings():
    assert parse("a<p></p>b") == [
        Text(value="a"),
        Element(name="p"),
        Text(value="b"),
    ]


@pytest.mark.ci
def test_nested_elements():
    dom = parse("<div><p>one</p><p>two</p></div>")
    assert len(dom) == 1
    div = dom[0]
    assert isinstance(div, Element)
    assert [child.name for child in div.children] == ["p", "p"]
    assert div.children[1].children == [Text(value="two")]


@pytest.mark.ci
def test_br_and_self_closing_never_receive_children():
    dom = parse('<div><br attr="v">x<img src="a.png" />y</div>')
    div = dom[0]
    br, text_x, img, text_y = div.children
    assert br == Element(name="br", properties=[Property("attr", '"v"')])
    assert img.name == "img"
    assert img.children == []
    assert text_x == Text(value="x")
    assert text_y == Text(value="y")


@pytest.mark.ci
def test_void_round_trip_for_br():
    self_closed = parse('<br attr="v" />')[0]
    bare = parse('<br attr="v">')[0]
    assert self_closed.children == [] and bare.children == []
    assert self_closed == bare


@pytest.mark.ci
def test_multiple_top_level_elements():
    dom = parse("<h1>t</h1><p>x</p>")
    assert [node.name for node in dom] == ["h1", "p"]


####
# Attributes
####

@pytest.mark.ci
def test_attributes_keep_source_order_and_quotes():
    dom = parse("""<a href="http://example.com" title='Example' data-x="1">Link</a>""")
    a_tag = dom[0]
    assert a_tag.properties == [
        Property("href", '"http://example.com"'),
        Property("title", "'Example'"),
        Property("data-x", '"1"'),
    ]
    assert a_tag.children == [Text(value="Link")]


@pytest.mark.ci
def test_gt_inside_quoted_attribute():
    dom = parse('<a title=">">x</a>')
    assert dom == [
        Element(
            name="a",
            properties=[Property("title", '">"')],
            children=[Text(value="x")],
        )
    ]


@pytest.mark.ci
def test_structured_attribute_value():
    dom = parse('<button on-click="{}" label="ok"></button>')
    button = dom[0]
    assert button.get("on-click") == {}
    assert button.get("label") == '"ok"'


@pytest.mark.ci
def test_malformed_structured_attribute_raises():
    with pytest.raises(MarkupSyntaxError) as excinfo:
        parse('<p>before</p><div data="{broken}"></div>')
    assert excinfo.value.attribute == "data"
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.ci
def test_parser_state_after_failure():
    parser = MarkupParser(body='<div data="{nope}">')
    with pytest.raises(MarkupSyntaxError):
        parser.parse()
    assert parser.state == ParserState.FAILED


####
# Comments
####

@pytest.mark.ci
def test_comment_is_not_decoded():
    assert parse("<!-- &amp; -->") == [Comment(value=" &amp; ")]


@pytest.mark.ci
def test_comment_inside_element():
    dom = parse("<div><!--note-->text</div>")
    assert dom[0].children == [Comment(value="note"), Text(value="text")]


####
# Malformed input
####

@pytest.mark.ci
def test_stray_closing_tag_is_ignored():
    assert parse("</p>a") == [Text(value="a")]


@pytest.mark.ci
def test_mismatched_closing_tag_pops_current_element():
    # </i> closes <b>, so "tail" lands at the top level
    dom = parse("<b>bold</i>tail")
    assert dom == [
        Element(name="b", children=[Text(value="bold")]),
        Text(value="tail"),
    ]


@pytest.mark.ci
def test_misnested_tags_are_not_repaired():
    dom = parse("<b>Bold <i>both</b> italic</i>")
    b = dom[0]
    assert b.children[0] == Text(value="Bold ")
    i = b.children[1]
    assert i.children == [Text(value="both")]
    # </b> popped <i>, so " italic" is still inside <b>
    assert b.children[2] == Text(value=" italic")
    assert len(dom) == 1


@pytest.mark.ci
def test_trailing_text_goes_to_top_level():
    assert parse("<p>hello") == [Element(name="p"), Text(value="hello")]


@pytest.mark.ci
def test_text_before_a_tag_stays_in_open_element():
    assert parse("<p>hello<br>") == [
        Element(name="p", children=[Text(value="hello"), Element(name="br")])
    ]


@pytest.mark.ci
def test_unbalanced_quote_in_single_quoted_value():
    dom = parse("""<p title='say "hi'>x</p><b>after</b>""")
    assert dom == [
        Element(
            name="p",
            properties=[Property("title", """'say "hi'""")],
            children=[Text(value="x")],
        ),
        Element(name="b", children=[Text(value="after")]),
    ]


@pytest.mark.ci
def test_non_ascii_tag_name_is_not_a_word():
    assert parse("<é>x</é>") == [Element(name="", children=[Text(value="x")])]


@pytest.mark.ci
def test_unterminated_tag_truncates():
    assert parse("<p>ok</p><p") == [
        Element(name="p", children=[Text(value="ok")])
    ]


@pytest.mark.ci
def test_unterminated_comment_truncates():
    assert parse("a<!-- never closed >b") == [Text(value="a")]


@pytest.mark.ci
def test_parser_state_after_success():
    parser = MarkupParser(body="<p>x</p>")
    parser.parse()
    assert parser.state == ParserState.DONE


@pytest.mark.ci
def test_print_tree(capsys):
    dom = parse('<ul class="x"><li>one</li><!--c--></ul>')
    print_tree(dom[0])
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        ' <ul class="x">',
        "   <li>",
        "     'one'",
        "   <!--c-->",
    ]
