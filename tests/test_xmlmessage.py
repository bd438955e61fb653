import pytest

from jailxml.xmlmessage import (
    BadRequestError,
    XmlMessage,
    XmlNode,
    clean_utf8,
    decode_xml,
    encode_xml,
)

SAMPLE = (
    '<?xml version="1.0"?>'
    "<methodCall><methodName>execute</methodName>"
    "<params><param><value><string>a &amp; b &lt;c&gt;</string></value></param>"
    "<empty/></params></methodCall>"
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (b"Hello, world!", "Hello, world!"),
        ("Valid UTF-8: ©, 你好, Привет".encode(), "Valid UTF-8: ©, 你好, Привет"),
        (
            "Valid UTF-8:\n\r\t ©,\n\r\t 你好,\n\r\t Привет".encode(),
            "Valid UTF-8:\n\r\t ©,\n\r\t 你好,\n\r\t Привет",
        ),
        ("😀😇👺🤜🔲🔢".encode(), "😀😇👺🤜🔲🔢"),
        (b"Invalid single byte: \x80\x81\x82", "Invalid single byte: "),
        (
            b"Mixed valid and invalid: Hello \x80World \xc2\xa9",
            "Mixed valid and invalid: Hello World ©",
        ),
        (b"Invalid continuation: \xc3\x28", "Invalid continuation: "),
        (b"Truncated multi-byte: \xc2\xa9\xe2\x82", "Truncated multi-byte: ©"),
        (b"Valid followed by invalid: \xc2\xa9\x80", "Valid followed by invalid: ©"),
        (b"", ""),
    ],
)
def test_clean_utf8(raw, expected):
    assert clean_utf8(raw) == expected


def test_clean_utf8_accepts_text():
    assert clean_utf8("café") == "café"


def test_encode_xml_escapes_special_characters():
    assert encode_xml("a & b < c > d 'e' \"f\"") == (
        "a &amp; b &lt; c &gt; d &apos;e&apos; &quot;f&quot;"
    )


def test_encode_xml_drops_invalid_bytes():
    assert encode_xml(b"x\x80<y") == "x&lt;y"


@pytest.mark.parametrize(
    "text",
    ["", "plain", "a & b", "<tag attr='v'>\"q\"</tag>", "ñáÑ 😊 &amp;"],
)
def test_encode_decode_round_trip(text):
    assert decode_xml(encode_xml(text)) == text


def test_decode_numeric_reference():
    assert decode_xml("&#65;&#66;C") == "ABC"


def test_decode_numeric_reference_wraps_to_byte():
    assert decode_xml("&#321;") == "A"


@pytest.mark.parametrize("bad", ["&unknown;", "a &amp b", "&", "&;"])
def test_decode_errors(bad):
    with pytest.raises(BadRequestError) as info:
        decode_xml(bad)
    assert info.value.code == 400
    assert info.value.message == "XML string decode error"


def test_parse_structure():
    message = XmlMessage(SAMPLE)
    root = message.root
    assert root.tag == "methodCall"
    assert [child.tag for child in root.children] == ["methodName", "params"]
    method_name, params = root.children
    assert method_name.raw_content() == "execute"
    assert [child.tag for child in params] == ["param", "empty"]
    assert params.children[1].raw_content() == ""


def test_get_string_decodes_content():
    root = XmlMessage(SAMPLE).root
    string_node = root.children[1].children[0].children[0].children[0]
    assert string_node.tag == "string"
    assert string_node.get_string() == "a & b <c>"


def test_get_string_wrong_type():
    root = XmlMessage(SAMPLE).root
    with pytest.raises(BadRequestError) as info:
        root.children[0].get_string()
    assert info.value.detail == "Expected string and found methodName"


def test_add_child():
    parent = XmlNode("", "a", 0)
    child = XmlNode("", "b", 0)
    parent.add_child(child)
    assert parent.children == [child]


def test_missing_start_tag():
    with pytest.raises(BadRequestError) as info:
        XmlMessage('<?xml version="1.0"?>')
    assert info.value.message == "XML parse error: start tag not found"


def test_unexpected_end_of_tag():
    with pytest.raises(BadRequestError) as info:
        XmlMessage("<?xml?><a><b></a>")
    assert info.value.message == "XML parse error: unexpected end of tag"
    assert info.value.detail == "a"


def test_end_tag_not_found():
    with pytest.raises(BadRequestError) as info:
        XmlMessage("<?xml?><a><b></b>")
    assert info.value.message == "XML parse error: end tag not found"


def test_unexpected_end_of_xml():
    with pytest.raises(BadRequestError) as info:
        XmlMessage("<?xml?><a")
    assert info.value.message == "XML parse error: unexpected end of XML"


def test_trailing_data_after_root_is_ignored():
    message = XmlMessage("<?xml?><a>text</a> trailing <b>")
    assert message.root.tag == "a"
    assert message.root.raw_content() == "text"