# jailxml

A small parser for XML-RPC style request bodies. It also has helpers that
escape and unescape XML text and that reduce byte strings to valid UTF-8.
It needs nothing outside the standard library.

## Installation

```
pip install jailxml
```

## Parsing a request

`XmlMessage` parses a request body, such as an XML-RPC `methodCall`, into a
tree of `XmlNode` objects. The tree is available as `message.root`. The
parser skips the first tag, which is normally the `<?xml ...?>`
declaration, and makes the second tag the root. Malformed input raises
`BadRequestError`, whose `code` is 400:

- "start tag not found"
- "unexpected end of tag"
- "end tag not found"
- "unexpected end of XML"

If the body does not end in `</methodCall>`, the parser logs a message at
INFO level on the `jailxml.xmlmessage` logger and parses the body anyway.

```python
from jailxml.xmlmessage import XmlMessage, BadRequestError

body = (
    '<?xml version="1.0"?>'
    "<methodCall><methodName>request</methodName></methodCall>"
)
message = XmlMessage(body)
root = message.root                  # XmlNode for "methodCall"
method = root.children[0]            # XmlNode for "methodName"
method.raw_content()                 # "request"

try:
    XmlMessage("<?xml?><methodCall><a></b></methodCall>")
except BadRequestError as error:
    print(error)   # XML parse error: unexpected end of tag: b
```

An `XmlNode` has these members:

- `tag` (also available as `name`)
- `children`, a list that the node also iterates over
- `add_child(child)`
- `raw_content()`, which returns the undecoded text between the opening
  and closing tags
- `get_string()`, which decodes the content of a `string` or `name`
  element and raises `BadRequestError` for any other tag

Self-closing tags such as `<nil/>` become children with empty content.

## Escaping and cleaning text

```python
from jailxml.xmlmessage import encode_xml, decode_xml, clean_utf8

encode_xml("a < b & 'c'")           # "a &lt; b &amp; &apos;c&apos;"
decode_xml("a &lt; b &amp; &#65;")  # "a < b & A"
clean_utf8(b"ok \x80bytes")         # "ok bytes"
```

`clean_utf8` accepts `bytes` or `str`. It drops every invalid or truncated
UTF-8 sequence and returns a `str`.

`encode_xml` cleans its input in the same way, then escapes
`& < > ' "` as entities.

`decode_xml` resolves the five predefined entities and decimal character
references. A decimal reference gives a single character whose code is
taken modulo 256. Any other entity, or an `&` that has no closing `;`,
raises `BadRequestError`.

## What this package does not do

This is not a general XML parser. It does not understand the following:

- attributes: the whole text inside `<...>` is taken as the tag, so
  `<a x="1">` does not match `</a>`
- comments and CDATA sections
- namespaces

It provides no HTTP server, no XML-RPC method dispatch and no way to build
responses. It only parses request bodies and escapes text.

## Running the tests

```
pip install -e ".[test]"
pytest
```