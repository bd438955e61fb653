"""Parsing of XML-RPC request bodies, XML escaping and UTF-8 cleaning."""

__version__ = "4.0.4"
__all__ = ["xmlmessage"]