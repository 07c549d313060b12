from serialactions.codec.document import as_bool, as_int, as_str, clean_text, safe_read, simplified
from serialactions.codec.escapes import encode_text, resolve_escape_sequences
from serialactions.codec.hexbytes import hex_to_bytes

__all__ = [
    "as_bool",
    "as_int",
    "as_str",
    "clean_text",
    "encode_text",
    "hex_to_bytes",
    "resolve_escape_sequences",
    "safe_read",
    "simplified",
]
