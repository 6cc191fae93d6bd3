"""Alternative entry encodings."""

from taglog.core.encoding.ndjson import encode_entries, encode_entry, entry_to_dict

__all__ = ["encode_entries", "encode_entry", "entry_to_dict"]
