"""
DAG-JSON codec for the IPLD data model.

Values are plain python objects: None, bool, int, float, str, bytes, list,
dict (str keys) and multiformats.CID.
"""

from .config import DAG_JSON_CODE, MAX_DEPTH
from .encode import encode, encode_to_bytes, iterencode
from .decode import decode, decode_from_bytes
from .codec import links, enumerate_cids, hash_to_cid
from .errors import (
	DAGJSONError,
	DAGJSONEncodingError,
	DAGJSONDecodingError,
	UnsupportedValueError,
	UnsupportedTypeError,
	JSONSyntaxError,
	DuplicateKeyError,
	TrailingDataError,
	InvalidLinkError,
	InvalidBytesError,
	NumberOutOfRangeError,
	DepthExceededError,
)
