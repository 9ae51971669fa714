# format constants. these are fixed by DAG-JSON, not tunables.

# multicodec code for dag-json
DAG_JSON_CODE = 0x0129

# same range as dag-cbor major types 0 and 1, so anything we decode can be
# re-encoded as dag-cbor
INT_MIN = -(1 << 64)
INT_MAX = (1 << 64) - 1

# maximum nesting of JSON arrays/objects, wrapper objects included
MAX_DEPTH = 512

CID_BASE = "base32"
HASH_FUNCTION = "sha2-256"
