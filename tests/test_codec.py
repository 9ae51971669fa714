"""
Round-trip properties, link extraction and block addressing.
"""

import dag_cbor
import pytest
from multiformats import CID

from picodagjson import (
	encode_to_bytes,
	decode_from_bytes,
	links,
	enumerate_cids,
	hash_to_cid,
	DAG_JSON_CODE,
	DuplicateKeyError,
)

from conftest import RAW_CID, DAG_PB_CID, V0_CID


SAMPLES = [
	None,
	True,
	0,
	-1,
	2**64 - 1,
	-(2**64),
	0.5,
	-1e-300,
	1.7976931348623157e308,
	"",
	"日本語\n\"quoted\"",
	b"",
	bytes(range(256)),
	[],
	{},
	CID.decode(RAW_CID),
	CID.decode(V0_CID),
	{"a": [1, 2.0, None], "b": {"c": b"\x00\x01\xff", "d": CID.decode(DAG_PB_CID)}},
	[[[[{"deep": [b"x"]}]]]],
	{"/": "x", "not": "reserved"},
]


@pytest.mark.parametrize("value", SAMPLES)
def test_round_trip(value):
	assert decode_from_bytes(encode_to_bytes(value)) == value


@pytest.mark.parametrize("value", SAMPLES)
def test_reencoding_is_stable(value):
	encoded = encode_to_bytes(value)
	assert encode_to_bytes(decode_from_bytes(encoded)) == encoded


def test_round_trip_preserves_types():
	value = decode_from_bytes(encode_to_bytes([1, 1.0, True, b"1", "1"]))
	assert [type(v) for v in value] == [int, float, bool, bytes, str]


def test_byte_wrapper_fidelity():
	encoded = encode_to_bytes(bytes([0x00, 0x01, 0xFF]))
	assert encoded == b'{"/":{"bytes":"AAH/"}}'
	assert decode_from_bytes(encoded) == bytes([0x00, 0x01, 0xFF])


def test_link_fidelity():
	cid = CID.decode(DAG_PB_CID)
	encoded = encode_to_bytes(cid)
	assert encoded == b'{"/":"' + DAG_PB_CID.encode() + b'"}'
	decoded = decode_from_bytes(encoded)
	assert decoded == cid
	assert decoded.encode("base32") == DAG_PB_CID


def test_links(cid):
	data = encode_to_bytes({"some": {"nested": cid}, "or": [cid, cid], "foo": True})
	assert list(links(data)) == [cid, cid, cid]


def test_links_document_order():
	a, b, c = (hash_to_cid(encode_to_bytes(i)) for i in range(3))
	data = encode_to_bytes({"x": [a, {"y": b}], "z": c, "bytes": b"not a link"})
	assert list(links(data)) == [a, b, c]


def test_links_validates_block():
	with pytest.raises(DuplicateKeyError):
		list(links(b'{"a":1,"a":2}'))


def test_enumerate_cids_empty():
	assert list(enumerate_cids({"a": [1, "b", b"c"]})) == []


def test_hash_to_cid():
	block = encode_to_bytes({"hello": "world"})
	cid = hash_to_cid(block)
	assert cid.version == 1
	assert cid.codec.name == "dag-json"
	assert cid.codec.code == DAG_JSON_CODE
	assert cid.hashfun.name == "sha2-256"
	assert str(cid).startswith("b")
	assert hash_to_cid(block) == cid
	assert hash_to_cid(encode_to_bytes({"hello": "world!"})) != cid


def test_cid_survives_as_link():
	"""A block's CID can be linked from another block and read back."""
	child = encode_to_bytes({"name": "child"})
	parent = encode_to_bytes({"child": hash_to_cid(child)})
	assert decode_from_bytes(parent)["child"] == hash_to_cid(child)


def test_dag_cbor_cross_check():
	"""
	Anything we decode can be carried through dag-cbor and comes back to the
	same DAG-JSON bytes.

	Keys are single characters so dag-cbor's length-first ordering matches
	the order we write them in.
	"""
	data = (
		b'{"a":18446744073709551615,"b":-18446744073709551616,"c":1.5,'
		b'"d":{"/":{"bytes":"AAH/"}},"e":{"/":"' + RAW_CID.encode() + b'"},'
		b'"f":[null,true,"x"]}'
	)
	value = decode_from_bytes(data)
	via_cbor = dag_cbor.decode(dag_cbor.encode(value))
	assert via_cbor == value
	assert encode_to_bytes(via_cbor) == data
