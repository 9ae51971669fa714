from typing import Iterator

from dag_cbor.ipld import IPLDKind
from multiformats import multihash, CID

from .config import CID_BASE, HASH_FUNCTION
from .decode import decode_from_bytes


# used to find links in a schema-oblivious way
def enumerate_cids(value: IPLDKind) -> Iterator[CID]:
	if type(value) is list:
		for v in value:
			yield from enumerate_cids(v)
	if type(value) is dict:
		for v in value.values():
			yield from enumerate_cids(v)
	if type(value) is CID:
		yield value


def links(data: bytes) -> Iterator[CID]:
	"""
	Yield every CID referenced by a DAG-JSON block, in document order.

	The whole block is decoded (and validated) before the first CID is
	yielded.
	"""
	return enumerate_cids(decode_from_bytes(data))


def hash_to_cid(data: bytes) -> CID:
	digest = multihash.digest(data, HASH_FUNCTION)
	return CID(CID_BASE, 1, "dag-json", digest)
