import base64
import json
import math
from typing import Iterator

from dag_cbor.ipld import IPLDKind
from multiformats import CID

from .config import INT_MIN, INT_MAX, MAX_DEPTH, CID_BASE
from .errors import UnsupportedValueError, UnsupportedTypeError, NumberOutOfRangeError, DepthExceededError

"""
concepts:

the IPLD data model is plain python values (see dag_cbor.ipld.IPLDKind).
bytes and CIDs have no JSON equivalent, so they get written as reserved
{"/": ...} wrapper objects.

dict keys are written in insertion order. we never sort; whoever built the
dict is responsible for putting the keys in canonical order.

{"/": ...} dicts supplied by the caller are written as-is, and will come back
as a link (or an error) when decoded. that ambiguity is part of the format.
"""


def encode_str(s: str) -> str:
	return json.dumps(s, ensure_ascii=False)


def encode_int(n: int) -> str:
	if n < INT_MIN or n > INT_MAX:
		raise NumberOutOfRangeError(f"integer {n} outside supported range [{INT_MIN}, {INT_MAX}]")
	return str(n)


def encode_float(f: float) -> str:
	if not math.isfinite(f):
		raise UnsupportedValueError(f"can't represent {f!r} as DAG-JSON")
	# repr gives the shortest digits that round-trip, and it always has
	# a "." or an exponent, so it reads back as a float. only the exponent
	# needs trimming: 1e-07 -> 1e-7, 1e+16 -> 1e16
	r = float.__repr__(f)
	if "e" in r:
		mantissa, exponent = r.split("e")
		return f"{mantissa}e{int(exponent)}"
	return r


def encode_bytes(b: bytes) -> str:
	return base64.b64encode(b).decode().rstrip("=")


def cid_to_str(cid: CID) -> str:
	if cid.version == 0:
		return cid.encode()
	return cid.encode(CID_BASE)


def _check_depth(depth: int) -> None:
	if depth > MAX_DEPTH:
		raise DepthExceededError(MAX_DEPTH)


# depth is the number of JSON containers enclosing value
def _iterencode(value: IPLDKind, depth: int) -> Iterator[str]:
	if value is None:
		yield "null"
	elif type(value) is bool:
		yield "true" if value else "false"
	elif type(value) is int:
		yield encode_int(value)
	elif type(value) is float:
		yield encode_float(value)
	elif type(value) is str:
		yield encode_str(value)
	elif type(value) is bytes:
		_check_depth(depth + 2)
		yield '{"/":{"bytes":' + encode_str(encode_bytes(value)) + "}}"
	elif type(value) is CID:
		_check_depth(depth + 1)
		yield '{"/":' + encode_str(cid_to_str(value)) + "}"
	elif type(value) is list:
		_check_depth(depth + 1)
		yield "["
		for i, item in enumerate(value):
			if i:
				yield ","
			yield from _iterencode(item, depth + 1)
		yield "]"
	elif type(value) is dict:
		_check_depth(depth + 1)
		yield "{"
		for i, (k, v) in enumerate(value.items()):
			if type(k) is not str:
				raise UnsupportedTypeError(f"map keys must be strings, not {type(k).__name__}")
			if i:
				yield ","
			yield encode_str(k)
			yield ":"
			yield from _iterencode(v, depth + 1)
		yield "}"
	else:
		raise UnsupportedTypeError(f"can't represent {type(value).__name__} as DAG-JSON")


def iterencode(value: IPLDKind) -> Iterator[str]:
	"""
	Yield the DAG-JSON text for value in chunks.

	Errors are raised as soon as the offending value is reached, so chunks
	already yielded are not a valid document on their own.
	"""
	return _iterencode(value, 0)


def encode_to_bytes(value: IPLDKind) -> bytes:
	text = "".join(iterencode(value))
	try:
		return text.encode("utf-8")
	except UnicodeEncodeError as e:
		# lone surrogates in a str
		raise UnsupportedValueError(f"string is not valid unicode: {e.reason}") from e


def encode(value: IPLDKind, writer) -> None:
	# encode fully first so nothing gets written on failure
	writer.write(encode_to_bytes(value))
