import base64
import binascii
import json
import logging
import math
import re
from typing import List, Tuple

from dag_cbor.ipld import IPLDKind
from multiformats import CID

from .config import INT_MIN, INT_MAX, MAX_DEPTH
from .encode import encode_bytes
from .errors import (
	JSONSyntaxError,
	DuplicateKeyError,
	TrailingDataError,
	InvalidLinkError,
	InvalidBytesError,
	NumberOutOfRangeError,
	DepthExceededError,
)

logger = logging.getLogger(__name__)

# characters the structure scan stops at. N and I can only start NaN or
# Infinity outside a string, which are not JSON
_SPECIAL = re.compile(r'[\[\]{}"\\NI]')
_SURROGATE_ESCAPE = re.compile(r"\\u([dD][89a-fA-F][0-9a-fA-F]{2})")
_CONSTANT = re.compile(r"NaN|Infinity")
_WHITESPACE = re.compile(r"[ \t\n\r]*")

# 2**64 has 20 digits
_MAX_INT_DIGITS = 20


def _lineno_colno(text: str, pos: int) -> Tuple[int, int]:
	lineno = text.count("\n", 0, pos) + 1
	colno = pos - text.rfind("\n", 0, pos)
	return lineno, colno


def _syntax_error(msg: str, text: str, pos: int) -> JSONSyntaxError:
	lineno, colno = _lineno_colno(text, pos)
	return JSONSyntaxError(msg, pos, lineno, colno)


def scan_structure(text: str) -> None:
	"""
	Single linear pass over the input ahead of the json tokenizer.

	Rejects nesting deeper than MAX_DEPTH, unpaired surrogate escapes (which
	json would turn into a str that can't be re-encoded) and the NaN and
	Infinity literals json would otherwise hand to parse_constant without a
	position.
	"""
	# json recurses once per nesting level, so this has to run first
	depth = 0
	in_string = False
	skip = -1
	for m in _SPECIAL.finditer(text):
		pos = m.start()
		if pos == skip:
			continue
		c = m.group()
		if in_string:
			if c == '"':
				in_string = False
			elif c == "\\":
				skip = pos + 1
				esc = _SURROGATE_ESCAPE.match(text, pos)
				if esc is None:
					continue
				n = int(esc.group(1), 16)
				if n < 0xDC00:
					low = _SURROGATE_ESCAPE.match(text, esc.end())
					if low is not None and int(low.group(1), 16) >= 0xDC00:
						skip = low.start()
						continue
				raise _syntax_error("unpaired surrogate escape in string", text, pos)
		elif c == '"':
			in_string = True
		elif c == "[" or c == "{":
			depth += 1
			if depth > MAX_DEPTH:
				logger.debug("input nests deeper than %d at char %d", MAX_DEPTH, pos)
				raise DepthExceededError(MAX_DEPTH, pos)
		elif c == "]" or c == "}":
			depth -= 1
		elif c == "N" or c == "I":
			if c == "I" and pos > 0 and text[pos - 1] == "-":
				pos -= 1
			const = _CONSTANT.match(text, m.start())
			name = text[pos:const.end()] if const else c
			raise _syntax_error(f"{name} is not valid JSON", text, pos)


def parse_int(s: str) -> int:
	if len(s.lstrip("-")) > _MAX_INT_DIGITS:
		raise NumberOutOfRangeError(f"integer {s[:32]}... outside supported range")
	n = int(s)
	if n < INT_MIN or n > INT_MAX:
		raise NumberOutOfRangeError(f"integer {s} outside supported range [{INT_MIN}, {INT_MAX}]")
	return n


def parse_float(s: str) -> float:
	f = float(s)
	if not math.isfinite(f):
		raise NumberOutOfRangeError(f"float {s} outside supported range")
	return f


def parse_constant(name: str):
	# scan_structure normally catches these first, with a position
	raise JSONSyntaxError(f"{name} is not valid JSON")


def decode_bytes(s: str) -> bytes:
	# only the exact form encode_bytes writes is accepted: no padding, zero
	# trailing bits. anything else would be a second spelling of the same bytes
	try:
		b = base64.b64decode(s + "=" * (-len(s) % 4), validate=True)
	except binascii.Error as e:
		raise InvalidBytesError(f"invalid base64 in bytes wrapper: {s!r}") from e
	if encode_bytes(b) != s:
		raise InvalidBytesError(f"non-canonical base64 in bytes wrapper: {s!r}")
	return b


def decode_link(s: str) -> CID:
	try:
		return CID.decode(s)
	except Exception as e: # multiformats raises a variety of error types
		raise InvalidLinkError(f"invalid CID in link wrapper: {s!r}") from e


def decode_reserved(value) -> IPLDKind:
	if type(value) is str:
		return decode_link(value)
	if type(value) is dict:
		# by the time we see it, the inner object has already been decoded as an ordinary map
		if len(value) == 1 and type(value.get("bytes")) is str:
			return decode_bytes(value["bytes"])
		logger.debug("rejecting bytes wrapper with keys %r", list(value))
		raise InvalidBytesError('bytes wrapper must be exactly {"bytes": <string>}')
	logger.debug("rejecting reserved wrapper holding %s", type(value).__name__)
	raise InvalidLinkError(f'"/" must map to a CID string or a bytes object, not {type(value).__name__}')


def object_pairs(pairs: List[Tuple[str, IPLDKind]]) -> IPLDKind:
	result = {}
	for k, v in pairs:
		if k in result:
			raise DuplicateKeyError(k)
		result[k] = v
	if len(result) == 1 and "/" in result:
		return decode_reserved(result["/"])
	return result


_decoder = json.JSONDecoder(
	object_pairs_hook=object_pairs,
	parse_int=parse_int,
	parse_float=parse_float,
	parse_constant=parse_constant,
	strict=True,
)


def decode_from_bytes(data: bytes) -> IPLDKind:
	data = bytes(data)
	try:
		text = data.decode("utf-8")
	except UnicodeDecodeError as e:
		# position is a byte offset here, there is no text yet
		lineno = data.count(b"\n", 0, e.start) + 1
		colno = e.start - data.rfind(b"\n", 0, e.start)
		raise JSONSyntaxError(f"invalid UTF-8 ({e.reason})", e.start, lineno, colno) from e

	scan_structure(text)

	# surrounding whitespace is tolerated, re-encoding drops it
	idx = _WHITESPACE.match(text, 0).end()
	try:
		value, end = _decoder.raw_decode(text, idx)
	except json.JSONDecodeError as e:
		raise JSONSyntaxError(e.msg, e.pos, e.lineno, e.colno) from e

	end = _WHITESPACE.match(text, end).end()
	if end != len(text):
		lineno, colno = _lineno_colno(text, end)
		logger.debug("trailing data at line %d column %d", lineno, colno)
		raise TrailingDataError(end, lineno, colno)
	return value


def decode(reader) -> IPLDKind:
	return decode_from_bytes(reader.read())
