"""
Exception types raised by the DAG-JSON codec.
"""

from typing import Optional


class DAGJSONError(ValueError):
	"""Base class for all DAG-JSON codec errors."""
	pass


class DAGJSONEncodingError(DAGJSONError):
	"""Raised when a value can't be represented as DAG-JSON."""
	pass


class DAGJSONDecodingError(DAGJSONError):
	"""Raised when input is not valid DAG-JSON."""
	pass


class UnsupportedValueError(DAGJSONEncodingError):
	pass


class UnsupportedTypeError(DAGJSONEncodingError, TypeError):
	pass


class JSONSyntaxError(DAGJSONDecodingError):
	def __init__(self, msg: str, pos: Optional[int] = None, lineno: Optional[int] = None, colno: Optional[int] = None) -> None:
		self.msg = msg
		self.pos = pos
		self.lineno = lineno
		self.colno = colno
		if pos is not None:
			msg = f"{msg}: line {lineno} column {colno} (char {pos})"
		super().__init__(msg)


class DuplicateKeyError(DAGJSONDecodingError):
	def __init__(self, key: str) -> None:
		self.key = key
		super().__init__(f"duplicate map key {key!r}")


class TrailingDataError(DAGJSONDecodingError):
	def __init__(self, pos: int, lineno: int, colno: int) -> None:
		self.pos = pos
		self.lineno = lineno
		self.colno = colno
		super().__init__(f"trailing data after top-level value: line {lineno} column {colno} (char {pos})")


class InvalidLinkError(DAGJSONDecodingError):
	pass


class InvalidBytesError(DAGJSONDecodingError):
	pass


# these two can come from either direction

class NumberOutOfRangeError(DAGJSONError):
	pass


class DepthExceededError(DAGJSONError):
	def __init__(self, max_depth: int, pos: Optional[int] = None) -> None:
		self.max_depth = max_depth
		self.pos = pos
		msg = f"nesting deeper than {max_depth} levels"
		if pos is not None:
			msg += f" (char {pos})"
		super().__init__(msg)
