"""Numeric domains: the real and complex instantiations of the engine.

A domain decides the array dtype used during evaluation, what counts as zero and
one for the simplifier, how literals are read and how values are written back
out as text.
"""

import re
import numpy as np
from typing import Optional, Union

from ...errors import DomainError, InvalidBinding

Scalar = Union[float, complex]

_NUMBER = r'(?:\d+\.?\d*|\.\d+)'
_REAL_RE = re.compile(rf'^[+-]?{_NUMBER}$')
_IMAGINARY_RE = re.compile(rf'^(?P<imag>[+-]?{_NUMBER}?)i$')
_COMPLEX_RE = re.compile(rf'^(?P<real>[+-]?{_NUMBER})(?P<imag>[+-]{_NUMBER}?)i$')


def _positional(value: float) -> str:
  # shortest round-trip digits, never exponent notation (the parser has no 'e')
  return np.format_float_positional(value, trim='0')


def parse_real(text: str) -> float:
  try:
    return float(text)
  except ValueError:
    raise InvalidBinding(f"Invalid real number: '{text}'") from None


def parse_complex(text: str) -> complex:
  """Parse `a`, `bi`, `a+bi` or `a-bi` (either part optional, `i` alone is 1j)"""
  stripped = ''.join(text.split())

  if _REAL_RE.match(stripped):
    return complex(float(stripped), 0.0)

  match = _IMAGINARY_RE.match(stripped)
  real_text = '0'
  if match is None:
    match = _COMPLEX_RE.match(stripped)
    if match is None:
      raise InvalidBinding(f"Invalid complex number: '{text}'")
    real_text = match.group('real')

  imag_text = match.group('imag')
  if imag_text in ('', '+'):
    imag = 1.0
  elif imag_text == '-':
    imag = -1.0
  else:
    imag = float(imag_text)
  return complex(float(real_text), imag)


def looks_complex(text: str) -> bool:
  """Heuristic: does `text` contain a standalone imaginary unit `i`?

  An `i` counts when it is not part of a longer word, is preceded by the start of
  the string, whitespace, a digit or one of `+-.=`, and is followed by the end of the
  string, whitespace or a digit.
  """
  last = len(text) - 1
  for pos, char in enumerate(text):
    if char != 'i':
      continue
    if (pos > 0 and text[pos - 1].isalpha()) or (pos < last and text[pos + 1].isalpha()):
      continue
    left_ok = pos == 0 or text[pos - 1].isspace() or text[pos - 1].isdigit() or text[pos - 1] in '+-.='
    right_ok = pos == last or text[pos + 1].isspace() or text[pos + 1].isdigit()
    if left_ok and right_ok:
      return True
  return False


class NumericDomain:
  """Base numeric domain"""

  name: str = ''
  dtype = np.float64
  imaginary_unit: Optional[complex] = None

  @property
  def zero(self) -> Scalar:
    return self.coerce(0)

  @property
  def one(self) -> Scalar:
    return self.coerce(1)

  def coerce(self, value) -> Scalar:
    raise NotImplementedError

  def contains(self, value) -> bool:
    raise NotImplementedError

  def is_zero(self, value) -> bool:
    return value == self.zero

  def is_one(self, value) -> bool:
    return value == self.one

  def as_array(self, value) -> np.ndarray:
    arr = np.atleast_1d(np.asarray(value))
    if arr.ndim != 1:
      raise ValueError(f"Binding values must be scalars or 1-D arrays, got shape {arr.shape}")
    return arr.astype(self.dtype)

  def to_scalar(self, arr: np.ndarray) -> Scalar:
    return self.coerce(arr[0])

  def parse_literal(self, text: str) -> Scalar:
    raise NotImplementedError

  def format_value(self, value) -> str:
    raise NotImplementedError

  def render_constant(self, value) -> str:
    raise NotImplementedError

  def check_ln_argument(self, arg: np.ndarray):
    pass

  def check_power_operands(self, base: np.ndarray, exponent: np.ndarray):
    pass

  def __repr__(self) -> str:
    return f"{type(self).__name__}()"


class RealDomain(NumericDomain):
  name = 'real'
  dtype = np.float64

  def coerce(self, value) -> float:
    if isinstance(value, (complex, np.complexfloating)):
      if value.imag != 0:
        raise DomainError(f"Complex value {value} in the real domain")
      value = value.real
    return float(value)

  def contains(self, value) -> bool:
    return isinstance(value, float)

  def as_array(self, value) -> np.ndarray:
    if np.iscomplexobj(value):
      raise DomainError(f"Complex value {value} bound in the real domain")
    return super().as_array(value)

  def parse_literal(self, text: str) -> float:
    return parse_real(text)

  def format_value(self, value) -> str:
    return repr(float(value))

  def render_constant(self, value) -> str:
    text = _positional(abs(value))
    return text if value >= 0 else f"(0 - {text})"

  def check_ln_argument(self, arg: np.ndarray):
    if np.any(arg <= 0):
      raise DomainError("Ln domain error: argument must be positive")

  def check_power_operands(self, base: np.ndarray, exponent: np.ndarray):
    base, exponent = np.broadcast_arrays(base, exponent)
    if np.any((base < 0) & (exponent != np.floor(exponent))):
      raise DomainError("Power domain error: negative base with a non-integer exponent")


class ComplexDomain(NumericDomain):
  name = 'complex'
  dtype = np.complex128
  imaginary_unit = 1j

  def coerce(self, value) -> complex:
    return complex(value)

  def contains(self, value) -> bool:
    return isinstance(value, (float, complex))

  def parse_literal(self, text: str) -> complex:
    return parse_complex(text)

  def format_value(self, value) -> str:
    value = complex(value)
    real, imag = value.real, value.imag
    if imag == 0:
      return repr(real)
    sign = '-' if imag < 0 else '+'
    return f"{real!r}{sign}{abs(imag)!r}i"

  def render_constant(self, value) -> str:
    value = complex(value)
    real, imag = value.real, value.imag
    if imag == 0:
      return REAL.render_constant(real)
    imag_text = _positional(abs(imag)) + 'i'
    if real == 0:
      return imag_text if imag > 0 else f"(0 - {imag_text})"
    op = '+' if imag > 0 else '-'
    return f"({REAL.render_constant(real)} {op} {imag_text})"


REAL = RealDomain()
COMPLEX = ComplexDomain()

DOMAINS = {REAL.name: REAL, COMPLEX.name: COMPLEX}


def get_domain(domain: Union[str, NumericDomain, None]) -> NumericDomain:
  if domain is None:
    return REAL
  if isinstance(domain, NumericDomain):
    return domain
  try:
    return DOMAINS[domain.lower()]
  except KeyError:
    raise ValueError(f"Unknown numeric domain: {domain}") from None


def detect_domain(*texts: str) -> NumericDomain:
  """Pick the complex domain if any of `texts` looks like it uses `i`"""
  return COMPLEX if any(looks_complex(text) for text in texts) else REAL
