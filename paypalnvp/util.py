# coding: utf-8
import collections
import logging
import math
import re

from urllib.parse import unquote_plus

from paypalnvp.error import ValidationError


logger = logging.getLogger(__name__)

Endpoints = collections.namedtuple('Endpoints', ['api', 'checkout'])

LIVE = 'live'
SANDBOX = 'sandbox'

ENDPOINTS = {
    LIVE: Endpoints(
        api='https://api-3t.paypal.com/nvp',
        checkout='https://www.paypal.com/cgi-bin/webscr'),
    SANDBOX: Endpoints(
        api='https://api-3t.sandbox.paypal.com/nvp',
        checkout='https://www.sandbox.paypal.com/cgi-bin/webscr'),
  }

_bad_escape = re.compile(r'%(?![0-9A-Fa-f]{2})')
_decimal = re.compile(r'\A[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?\Z')
_integer = re.compile(r'\A[+-]?[0-9]+\Z')


def endpoints_for(sandbox):
  """Look up the endpoint pair for the live or sandbox environment."""
  return ENDPOINTS[SANDBOX if sandbox else LIVE]


def format_amount(amount):
  """Amounts always go over the wire with exactly two decimal places."""
  if not math.isfinite(amount):
    raise ValidationError(
        'Invalid amount %r! Must be a finite number' % (amount,))
  return '%.2f' % amount


def parse_float(value, field=None):
  """Parse a decimal string from an NVP response.

  Missing or malformed values become 0.0 instead of raising, so that a single
  odd field does not prevent the rest of the response from being read.
  Surrounding whitespace and digit separators count as malformed.
  """
  if isinstance(value, str) and _decimal.match(value):
    return float(value)
  if value:
    logger.debug('Ignoring malformed decimal in %s: %r', field, value)
  return 0.0


def parse_int(value, field=None):
  if isinstance(value, str) and _integer.match(value):
    return int(value)
  if value:
    logger.debug('Ignoring malformed integer in %s: %r', field, value)
  return 0


def _unescape(component):
  if _bad_escape.search(component):
    raise ValueError('invalid percent escape in %r' % component)
  return unquote_plus(component, errors='strict')


def parse_nvp(body):
  """Parse a URL-encoded NVP body into a dict of lists.

  Keys are case-sensitive and repeated keys keep every value in the order
  they appeared. Raises ValueError on malformed escapes, `;` separators or
  bytes that are not valid UTF-8.
  """
  if isinstance(body, bytes):
    body = body.decode('utf-8')
  values = {}
  for pair in body.split('&'):
    if not pair:
      continue
    if ';' in pair:
      raise ValueError('invalid semicolon separator in %r' % pair)
    key, _, value = pair.partition('=')
    values.setdefault(_unescape(key), []).append(_unescape(value))
  return values


def first_value(values, key, default=''):
  """Return the first value recorded for `key`, or `default`."""
  found = values.get(key)
  if not found:
    return default
  return found[0]
