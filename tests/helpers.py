# coding: utf-8
import functools

from urllib.parse import parse_qs
from urllib.parse import urlencode

import httpretty as hp

from paypalnvp.util import endpoints_for


def mock_response(fields, sandbox=False, status=200):
  """Answer every POST to the NVP endpoint with `fields`, NVP-encoded."""
  def wrapper(fn):
    @functools.wraps(fn)
    @hp.activate
    def inner(*args, **kwargs):
      hp.reset()
      hp.register_uri(
          hp.POST, endpoints_for(sandbox).api, body=urlencode(fields),
          status=status)
      return fn(*args, **kwargs)
    return inner
  return wrapper


def last_request_params():
  """The form fields of the last request seen by httpretty, first values
  only."""
  body = hp.last_request().body
  if isinstance(body, bytes):
    body = body.decode('utf-8')
  return {k: v[0] for k, v in parse_qs(body, keep_blank_values=True).items()}
