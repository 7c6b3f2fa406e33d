# coding: utf-8
from urllib.parse import urlencode

from requests.auth import AuthBase


class SignatureAuth(AuthBase):
  """Signs NVP requests with the API username, password and signature.

  The NVP API expects its credentials as ordinary form fields, so they are
  appended to the already-encoded body rather than sent as headers.
  """
  def __init__(self, username, password, signature):
    self.username = username
    self.password = password
    self.signature = signature

  def __call__(self, request):
    credentials = urlencode([
      ('USER', self.username),
      ('PWD', self.password),
      ('SIGNATURE', self.signature),
    ])
    body = request.body or ''
    if isinstance(body, bytes):
      credentials = credentials.encode('utf-8')
      separator = b'&' if body else b''
    else:
      separator = '&' if body else ''
    request.body = body + separator + credentials
    request.prepare_content_length(request.body)
    return request
