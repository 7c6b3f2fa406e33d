# coding: utf-8


class PayPalError(Exception):
  """Base error class for all exceptions raised in this library.

  Will never be raised naked; more specific subclasses of this exception will
  be raised when appropriate."""


class ValidationError(PayPalError, ValueError):
  """Raised before any request is sent when arguments are invalid."""


class TransportError(PayPalError):
  """Raised when the request could not be delivered to the NVP endpoint."""
  def __init__(self, message, cause=None):
    super(TransportError, self).__init__(message)
    self.cause = cause


class ResponseReadError(TransportError, IOError):
  """Raised when the response body could not be read to completion."""


class DecodeError(PayPalError):
  """Raised when the response body is not a valid NVP document.

  `response` is the envelope for the call, with no fields populated.
  """
  def __init__(self, message, response=None):
    super(DecodeError, self).__init__(message)
    self.response = response


class APIError(PayPalError):
  """Raised when the PayPal API reports that the call failed."""
  def __init__(self, response, ack, error_code, short_message, long_message,
               severity_code):
    self.response = response
    self.ack = ack or ''
    self.error_code = error_code or ''
    self.short_message = short_message or ''
    self.long_message = long_message or ''
    self.severity_code = severity_code or ''
    super(APIError, self).__init__(str(self))

  @property
  def correlation_id(self):
    return getattr(self.response, 'correlation_id', '')

  def __str__(self):
    if self.error_code and self.short_message:
      return 'PayPal Error %s: %s' % (self.error_code, self.short_message)
    if self.ack:
      return self.ack
    return 'PayPal is undergoing maintenance.\nPlease try again later.'


class InternalServerError(APIError): pass
class AuthenticationError(APIError): pass
class InvalidTokenError(APIError): pass
class ExpiredTokenError(APIError): pass
class DuplicateTransactionError(APIError): pass
class BillingAgreementCanceledError(APIError): pass
class InvalidBillingAgreementError(APIError): pass


def build_api_error(response):
  """Helper method for creating errors from the first reported error of a
  failed call and attaching the response envelope to them.
  """
  error_code = response.get_value('L_ERRORCODE0')
  error_class = _error_code_to_class.get(error_code, APIError)
  return error_class(
      response,
      response.ack,
      error_code,
      response.get_value('L_SHORTMESSAGE0'),
      response.get_value('L_LONGMESSAGE0'),
      response.get_value('L_SEVERITYCODE0'))


_error_code_to_class = {
  '10001': InternalServerError,
  '10002': AuthenticationError,
  '10201': BillingAgreementCanceledError,
  '10410': InvalidTokenError,
  '10411': ExpiredTokenError,
  '10415': DuplicateTransactionError,
  '11451': InvalidBillingAgreementError,
}
