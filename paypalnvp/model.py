# coding: utf-8
import enum
import json

from urllib.parse import urlencode

from paypalnvp.util import endpoints_for
from paypalnvp.util import first_value
from paypalnvp.util import parse_float
from paypalnvp.util import parse_int

SHIPPING_ADDRESS_SLOTS = 10


class PaymentAction(str, enum.Enum):
  SALE = 'Sale'
  AUTHORIZATION = 'Authorization'
  ORDER = 'Order'


class ReceiverType(str, enum.Enum):
  EMAIL_ADDRESS = 'EmailAddress'
  USER_ID = 'UserId'
  PHONE_NUMBER = 'PhoneNumber'


class RefundType(str, enum.Enum):
  FULL = 'Full'
  PARTIAL = 'Partial'

  @classmethod
  def for_refund(cls, partial):
    return cls.PARTIAL if partial else cls.FULL


class PaymentStatus(str, enum.Enum):
  NONE = 'None'
  CANCELED_REVERSAL = 'Canceled-Reversal'
  COMPLETED = 'Completed'
  DENIED = 'Denied'
  EXPIRED = 'Expired'
  FAILED = 'Failed'
  IN_PROGRESS = 'In-Progress'
  PARTIALLY_REFUNDED = 'Partially-Refunded'
  PENDING = 'Pending'
  REFUNDED = 'Refunded'
  REVERSED = 'Reversed'
  PROCESSED = 'Processed'
  VOIDED = 'Voided'

  @classmethod
  def from_wire(cls, value):
    """Map a PAYMENTSTATUS value to a member, or None if unrecognized."""
    try:
      return cls(value)
    except ValueError:
      return None


class APIObject(dict):
  """Generic class used to represent a decoded response from the PayPal NVP
  API.

  If you're a consumer of the API, you shouldn't be using this class directly.
  This exists to allow dot-notation access to the decoded fields while keeping
  every object JSON-serializable.
  """

  # The following three method definitions allow dot-notation access to member
  # objects for convenience.
  def __getattr__(self, *args, **kwargs):
    try:
      return dict.__getitem__(self, *args, **kwargs)
    except KeyError as key_error:
      raise AttributeError(*key_error.args)

  def __delattr__(self, *args, **kwargs):
    try:
      return dict.__delitem__(self, *args, **kwargs)
    except KeyError as key_error:
      raise AttributeError(*key_error.args)

  def __setattr__(self, key, value):
    # All attributes that start with '_' will not be accessible via item-getter
    # syntax, which means that they won't be included in conversion to a
    # vanilla dict.
    if key.startswith('_') or key in self.__dict__:
      return dict.__setattr__(self, key, value)
    return dict.__setitem__(self, key, value)

  def __dir__(self): # pragma: no cover
    return list(self.keys())

  def __str__(self):
    try:
      return json.dumps(self, sort_keys=True, indent=2)
    except TypeError:
      return '(invalid JSON)'

  def __name__(self):
    return '<{} @ {}>'.format(type(self).__name__, hex(id(self))) # pragma: no cover

  def __repr__(self):
    return '{} {}'.format(self.__name__(), str(self)) # pragma: no cover


class NVPResponse(APIObject):
  """Fields common to every NVP response, plus the raw decoded values."""
  __raw = None
  __used_sandbox = False
  __response = None

  def __init__(self, raw=None, used_sandbox=False, response=None):
    self.__raw = raw if raw is not None else {}
    self.__used_sandbox = used_sandbox
    self.__response = response
    self.ack = ''
    self.correlation_id = ''
    self.timestamp = ''
    self.version = ''
    self.build = ''

  @classmethod
  def from_values(cls, raw, used_sandbox=False, response=None):
    envelope = cls(raw, used_sandbox, response)
    envelope.ack = first_value(raw, 'ACK')
    envelope.correlation_id = first_value(raw, 'CORRELATIONID')
    envelope.timestamp = first_value(raw, 'TIMESTAMP')
    envelope.version = first_value(raw, 'VERSION')
    envelope.build = first_value(raw, 'BUILD')
    return envelope

  @property
  def raw(self):
    return self.__raw

  @property
  def used_sandbox(self):
    return self.__used_sandbox

  @property
  def response(self):
    return self.__response

  @property
  def success(self):
    return self.ack.lower() in ('success', 'successwithwarning')

  @property
  def failed(self):
    """Whether PayPal reported the call as failed: an error code is present
    or the ACK is Failure / FailureWithWarning."""
    return bool(self.get_value('L_ERRORCODE0')) or self.ack.lower() in (
        'failure', 'failurewithwarning')

  def get_value(self, key, default=''):
    return first_value(self.__raw, key, default)

  def get_values(self, key):
    return list(self.__raw.get(key, []))

  def get_checkout_url(self):
    """URL to send the buyer to for an express checkout token."""
    tokens = self.__raw.get('TOKEN')
    if not tokens:
      raise ValueError("Unable to build checkout URL: missing 'TOKEN' value.")
    query = urlencode([('cmd', '_express-checkout'), ('token', tokens[0])])
    return '%s?%s' % (endpoints_for(self.__used_sandbox).checkout, query)


def _envelope_field(name):
  return property(lambda self: getattr(self.envelope, name))


class Result(APIObject):
  """Base for operation results. The envelope is kept under `envelope` and its
  fields are forwarded."""
  def __init__(self, envelope):
    self.envelope = envelope

  ack = _envelope_field('ack')
  correlation_id = _envelope_field('correlation_id')
  timestamp = _envelope_field('timestamp')
  version = _envelope_field('version')
  build = _envelope_field('build')
  raw = _envelope_field('raw')
  used_sandbox = _envelope_field('used_sandbox')

  def get_value(self, key, default=''):
    return self.envelope.get_value(key, default)

  def get_checkout_url(self):
    return self.envelope.get_checkout_url()


class DigitalGood(APIObject):
  def __init__(self, name, amount, quantity):
    self.name = name
    self.amount = amount
    self.quantity = quantity

  @property
  def total(self):
    return self.amount * self.quantity


def sum_digital_good_amounts(goods):
  return sum(good.total for good in goods)


class AddressInfo(APIObject):
  _fields = (
      ('name', 'SHIPTONAME'),
      ('street', 'SHIPTOSTREET'),
      ('street2', 'SHIPTOSTREET2'),
      ('city', 'SHIPTOCITY'),
      ('state', 'SHIPTOSTATE'),
      ('zip', 'SHIPTOZIP'),
      ('country_code', 'SHIPTOCOUNTRYCODE'),
      ('country', 'SHIPTOCOUNTRYNAME'),
      ('phone_number', 'SHIPTOPHONENUM'),
      ('status', 'ADDRESSSTATUS'),
      ('normalization_status', 'ADDRESSNORMALIZATIONSTATUS'),
    )

  @classmethod
  def from_values(cls, raw, prefix):
    address = cls()
    for attr, key in cls._fields:
      address[attr] = first_value(raw, prefix + key)
    return address

  def is_empty(self):
    return not any(self.values())


class PaymentInfo(APIObject):
  """Details of a single payment, as reported by DoReferenceTransaction,
  DoExpressCheckoutPayment (`PAYMENTINFO_n_` fields) and
  GetExpressCheckoutDetails (`PAYMENTREQUEST_n_` fields).
  """

  @classmethod
  def from_values(cls, raw, prefix=''):
    get = lambda key: first_value(raw, prefix + key)
    info = cls()
    info.transaction_id = get('TRANSACTIONID')
    info.parent_transaction_id = get('PARENTTRANSACTIONID')
    info.receipt_id = get('RECEIPTID')
    info.transaction_type = get('TRANSACTIONTYPE')
    info.payment_type = get('PAYMENTTYPE')
    info.order_time = get('ORDERTIME')
    info.amount = parse_float(get('AMT'), prefix + 'AMT')
    info.currency_code = get('CURRENCYCODE')
    info.fee_amount = parse_float(get('FEEAMT'), prefix + 'FEEAMT')
    info.settle_amount = parse_float(get('SETTLEAMT'), prefix + 'SETTLEAMT')
    info.tax_amount = parse_float(get('TAXAMT'), prefix + 'TAXAMT')
    info.exchange_rate = parse_float(get('EXCHANGERATE'), prefix + 'EXCHANGERATE')
    info.payment_status = get('PAYMENTSTATUS')
    info.pending_reason = get('PENDINGREASON')
    info.reason_code = get('REASONCODE')
    info.protection_eligibility = get('PROTECTIONELIGIBILITY')
    info.protection_eligibility_type = get('PROTECTIONELIGIBILITYTYPE').split(',')
    info.store_id = get('STOREID')
    info.terminal_id = get('TERMINALID')
    info.instrument_category = parse_int(
        get('INSTRUMENTCATEGORY'), prefix + 'INSTRUMENTCATEGORY')
    info.instrument_id = get('INSTRUMENTID')
    return info

  @property
  def status(self):
    return PaymentStatus.from_wire(self.payment_status)


def _indexed_slots(raw, template, marker):
  """Indexes n for which `template % n + marker` is present in `raw`."""
  n = 0
  while (template % n) + marker in raw:
    yield n
    n += 1


class SetExpressCheckoutResponse(Result):
  @classmethod
  def from_envelope(cls, envelope):
    result = cls(envelope)
    result.token = envelope.get_value('TOKEN')
    return result


class BillingAgreementResponse(Result):
  @classmethod
  def from_envelope(cls, envelope):
    result = cls(envelope)
    result.billing_agreement_id = envelope.get_value('BILLINGAGREEMENTID')
    return result


class ExpressCheckoutDetails(Result):
  @classmethod
  def from_envelope(cls, envelope):
    get = envelope.get_value
    raw = envelope.raw
    result = cls(envelope)
    result.token = get('TOKEN')
    result.phone_number = get('PHONENUM')
    result.billing_agreement_accepted = get('BILLINGAGREEMENTACCEPTEDSTATUS') == '1'
    result.checkout_status = get('CHECKOUTSTATUS')
    result.payer_id = get('PAYERID')
    result.email = get('EMAIL')
    result.payer_status_verified = get('PAYERSTATUS') == 'verified'
    result.first_name = get('FIRSTNAME')
    result.last_name = get('LASTNAME')
    result.country_code = get('COUNTRYCODE')
    # One entry per slot, blank or not; callers filter with is_empty().
    result.shipping_addresses = [
        AddressInfo.from_values(raw, 'PAYMENTREQUEST_%d_' % n)
        for n in range(SHIPPING_ADDRESS_SLOTS)]
    result.payments_info = [
        PaymentInfo.from_values(raw, 'PAYMENTREQUEST_%d_' % n)
        for n in _indexed_slots(raw, 'PAYMENTREQUEST_%d_', 'AMT')]
    return result


class ExpressPaymentResponse(Result):
  @classmethod
  def from_envelope(cls, envelope):
    get = envelope.get_value
    raw = envelope.raw
    result = cls(envelope)
    result.token = get('TOKEN')
    result.billing_agreement_id = get('BILLINGAGREEMENTID')
    result.redirect_required = get('REDIRECTREQUIRED') == 'true'
    result.note = get('NOTE')
    result.msg_sub_id = get('MSGSUBID')
    result.success_page_redirect_requested = (
        get('SUCCESSPAGEREDIRECTREQUESTED') == 'true')
    result.payments_info = [
        PaymentInfo.from_values(raw, 'PAYMENTINFO_%d_' % n)
        for n in _indexed_slots(raw, 'PAYMENTINFO_%d_', 'TRANSACTIONID')]
    return result


class ReferenceTransactionResponse(Result):
  @classmethod
  def from_envelope(cls, envelope):
    get = envelope.get_value
    result = cls(envelope)
    result.avs_code = get('AVSCODE')
    result.cvv2_match = get('CVV2MATCH')
    result.billing_agreement_id = get('BILLINGAGREEMENTID')
    result.payment_advice_code = get('PAYMENTADVICECODE')
    result.msg_sub_id = get('MSGSUBID')
    result.payment_info = PaymentInfo.from_values(envelope.raw)
    return result


class RefundTransactionResponse(Result):
  @classmethod
  def from_envelope(cls, envelope):
    get = envelope.get_value
    result = cls(envelope)
    result.refund_transaction_id = get('REFUNDTRANSACTIONID')
    result.refund_fee_amount = parse_float(get('FEEREFUNDAMT'), 'FEEREFUNDAMT')
    result.gross_refund_amount = parse_float(get('GROSSREFUNDAMT'), 'GROSSREFUNDAMT')
    result.net_refund_amount = parse_float(get('NETREFUNDAMT'), 'NETREFUNDAMT')
    result.total_refund_amount = parse_float(get('TOTALREFUNDAMT'), 'TOTALREFUNDAMT')
    result.currency_code = get('CURRENCYCODE')
    result.refund_status = get('REFUNDSTATUS')
    result.pending_reason = get('PENDINGREASON')
    result.msg_sub_id = get('MSGSUBID')
    return result
