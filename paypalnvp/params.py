# coding: utf-8
"""Builders for the parameters of each NVP operation.

Every builder returns a fresh, insertion-ordered dict that starts with the
`METHOD` discriminator. Credentials and the API version are added later by the
client, so nothing returned here is secret.
"""
from paypalnvp.error import ValidationError
from paypalnvp.model import PaymentAction
from paypalnvp.model import ReceiverType
from paypalnvp.model import RefundType
from paypalnvp.util import format_amount

_receiver_type_to_key = {
  ReceiverType.EMAIL_ADDRESS: 'L_EMAIL0',
  ReceiverType.USER_ID: 'L_RECEIVERID0',
  ReceiverType.PHONE_NUMBER: 'L_RECEIVERPHONE0',
}


def _payment_action(value):
  try:
    return PaymentAction(value)
  except ValueError:
    raise ValidationError(
        'Invalid payment action %r! Must be Sale, Authorization, or Order' % (
          value,))


def _receiver_type(value):
  try:
    return ReceiverType(value)
  except ValueError:
    raise ValidationError(
        'Invalid receiver type for mass pay! Must be UserId, EmailAddress, or '
        'PhoneNumber')


def _quantity(value):
  try:
    whole = not isinstance(value, bool) and int(value) == value
  except (TypeError, ValueError, OverflowError):
    whole = False
  if not whole:
    raise ValidationError(
        'Invalid quantity %r! Must be a whole number' % (value,))
  return '%d' % value


def set_express_checkout_billing_agreement(amount, currency_code, description,
                                           return_url, cancel_url):
  return {
    'METHOD': 'SetExpressCheckout',
    'PAYMENTREQUEST_0_AMT': format_amount(amount),
    'PAYMENTREQUEST_0_PAYMENTACTION': 'AUTHORIZATION',
    'PAYMENTREQUEST_0_CURRENCYCODE': currency_code,
    'RETURNURL': return_url,
    'CANCELURL': cancel_url,
    'NOSHIPPING': '1',
    'REQCONFIRMSHIPPING': '0',
    'L_BILLINGTYPE0': 'MerchantInitiatedBilling',
    'L_BILLINGAGREEMENTDESCRIPTION0': description,
  }


def set_express_checkout_digital_goods(amount, currency_code, return_url,
                                       cancel_url, goods):
  params = {
    'METHOD': 'SetExpressCheckout',
    'PAYMENTREQUEST_0_AMT': format_amount(amount),
    'PAYMENTREQUEST_0_PAYMENTACTION': 'Sale',
    'PAYMENTREQUEST_0_CURRENCYCODE': currency_code,
    'RETURNURL': return_url,
    'CANCELURL': cancel_url,
    'REQCONFIRMSHIPPING': '0',
    'NOSHIPPING': '1',
    'SOLUTIONTYPE': 'Sole',
  }
  for i, good in enumerate(goods):
    params['L_PAYMENTREQUEST_0_NAME%d' % i] = good.name
    params['L_PAYMENTREQUEST_0_AMT%d' % i] = format_amount(good.amount)
    params['L_PAYMENTREQUEST_0_QTY%d' % i] = _quantity(good.quantity)
    params['L_PAYMENTREQUEST_0_ITEMCATEGORY%d' % i] = 'Digital'
  return params


def create_billing_agreement(token):
  return {'METHOD': 'CreateBillingAgreement', 'TOKEN': token}


def get_express_checkout_details(token):
  return {'METHOD': 'GetExpressCheckoutDetails', 'TOKEN': token}


def do_express_checkout_payment(token, payer_id, payment_action, currency_code,
                                amount):
  return {
    'METHOD': 'DoExpressCheckoutPayment',
    'TOKEN': token,
    'PAYERID': payer_id,
    'PAYMENTREQUEST_0_PAYMENTACTION': _payment_action(payment_action).value,
    'PAYMENTREQUEST_0_CURRENCYCODE': currency_code,
    'PAYMENTREQUEST_0_AMT': format_amount(amount),
  }


def do_reference_transaction(billing_agreement_id, payment_action, amount):
  """`billing_agreement_id` must already be URL-decoded."""
  return {
    'METHOD': 'DoReferenceTransaction',
    'REFERENCEID': billing_agreement_id,
    'PAYMENTACTION': _payment_action(payment_action).value,
    'AMT': format_amount(amount),
  }


def refund_transaction(transaction_id, partial, amount=0, shipping_amount=0,
                       tax_amount=0, invoice_id='', msg_sub_id='',
                       currency_code=''):
  # Point-of-sale refunds are not supported.
  params = {
    'METHOD': 'RefundTransaction',
    'TRANSACTIONID': transaction_id,
    'INVOICEID': invoice_id,
    'SHIPPINGAMT': format_amount(shipping_amount),
    'TAXAMT': format_amount(tax_amount),
    'MSGSUBID': msg_sub_id,
    'REFUNDTYPE': RefundType.for_refund(partial).value,
  }
  if currency_code:
    params['CURRENCYCODE'] = currency_code
  if partial:
    params['AMT'] = format_amount(amount)
  return params


def mass_pay(amount, email_subject, currency_code, tracking_id, note,
             receiver_type, identifier):
  """Only one payout per request is supported."""
  receiver_type = _receiver_type(receiver_type)
  params = {
    'METHOD': 'MassPay',
    'EMAILSUBJECT': email_subject,
    'CURRENCYCODE': currency_code,
    'L_AMT0': format_amount(amount),
    'L_UNIQUEID0': tracking_id,
    'L_NOTE0': note,
  }
  params[_receiver_type_to_key[receiver_type]] = identifier
  params['RECEIVERTYPE'] = receiver_type.value
  return params
