# coding: utf-8
import unittest

from paypalnvp.model import AddressInfo
from paypalnvp.model import BillingAgreementResponse
from paypalnvp.model import DigitalGood
from paypalnvp.model import ExpressCheckoutDetails
from paypalnvp.model import ExpressPaymentResponse
from paypalnvp.model import NVPResponse
from paypalnvp.model import PaymentInfo
from paypalnvp.model import PaymentStatus
from paypalnvp.model import ReferenceTransactionResponse
from paypalnvp.model import RefundTransactionResponse
from paypalnvp.model import SetExpressCheckoutResponse
from paypalnvp.model import sum_digital_good_amounts


def envelope_for(**fields):
  values = {'ACK': ['Success'], 'CORRELATIONID': ['cid']}
  for key, value in fields.items():
    values[key] = value if isinstance(value, list) else [value]
  return NVPResponse.from_values(values)


class TestDigitalGoods(unittest.TestCase):
  def test_sum(self):
    goods = [DigitalGood('a', 5, 3), DigitalGood('b', 2.5, 1)]
    self.assertEqual(sum_digital_good_amounts(goods), 17.5)
    self.assertEqual(sum_digital_good_amounts([]), 0)

  def test_fields(self):
    good = DigitalGood('Book', 9.99, 2)
    self.assertEqual(good, {'name': 'Book', 'amount': 9.99, 'quantity': 2})
    self.assertAlmostEqual(good.total, 19.98)


class TestSimpleResults(unittest.TestCase):
  def test_set_express_checkout(self):
    result = SetExpressCheckoutResponse.from_envelope(envelope_for(TOKEN='EC-9'))
    self.assertEqual(result.token, 'EC-9')
    self.assertEqual(result.correlation_id, 'cid')

  def test_billing_agreement(self):
    result = BillingAgreementResponse.from_envelope(
        envelope_for(BILLINGAGREEMENTID='B-42'))
    self.assertEqual(result.billing_agreement_id, 'B-42')

  def test_missing_fields_are_blank(self):
    result = BillingAgreementResponse.from_envelope(envelope_for())
    self.assertEqual(result.billing_agreement_id, '')


class TestExpressCheckoutDetails(unittest.TestCase):
  def test_payer_fields(self):
    details = ExpressCheckoutDetails.from_envelope(envelope_for(
        TOKEN='EC-1', PHONENUM='555-0100', CHECKOUTSTATUS='PaymentActionNotInitiated',
        PAYERID='P1', EMAIL='buyer@example.com', FIRSTNAME='Ada',
        LASTNAME='Lovelace', COUNTRYCODE='GB',
        BILLINGAGREEMENTACCEPTEDSTATUS='1', PAYERSTATUS='verified'))
    self.assertEqual(details.token, 'EC-1')
    self.assertEqual(details.phone_number, '555-0100')
    self.assertEqual(details.checkout_status, 'PaymentActionNotInitiated')
    self.assertEqual(details.payer_id, 'P1')
    self.assertEqual(details.email, 'buyer@example.com')
    self.assertEqual(details.first_name, 'Ada')
    self.assertEqual(details.last_name, 'Lovelace')
    self.assertEqual(details.country_code, 'GB')
    self.assertIs(details.billing_agreement_accepted, True)
    self.assertIs(details.payer_status_verified, True)

  def test_booleans_use_sentinels(self):
    details = ExpressCheckoutDetails.from_envelope(envelope_for(
        BILLINGAGREEMENTACCEPTEDSTATUS='true', PAYERSTATUS='Verified'))
    self.assertIs(details.billing_agreement_accepted, False)
    self.assertIs(details.payer_status_verified, False)
    details = ExpressCheckoutDetails.from_envelope(envelope_for(
        BILLINGAGREEMENTACCEPTEDSTATUS='0', PAYERSTATUS='unverified'))
    self.assertIs(details.billing_agreement_accepted, False)
    self.assertIs(details.payer_status_verified, False)

  def test_shipping_addresses(self):
    details = ExpressCheckoutDetails.from_envelope(envelope_for(
        PAYMENTREQUEST_0_SHIPTONAME='Ada Lovelace',
        PAYMENTREQUEST_0_SHIPTOSTREET='1 Main St',
        PAYMENTREQUEST_0_SHIPTOSTREET2='Flat 2',
        PAYMENTREQUEST_0_SHIPTOCITY='London',
        PAYMENTREQUEST_0_SHIPTOSTATE='LDN',
        PAYMENTREQUEST_0_SHIPTOZIP='N1 9GU',
        PAYMENTREQUEST_0_SHIPTOCOUNTRYCODE='GB',
        PAYMENTREQUEST_0_SHIPTOCOUNTRYNAME='United Kingdom',
        PAYMENTREQUEST_0_SHIPTOPHONENUM='555-0100',
        PAYMENTREQUEST_0_ADDRESSSTATUS='Confirmed',
        PAYMENTREQUEST_0_ADDRESSNORMALIZATIONSTATUS='None',
        PAYMENTREQUEST_3_SHIPTOCITY='Paris'))
    addresses = details.shipping_addresses
    self.assertEqual(len(addresses), 10)
    for address in addresses:
      self.assertIsInstance(address, AddressInfo)
    self.assertEqual(addresses[0], {
      'name': 'Ada Lovelace',
      'street': '1 Main St',
      'street2': 'Flat 2',
      'city': 'London',
      'state': 'LDN',
      'zip': 'N1 9GU',
      'country_code': 'GB',
      'country': 'United Kingdom',
      'phone_number': '555-0100',
      'status': 'Confirmed',
      'normalization_status': 'None',
    })
    self.assertEqual(addresses[3].city, 'Paris')
    non_empty = [a for a in addresses if not a.is_empty()]
    self.assertEqual(len(non_empty), 2)

  def test_shipping_addresses_always_ten(self):
    details = ExpressCheckoutDetails.from_envelope(envelope_for())
    self.assertEqual(len(details.shipping_addresses), 10)
    self.assertTrue(all(a.is_empty() for a in details.shipping_addresses))
    self.assertEqual(details.payments_info, [])

  def test_payments_info(self):
    details = ExpressCheckoutDetails.from_envelope(envelope_for(
        PAYMENTREQUEST_0_AMT='10.00', PAYMENTREQUEST_0_CURRENCYCODE='USD',
        PAYMENTREQUEST_1_AMT='2.50', PAYMENTREQUEST_1_CURRENCYCODE='EUR'))
    self.assertEqual(len(details.payments_info), 2)
    self.assertEqual(details.payments_info[0].amount, 10.0)
    self.assertEqual(details.payments_info[1].currency_code, 'EUR')


class TestPaymentInfo(unittest.TestCase):
  def test_fields(self):
    envelope = envelope_for(
        TRANSACTIONID='TX1', PARENTTRANSACTIONID='TX0', RECEIPTID='R1',
        TRANSACTIONTYPE='express-checkout', PAYMENTTYPE='instant',
        ORDERTIME='2014-01-01T00:00:00Z', AMT='12.34', CURRENCYCODE='USD',
        FEEAMT='0.66', SETTLEAMT='11.68', TAXAMT='1.00', EXCHANGERATE='1.1',
        PAYMENTSTATUS='Completed', PENDINGREASON='None', REASONCODE='None',
        PROTECTIONELIGIBILITY='Eligible',
        PROTECTIONELIGIBILITYTYPE='ItemNotReceivedEligible,UnauthorizedPaymentEligible',
        STOREID='S1', TERMINALID='T1', INSTRUMENTCATEGORY='1',
        INSTRUMENTID='I1')
    info = PaymentInfo.from_values(envelope.raw)
    self.assertEqual(info.transaction_id, 'TX1')
    self.assertEqual(info.parent_transaction_id, 'TX0')
    self.assertEqual(info.receipt_id, 'R1')
    self.assertEqual(info.transaction_type, 'express-checkout')
    self.assertEqual(info.payment_type, 'instant')
    self.assertEqual(info.order_time, '2014-01-01T00:00:00Z')
    self.assertEqual(info.amount, 12.34)
    self.assertEqual(info.currency_code, 'USD')
    self.assertEqual(info.fee_amount, 0.66)
    self.assertEqual(info.settle_amount, 11.68)
    self.assertEqual(info.tax_amount, 1.0)
    self.assertEqual(info.exchange_rate, 1.1)
    self.assertEqual(info.payment_status, 'Completed')
    self.assertIs(info.status, PaymentStatus.COMPLETED)
    self.assertEqual(info.pending_reason, 'None')
    self.assertEqual(info.reason_code, 'None')
    self.assertEqual(info.protection_eligibility, 'Eligible')
    self.assertEqual(info.protection_eligibility_type, [
      'ItemNotReceivedEligible', 'UnauthorizedPaymentEligible'])
    self.assertEqual(info.store_id, 'S1')
    self.assertEqual(info.terminal_id, 'T1')
    self.assertEqual(info.instrument_category, 1)
    self.assertEqual(info.instrument_id, 'I1')

  def test_malformed_numbers_become_zero(self):
    envelope = envelope_for(
        AMT='lots', FEEAMT='', EXCHANGERATE='1,5', INSTRUMENTCATEGORY='x')
    info = PaymentInfo.from_values(envelope.raw)
    self.assertEqual(info.amount, 0.0)
    self.assertEqual(info.fee_amount, 0.0)
    self.assertEqual(info.settle_amount, 0.0)
    self.assertEqual(info.exchange_rate, 0.0)
    self.assertEqual(info.instrument_category, 0)
    self.assertEqual(info.protection_eligibility_type, [''])
    self.assertIsNone(info.status)

  def test_payment_status_from_wire(self):
    self.assertIs(PaymentStatus.from_wire('Pending'), PaymentStatus.PENDING)
    self.assertIs(PaymentStatus.from_wire('None'), PaymentStatus.NONE)
    self.assertIsNone(PaymentStatus.from_wire('Lost-In-Mail'))
    self.assertEqual(PaymentStatus.REFUNDED, 'Refunded')


class TestTransactionResults(unittest.TestCase):
  def test_express_payment(self):
    result = ExpressPaymentResponse.from_envelope(envelope_for(
        TOKEN='EC-1', BILLINGAGREEMENTID='B-1', REDIRECTREQUIRED='true',
        NOTE='thanks', MSGSUBID='m1', SUCCESSPAGEREDIRECTREQUESTED='false',
        PAYMENTINFO_0_TRANSACTIONID='TX1', PAYMENTINFO_0_AMT='5.00',
        PAYMENTINFO_0_PAYMENTSTATUS='Pending',
        PAYMENTINFO_0_PENDINGREASON='echeck',
        PAYMENTINFO_1_TRANSACTIONID='TX2', PAYMENTINFO_1_AMT='1.50'))
    self.assertEqual(result.token, 'EC-1')
    self.assertEqual(result.billing_agreement_id, 'B-1')
    self.assertIs(result.redirect_required, True)
    self.assertIs(result.success_page_redirect_requested, False)
    self.assertEqual(result.note, 'thanks')
    self.assertEqual(result.msg_sub_id, 'm1')
    self.assertEqual(len(result.payments_info), 2)
    self.assertEqual(result.payments_info[0].transaction_id, 'TX1')
    self.assertEqual(result.payments_info[0].amount, 5.0)
    self.assertIs(result.payments_info[0].status, PaymentStatus.PENDING)
    self.assertEqual(result.payments_info[0].pending_reason, 'echeck')
    self.assertEqual(result.payments_info[1].amount, 1.5)

  def test_reference_transaction(self):
    result = ReferenceTransactionResponse.from_envelope(envelope_for(
        AVSCODE='X', CVV2MATCH='M', BILLINGAGREEMENTID='B-1',
        PAYMENTADVICECODE='03', MSGSUBID='m2', TRANSACTIONID='TX9',
        AMT='19.99', PAYMENTSTATUS='Completed'))
    self.assertEqual(result.avs_code, 'X')
    self.assertEqual(result.cvv2_match, 'M')
    self.assertEqual(result.billing_agreement_id, 'B-1')
    self.assertEqual(result.payment_advice_code, '03')
    self.assertEqual(result.msg_sub_id, 'm2')
    self.assertIsInstance(result.payment_info, PaymentInfo)
    self.assertEqual(result.payment_info.transaction_id, 'TX9')
    self.assertEqual(result.payment_info.amount, 19.99)

  def test_refund(self):
    result = RefundTransactionResponse.from_envelope(envelope_for(
        REFUNDTRANSACTIONID='RTX1', FEEREFUNDAMT='0.30', GROSSREFUNDAMT='10.00',
        NETREFUNDAMT='9.70', TOTALREFUNDAMT='10.00', CURRENCYCODE='USD',
        REFUNDSTATUS='instant', PENDINGREASON='none', MSGSUBID='m3'))
    self.assertEqual(result.refund_transaction_id, 'RTX1')
    self.assertEqual(result.refund_fee_amount, 0.3)
    self.assertEqual(result.gross_refund_amount, 10.0)
    self.assertEqual(result.net_refund_amount, 9.7)
    self.assertEqual(result.total_refund_amount, 10.0)
    self.assertEqual(result.currency_code, 'USD')
    self.assertEqual(result.refund_status, 'instant')
    self.assertEqual(result.pending_reason, 'none')
    self.assertEqual(result.msg_sub_id, 'm3')

  def test_refund_with_bad_amounts(self):
    result = RefundTransactionResponse.from_envelope(envelope_for(
        FEEREFUNDAMT='n/a'))
    self.assertEqual(result.refund_fee_amount, 0.0)
    self.assertEqual(result.gross_refund_amount, 0.0)
