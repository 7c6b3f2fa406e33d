# coding: utf-8
import logging

import requests

from paypalnvp import __version__
from paypalnvp import params as nvp_params
from paypalnvp.auth import SignatureAuth
from paypalnvp.error import DecodeError
from paypalnvp.error import ResponseReadError
from paypalnvp.error import TransportError
from paypalnvp.error import build_api_error
from paypalnvp.model import BillingAgreementResponse
from paypalnvp.model import ExpressCheckoutDetails
from paypalnvp.model import ExpressPaymentResponse
from paypalnvp.model import NVPResponse
from paypalnvp.model import ReferenceTransactionResponse
from paypalnvp.model import RefundTransactionResponse
from paypalnvp.model import SetExpressCheckoutResponse
from paypalnvp.util import endpoints_for
from paypalnvp.util import parse_nvp

logger = logging.getLogger(__name__)


class Client(object):
    """API Client for the PayPal NVP API.

    Entry point for making requests to the NVP API. Provides one method per
    supported operation; each builds the operation's parameters, posts them,
    and decodes the flat response into a result object.

    Any errors will be raised as exceptions. These exceptions will always be
    subclasses of `paypalnvp.error.PayPalError`. A failure reported by PayPal
    itself is an `APIError`, with the decoded response attached as
    `error.response`.

    Full API docs, including descriptions of each operation and its
    parameters, are available here:
    https://developer.paypal.com/api/nvp-soap/
    """

    API_VERSION = '86'
    USER_AGENT = 'paypalnvp/python/%s' % __version__

    def __init__(self, username, password, signature, sandbox=False, session=None):
        if not username:
            raise ValueError('Missing `username`.')
        if not password:
            raise ValueError('Missing `password`.')
        if not signature:
            raise ValueError('Missing `signature`.')

        self.sandbox = bool(sandbox)
        self.endpoints = endpoints_for(self.sandbox)

        # Credentials belong to the client and are attached per request, so a
        # session passed in by the caller can be shared with other clients.
        self.auth = SignatureAuth(username, password, signature)
        self.session = session if session is not None else self._build_session(
            self.auth)

    def _build_session(self, auth):
        """Internal helper for creating a requests `session` with the correct
        authentication handling.
        """
        session = requests.session()
        session.auth = auth
        session.headers.update({'User-Agent': self.USER_AGENT})
        return session

    def _request(self, params):
        """Internal helper for posting an operation to the NVP API.

        Raises an APIError if PayPal reports a failure. Otherwise, returns the
        decoded response envelope. Not intended for direct use by API
        consumers.
        """
        data = dict(params)
        data['VERSION'] = self.API_VERSION
        logger.debug('PayPal NVP %s to %s: %r',
                     data.get('METHOD'), self.endpoints.api, data)
        try:
            response = self.session.post(
                self.endpoints.api, data=data, auth=self.auth,
                headers={'User-Agent': self.USER_AGENT}, stream=True)
        except requests.RequestException as e:
            raise TransportError('Unable to reach %s: %s' % (self.endpoints.api, e), e)
        try:
            body = response.content
        except requests.RequestException as e:
            raise ResponseReadError('Unable to read response body: %s' % e, e)
        finally:
            response.close()
        return self._handle_response(response, body)

    def _handle_response(self, response, body):
        """Internal helper for decoding an NVP response body.

        Raises the appropriate exceptions when necessary; otherwise, returns the
        envelope.
        """
        try:
            values = parse_nvp(body)
        except ValueError as e:
            raise DecodeError(
                'Unable to decode NVP response: %s' % e,
                NVPResponse(used_sandbox=self.sandbox, response=response))
        envelope = NVPResponse.from_values(values, self.sandbox, response)
        logger.debug('PayPal NVP response: %s', envelope)
        if envelope.failed:
            error = build_api_error(envelope)
            logger.error('PayPal NVP API error (correlation id %s): %s',
                         envelope.correlation_id, error)
            raise error
        return envelope

    # Express Checkout API
    # -----------------------------------------------------------
    def set_express_checkout_billing_agreement(self, amount, currency_code,
                                               description, return_url, cancel_url):
        """https://developer.paypal.com/api/nvp-soap/set-express-checkout-nvp/"""
        envelope = self._request(nvp_params.set_express_checkout_billing_agreement(
            amount, currency_code, description, return_url, cancel_url))
        return SetExpressCheckoutResponse.from_envelope(envelope)

    def set_express_checkout_digital_goods(self, amount, currency_code,
                                           return_url, cancel_url, goods):
        """https://developer.paypal.com/api/nvp-soap/set-express-checkout-nvp/"""
        envelope = self._request(nvp_params.set_express_checkout_digital_goods(
            amount, currency_code, return_url, cancel_url, goods))
        return SetExpressCheckoutResponse.from_envelope(envelope)

    def get_express_checkout_details(self, token):
        """https://developer.paypal.com/api/nvp-soap/get-express-checkout-details-nvp/"""
        envelope = self._request(nvp_params.get_express_checkout_details(token))
        return ExpressCheckoutDetails.from_envelope(envelope)

    def do_express_checkout_payment(self, token, payer_id, payment_action,
                                    currency_code, amount):
        """https://developer.paypal.com/api/nvp-soap/do-express-checkout-payment-nvp/

        `payment_action` is one of `Sale`, `Authorization` or `Order`.
        """
        envelope = self._request(nvp_params.do_express_checkout_payment(
            token, payer_id, payment_action, currency_code, amount))
        return ExpressPaymentResponse.from_envelope(envelope)

    # Billing Agreements API
    # -----------------------------------------------------------
    def create_billing_agreement(self, token):
        """https://developer.paypal.com/api/nvp-soap/create-billing-agreement-nvp/"""
        envelope = self._request(nvp_params.create_billing_agreement(token))
        return BillingAgreementResponse.from_envelope(envelope)

    def do_reference_transaction(self, billing_agreement_id, payment_action, amount):
        """https://developer.paypal.com/api/nvp-soap/do-reference-transaction-nvp/

        The billing agreement id must be URL-decoded before it is passed in.
        """
        envelope = self._request(nvp_params.do_reference_transaction(
            billing_agreement_id, payment_action, amount))
        return ReferenceTransactionResponse.from_envelope(envelope)

    # Refunds API
    # -----------------------------------------------------------
    def refund_transaction(self, transaction_id, partial=False, amount=0,
                           shipping_amount=0, tax_amount=0, invoice_id='',
                           msg_sub_id='', currency_code=''):
        """https://developer.paypal.com/api/nvp-soap/refund-transaction-nvp/"""
        envelope = self._request(nvp_params.refund_transaction(
            transaction_id, partial, amount=amount,
            shipping_amount=shipping_amount, tax_amount=tax_amount,
            invoice_id=invoice_id, msg_sub_id=msg_sub_id,
            currency_code=currency_code))
        return RefundTransactionResponse.from_envelope(envelope)

    # Mass Pay API
    # -----------------------------------------------------------
    def mass_pay(self, amount, email_subject, currency_code, tracking_id, note,
                 receiver_type, identifier):
        """https://developer.paypal.com/api/nvp-soap/mass-pay-nvp/

        MassPay only returns the common response fields.
        """
        return self._request(nvp_params.mass_pay(
            amount, email_subject, currency_code, tracking_id, note,
            receiver_type, identifier))
