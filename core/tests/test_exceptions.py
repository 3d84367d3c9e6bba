"""
Core — Exception handler tests

@file core/tests/test_exceptions.py
"""

from django.core.exceptions import ValidationError
from django.http import Http404
from rest_framework import exceptions

from core.exceptions import (
    InsufficientStockError,
    TransactionFailure,
    standard_exception_handler,
)


class TestStandardExceptionHandler:
    def test_insufficient_stock_envelope(self):
        resp = standard_exception_handler(InsufficientStockError(available=70, requested=200), {})
        assert resp.status_code == 409
        assert resp.data['success'] is False
        assert resp.data['code'] == 'INSUFFICIENT_STOCK'
        assert resp.data['errors']['available'] == 70
        assert resp.data['errors']['requested'] == 200

    def test_transaction_failure_is_retryable_503(self):
        resp = standard_exception_handler(TransactionFailure(), {})
        assert resp.status_code == 503
        assert resp.data['code'] == 'TRANSACTION_FAILURE'

    def test_serializer_validation_error_maps_to_invalid_input(self):
        exc = exceptions.ValidationError({'quantity': ['A valid integer is required.']})
        resp = standard_exception_handler(exc, {})
        assert resp.status_code == 400
        assert resp.data['code'] == 'INVALID_INPUT'
        assert 'quantity' in resp.data['errors']

    def test_field_named_code_is_kept(self):
        exc = exceptions.ValidationError({'code': ['Ensure this field has no more than 50 characters.']})
        resp = standard_exception_handler(exc, {})
        assert resp.data['code'] == 'INVALID_INPUT'
        assert 'code' in resp.data['errors']

    def test_django_validation_error(self):
        resp = standard_exception_handler(ValidationError({'price': ['Bad.']}), {})
        assert resp.status_code == 400
        assert resp.data['errors'] == {'price': ['Bad.']}

    def test_http404(self):
        resp = standard_exception_handler(Http404(), {})
        assert resp.status_code == 404
        assert resp.data['code'] == 'RESOURCE_NOT_FOUND'

    def test_unhandled_exception_500(self):
        resp = standard_exception_handler(RuntimeError('boom'), {})
        assert resp.status_code == 500
        assert resp.data['code'] == 'INTERNAL_ERROR'
