"""
Testes para salesforce_connector/services/exceptions.py
"""

from salesforce_connector.services.exceptions import (
    ApiError,
    CredentialStorageError,
    InvalidStateError,
    NoCredentialError,
    NotConnectedError,
    RefreshRejectedError,
    SalesforceError,
    SalesforceRequestError,
    TokenExchangeError
)


class TestSalesforceError:

    def test_basic_error(self):
        error = SalesforceError("Test error")
        assert str(error) == "Test error"
        assert error.message == "Test error"


class TestNotConnectedError:

    def test_inherits_from_no_credential(self):
        error = NotConnectedError()
        assert isinstance(error, NoCredentialError)
        assert isinstance(error, SalesforceError)
        assert str(error) == "Not connected to Salesforce"

    def test_no_credential_default_message(self):
        assert str(NoCredentialError()) == "No tokens found in database"


class TestRefreshRejectedError:

    def test_prefers_description(self):
        error = RefreshRejectedError(status_code=400, error='invalid_grant',
                                     error_description='expired access/refresh token')
        assert str(error) == "Token refresh failed: expired access/refresh token"
        assert error.status_code == 400

    def test_falls_back_to_error_code(self):
        error = RefreshRejectedError(error='invalid_grant')
        assert str(error) == "Token refresh failed: invalid_grant"

    def test_without_details(self):
        assert str(RefreshRejectedError()) == "Token refresh failed"


class TestTokenExchangeError:

    def test_message(self):
        error = TokenExchangeError(error='invalid_client_id')
        assert str(error) == "Token exchange failed: invalid_client_id"


class TestApiError:

    def test_attributes(self):
        body = [{'errorCode': 'NOT_FOUND'}]
        error = ApiError(404, body, endpoint='/services/data/v59.0/sobjects/Foo/describe')
        assert error.status_code == 404
        assert error.body == body
        assert error.endpoint == '/services/data/v59.0/sobjects/Foo/describe'
        assert str(error) == 'Salesforce API error (404): [{"errorCode": "NOT_FOUND"}]'


class TestOtherErrors:

    def test_invalid_state(self):
        error = InvalidStateError(state='abc')
        assert error.state == 'abc'
        assert str(error) == "Invalid or expired state parameter"

    def test_request_error_includes_endpoint(self):
        error = SalesforceRequestError("read timed out", endpoint='/services/data/v59.0/limits')
        assert str(error) == "read timed out [/services/data/v59.0/limits]"

    def test_storage_error_includes_operation(self):
        error = CredentialStorageError("database is locked", operation='replace')
        assert str(error) == "replace: database is locked"
