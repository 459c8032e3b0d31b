"""
Helper functions para as rotas
"""
from flask import current_app, request

from salesforce_connector.services.oauth_flow import OAuthFlow
from salesforce_connector.services.salesforce_api import SalesforceClient
from salesforce_connector.services.salesforce_auth import SalesforceAuth


def get_base_url():
    """URL base da requisição atual, respeitando proxies (X-Forwarded-*)"""
    protocol = request.headers.get('X-Forwarded-Proto') or request.scheme
    host = request.headers.get('X-Forwarded-Host') or request.host
    return f'{protocol}://{host}'


def get_redirect_uri():
    return f'{get_base_url()}/callback'


def get_verifier_store():
    return current_app.extensions['verifier_store']


def get_salesforce_client():
    return SalesforceClient.from_config(current_app.config)


def get_oauth_flow():
    return OAuthFlow(
        auth=SalesforceAuth.from_config(current_app.config),
        verifier_store=get_verifier_store()
    )
