"""
OAuth 2.0 (Authorization Code + PKCE) com o Salesforce.

Responsável por montar a URL de autorização, trocar o code por tokens e
renovar o access token a partir do refresh token armazenado.
"""
import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import requests

from salesforce_connector.services.credential_store import CredentialStore, credential_store
from salesforce_connector.services.exceptions import (
    NoCredentialError,
    RefreshRejectedError,
    SalesforceRequestError,
    TokenExchangeError
)

logger = logging.getLogger(__name__)

DEFAULT_LOGIN_URL = 'https://login.salesforce.com'
DEFAULT_SCOPES = 'api refresh_token'


class SalesforceAuth:
    """Cliente dos endpoints /services/oauth2 do Salesforce"""

    def __init__(self, client_id: str, client_secret: str,
                 login_url: str = DEFAULT_LOGIN_URL,
                 scopes: str = DEFAULT_SCOPES,
                 timeout: int = 30,
                 store: CredentialStore = None):
        self.client_id = client_id
        self.client_secret = client_secret
        self.login_url = login_url.rstrip('/')
        self.scopes = scopes
        self.timeout = timeout
        self.store = store or credential_store

    @classmethod
    def from_config(cls, config, store: CredentialStore = None):
        """Cria a partir de app.config (ou qualquer mapping com as chaves SF_*)"""
        return cls(
            client_id=config.get('SF_CLIENT_ID'),
            client_secret=config.get('SF_CLIENT_SECRET'),
            login_url=config.get('SF_LOGIN_URL') or DEFAULT_LOGIN_URL,
            scopes=config.get('SF_SCOPES') or DEFAULT_SCOPES,
            timeout=config.get('SF_REQUEST_TIMEOUT', 30),
            store=store
        )

    @property
    def token_url(self) -> str:
        return f'{self.login_url}/services/oauth2/token'

    @property
    def authorize_url(self) -> str:
        return f'{self.login_url}/services/oauth2/authorize'

    def build_authorization_url(self, redirect_uri: str, code_challenge: str, state: str) -> str:
        """
        Gera a URL de autorização para redirecionar o usuário.

        Args:
            redirect_uri: URL de callback (deve ser idêntica na troca do code)
            code_challenge: PKCE code_challenge (S256)
            state: State parameter para correlacionar o callback

        Returns:
            URL completa do /services/oauth2/authorize
        """
        params = {
            'response_type': 'code',
            'client_id': self.client_id,
            'redirect_uri': redirect_uri,
            'scope': self.scopes,
            'code_challenge': code_challenge,
            'code_challenge_method': 'S256',
            'state': state
        }
        return f'{self.authorize_url}?{urlencode(params)}'

    def exchange_code_for_tokens(self, code: str, code_verifier: str, redirect_uri: str) -> Dict[str, Any]:
        """
        Troca o authorization code por tokens.

        Returns:
            Dict com access_token, refresh_token, instance_url (resposta do Salesforce)
        """
        data = {
            'grant_type': 'authorization_code',
            'client_id': self.client_id,
            'client_secret': self.client_secret,
            'redirect_uri': redirect_uri,
            'code': code,
            'code_verifier': code_verifier
        }

        response = self._post_token_request(data)
        if not response.ok:
            error = _parse_oauth_error(response)
            logger.error(f'Token exchange failed ({response.status_code}): {error}')
            raise TokenExchangeError(
                status_code=response.status_code,
                error=error.get('error'),
                error_description=error.get('error_description')
            )

        token_data = self._parse_token_response(response)
        logger.info('Successfully exchanged authorization code for tokens')
        return token_data

    def refresh_access_token(self) -> Dict[str, str]:
        """
        Renova o access token usando o refresh token armazenado.

        Não faz retry: se o Salesforce recusar (refresh token revogado), o erro
        sobe para o chamador e o usuário precisa autorizar de novo.

        Returns:
            {'access_token': ..., 'instance_url': ...}
        """
        credential = self.store.current()
        if credential is None:
            raise NoCredentialError()

        data = {
            'grant_type': 'refresh_token',
            'client_id': self.client_id,
            'client_secret': self.client_secret,
            'refresh_token': credential.refresh_token
        }

        response = self._post_token_request(data)
        if not response.ok:
            error = _parse_oauth_error(response)
            logger.warning(f'Token refresh rejected ({response.status_code}): {error}')
            raise RefreshRejectedError(
                status_code=response.status_code,
                error=error.get('error'),
                error_description=error.get('error_description')
            )

        token_data = self._parse_token_response(response)
        access_token = token_data.get('access_token')
        instance_url = token_data.get('instance_url')
        if not access_token:
            logger.warning('Token refresh response without access_token')
            raise RefreshRejectedError(status_code=response.status_code, error='missing access_token')

        self.store.update_access_token(credential.id, access_token, instance_url)
        logger.info('Salesforce access token refreshed')

        return {
            'access_token': access_token,
            'instance_url': instance_url or credential.instance_url
        }

    def _parse_token_response(self, response: requests.Response) -> Dict[str, Any]:
        """Corpo JSON de uma resposta 2xx do token endpoint"""
        try:
            token_data = response.json()
        except ValueError as e:
            logger.error(f'Resposta inválida do token endpoint ({response.status_code})')
            raise SalesforceRequestError(
                f'Invalid JSON in token response (HTTP {response.status_code})',
                endpoint=self.token_url
            ) from e

        if not isinstance(token_data, dict):
            raise SalesforceRequestError(
                f'Unexpected token response (HTTP {response.status_code})',
                endpoint=self.token_url
            )
        return token_data

    def _post_token_request(self, data: Dict[str, str]) -> requests.Response:
        try:
            return requests.post(
                self.token_url,
                data=data,
                headers={'Content-Type': 'application/x-www-form-urlencoded'},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f'Erro de conexão com {self.token_url}: {e}')
            raise SalesforceRequestError(str(e), endpoint=self.token_url) from e


def _parse_oauth_error(response: requests.Response) -> Dict[str, Optional[str]]:
    """Extrai error/error_description do corpo de erro do OAuth"""
    try:
        body = response.json()
    except ValueError:
        return {'error': response.text or f'HTTP {response.status_code}', 'error_description': None}

    if not isinstance(body, dict):
        return {'error': str(body), 'error_description': None}

    return {
        'error': body.get('error'),
        'error_description': body.get('error_description')
    }
