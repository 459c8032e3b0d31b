"""
Chamadas autenticadas à REST API do Salesforce.

Se a primeira tentativa voltar 401 (access token expirado), o token é
renovado uma única vez e a requisição é refeita. Uma segunda falha não gera
novo refresh.
"""
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from salesforce_connector.services.credential_store import Credential, CredentialStore, credential_store
from salesforce_connector.services.exceptions import (
    ApiError,
    NotConnectedError,
    SalesforceRequestError
)
from salesforce_connector.services.salesforce_auth import SalesforceAuth

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = 'v59.0'

_METHODS_WITH_BODY = ('POST', 'PATCH')


class SalesforceClient:
    """Gateway para a REST API da org conectada"""

    def __init__(self, auth: SalesforceAuth, api_version: str = DEFAULT_API_VERSION,
                 timeout: int = 30, store: CredentialStore = None):
        self.auth = auth
        self.api_version = api_version
        self.timeout = timeout
        self.store = store or credential_store

    @classmethod
    def from_config(cls, config, store: CredentialStore = None):
        store = store or credential_store
        return cls(
            auth=SalesforceAuth.from_config(config, store=store),
            api_version=config.get('SF_API_VERSION') or DEFAULT_API_VERSION,
            timeout=config.get('SF_REQUEST_TIMEOUT', 30),
            store=store
        )

    def call(self, endpoint: str, method: str = 'GET', body: Optional[Dict[str, Any]] = None):
        """
        Faz uma chamada autenticada.

        Args:
            endpoint: caminho relativo ao instance_url (ex: /services/data/v59.0/...)
            method: GET, POST, PATCH ou DELETE
            body: payload JSON (enviado apenas em POST/PATCH)

        Returns:
            Corpo JSON da resposta, ou None quando vazio (ex: 204)
        """
        method = method.upper()
        credential = self.store.current()
        if credential is None:
            raise NotConnectedError()

        response = self._send(credential, endpoint, method, body)

        if response.status_code == 401:
            logger.info('Access token expired, refreshing...')
            self.auth.refresh_access_token()

            credential = self.store.current()
            if credential is None:
                raise NotConnectedError()
            response = self._send(credential, endpoint, method, body)

        if not response.ok:
            error_body = _parse_error_body(response)
            logger.error(f'Salesforce API error ({response.status_code}) on {method} {endpoint}')
            raise ApiError(response.status_code, error_body, endpoint=endpoint)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.error(f'Resposta não-JSON ({response.status_code}) em {method} {endpoint}')
            raise ApiError(response.status_code, {'message': response.text}, endpoint=endpoint)

    def query(self, soql: str):
        """Executa uma query SOQL"""
        return self.call(f'/services/data/{self.api_version}/query?q={quote(soql, safe="")}')

    def describe(self, object_name: str):
        """Metadados (describe) de um objeto"""
        return self.call(f'/services/data/{self.api_version}/sobjects/{object_name}/describe')

    def _send(self, credential: Credential, endpoint: str, method: str, body) -> requests.Response:
        url = f'{credential.instance_url}{endpoint}'
        kwargs = {
            'headers': {
                'Authorization': f'Bearer {credential.access_token}',
                'Content-Type': 'application/json'
            },
            'timeout': self.timeout
        }
        if body is not None and method in _METHODS_WITH_BODY:
            kwargs['json'] = body

        try:
            return requests.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f'Erro de conexão em {method} {endpoint}: {e}')
            raise SalesforceRequestError(str(e), endpoint=endpoint) from e


def _parse_error_body(response: requests.Response):
    try:
        return response.json()
    except ValueError:
        return {'message': response.text}
