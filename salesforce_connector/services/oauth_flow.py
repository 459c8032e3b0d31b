"""
Orquestração do fluxo OAuth: início (/auth) e callback (/callback).
"""
import logging
from dataclasses import dataclass

from salesforce_connector.services.credential_store import CredentialStore, credential_store
from salesforce_connector.services.exceptions import InvalidStateError
from salesforce_connector.services.salesforce_auth import SalesforceAuth
from salesforce_connector.utils.pkce import generate_code_challenge, generate_code_verifier, generate_state
from salesforce_connector.utils.verifier_store import VerifierStore

logger = logging.getLogger(__name__)


@dataclass
class AuthorizationRequest:
    authorization_url: str
    state: str


class OAuthFlow:

    def __init__(self, auth: SalesforceAuth, verifier_store: VerifierStore,
                 store: CredentialStore = None):
        self.auth = auth
        self.verifier_store = verifier_store
        self.store = store or credential_store

    def start_authorization(self, redirect_uri: str) -> AuthorizationRequest:
        """Gera PKCE + state, guarda o verifier e devolve a URL de autorização"""
        code_verifier = generate_code_verifier()
        code_challenge = generate_code_challenge(code_verifier)
        state = generate_state()

        self.verifier_store.put(state, code_verifier)

        url = self.auth.build_authorization_url(redirect_uri, code_challenge, state)
        logger.info('Initiating OAuth flow...')
        logger.info(f'Redirect URI: {redirect_uri}')
        return AuthorizationRequest(authorization_url=url, state=state)

    def complete_authorization(self, code: str, state: str, redirect_uri: str) -> int:
        """
        Consome o state, troca o code por tokens e grava a credencial.

        Returns:
            id da credencial gravada
        """
        code_verifier = self.verifier_store.take(state)
        if not code_verifier:
            raise InvalidStateError(state=state)

        logger.info('Exchanging authorization code for tokens...')
        token_response = self.auth.exchange_code_for_tokens(code, code_verifier, redirect_uri)

        credential_id = self.store.replace(
            token_response.get('access_token'),
            token_response.get('refresh_token'),
            token_response.get('instance_url')
        )
        logger.info('OAuth flow completed successfully')
        logger.info(f"Instance URL: {token_response.get('instance_url')}")
        return credential_id
