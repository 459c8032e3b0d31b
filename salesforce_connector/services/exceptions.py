"""
Exceções customizadas para a integração com o Salesforce.
"""
import json


class SalesforceError(Exception):
    """Erro genérico da integração Salesforce"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        return self.message


class NoCredentialError(SalesforceError):
    """Nenhuma credencial armazenada quando uma era necessária"""

    def __init__(self, message: str = "No tokens found in database"):
        super().__init__(message)


class NotConnectedError(NoCredentialError):
    """Chamada de API sem org Salesforce conectada"""

    def __init__(self, message: str = "Not connected to Salesforce"):
        super().__init__(message)


class RefreshRejectedError(SalesforceError):
    """O provedor recusou o refresh token (normalmente revogado). Exige nova autorização."""

    def __init__(self, message: str = "Token refresh failed", status_code: int = None,
                 error: str = None, error_description: str = None):
        self.status_code = status_code
        self.error = error
        self.error_description = error_description
        detail = error_description or error
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class TokenExchangeError(SalesforceError):
    """O provedor recusou a troca do authorization code"""

    def __init__(self, message: str = "Token exchange failed", status_code: int = None,
                 error: str = None, error_description: str = None):
        self.status_code = status_code
        self.error = error
        self.error_description = error_description
        detail = error_description or error
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ApiError(SalesforceError):
    """Resposta não-2xx de uma chamada à REST API"""

    def __init__(self, status_code: int, body=None, endpoint: str = None):
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint
        super().__init__(f"Salesforce API error ({status_code}): {json.dumps(body, default=str)}")


class InvalidStateError(SalesforceError):
    """State do callback sem verifier correspondente ou já expirado"""

    def __init__(self, message: str = "Invalid or expired state parameter", state: str = None):
        self.state = state
        super().__init__(message)


class SalesforceRequestError(SalesforceError):
    """Falha de transporte HTTP (timeout, conexão recusada, etc.)"""

    def __init__(self, message: str, endpoint: str = None):
        self.endpoint = endpoint
        if endpoint:
            message = f"{message} [{endpoint}]"
        super().__init__(message)


class CredentialStorageError(SalesforceError):
    """Falha no banco de dados ao ler ou gravar credenciais"""

    def __init__(self, message: str, operation: str = None):
        self.operation = operation
        if operation:
            message = f"{operation}: {message}"
        super().__init__(message)
