"""
PKCE (Proof Key for Code Exchange) para o fluxo Authorization Code do Salesforce.
"""
import base64
import hashlib
import secrets
import time

_BASE36_ALPHABET = '0123456789abcdefghijklmnopqrstuvwxyz'


def _base64url_encode(data: bytes) -> str:
    """Base64 URL-safe sem padding '='"""
    return base64.urlsafe_b64encode(data).decode('ascii').rstrip('=')


def _to_base36(number: int) -> str:
    if number == 0:
        return '0'
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return ''.join(reversed(digits))


def generate_code_verifier() -> str:
    """Gera um code_verifier aleatório de 256 bits (43 caracteres, URL-safe)"""
    return _base64url_encode(secrets.token_bytes(32))


def generate_code_challenge(verifier: str) -> str:
    """Gera code_challenge (S256) a partir do code_verifier"""
    digest = hashlib.sha256(verifier.encode('utf-8')).digest()
    return _base64url_encode(digest)


def generate_state() -> str:
    """
    Gera o parâmetro state do OAuth.

    Formato: <timestamp em ms, base36>-<8 bytes aleatórios em hex>
    """
    timestamp = _to_base36(int(time.time() * 1000))
    random_part = secrets.token_hex(8)
    return f'{timestamp}-{random_part}'
