"""
Persistência das credenciais OAuth do Salesforce.

Single-tenant: existe no máximo uma credencial. Gravar uma nova substitui a
anterior na mesma transação.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from salesforce_connector.database import db
from salesforce_connector.models import SalesforceToken
from salesforce_connector.services.exceptions import CredentialStorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credential:
    """Snapshot da credencial atual"""
    access_token: str
    refresh_token: str
    instance_url: str
    id: int


@contextmanager
def _storage_operation(operation: str):
    try:
        yield
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f'Erro no banco de dados ({operation}): {e}')
        raise CredentialStorageError(str(e), operation=operation) from e


class CredentialStore:
    """Acesso à credencial corrente da org conectada"""

    def initialize_schema(self):
        """CREATE TABLE IF NOT EXISTS para salesforce_tokens"""
        with _storage_operation('initialize_schema'):
            db.create_all()

    def replace(self, access_token: str, refresh_token: str, instance_url: str) -> int:
        """
        Remove qualquer credencial existente e grava a nova.

        Returns:
            id da nova linha
        """
        with _storage_operation('replace'):
            SalesforceToken.query.delete()
            token = SalesforceToken(
                access_token=access_token,
                refresh_token=refresh_token,
                instance_url=instance_url
            )
            db.session.add(token)
            db.session.commit()
            logger.info(f'Stored Salesforce tokens for {instance_url}')
            return token.id

    def current(self) -> Optional[Credential]:
        """Credencial mais recente, ou None se não houver"""
        with _storage_operation('current'):
            token = SalesforceToken.query.order_by(SalesforceToken.id.desc()).first()

        if token is None:
            return None

        return Credential(
            access_token=token.access_token,
            refresh_token=token.refresh_token,
            instance_url=token.instance_url,
            id=token.id
        )

    def update_access_token(self, credential_id: int, access_token: str,
                            instance_url: Optional[str] = None) -> bool:
        """
        Atualiza o access token (e o instance_url, se informado) após um refresh.
        O refresh token nunca é alterado aqui.

        Returns:
            True se a linha existia
        """
        values = {
            SalesforceToken.access_token: access_token,
            SalesforceToken.updated_at: db.func.now(),
        }
        if instance_url:
            values[SalesforceToken.instance_url] = instance_url

        with _storage_operation('update_access_token'):
            updated = SalesforceToken.query.filter_by(id=credential_id).update(
                values, synchronize_session=False
            )
            db.session.commit()

        if not updated:
            logger.warning(f'Credential {credential_id} not found while updating access token')
        return bool(updated)

    def clear(self):
        """Remove todas as credenciais"""
        with _storage_operation('clear'):
            SalesforceToken.query.delete()
            db.session.commit()

    def exists(self) -> bool:
        with _storage_operation('exists'):
            count = db.session.query(db.func.count(SalesforceToken.id)).scalar()
        return count > 0


credential_store = CredentialStore()
