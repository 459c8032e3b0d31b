"""
Conexão com o banco de dados (Flask-SQLAlchemy).
"""
import logging
from flask_sqlalchemy import SQLAlchemy

logger = logging.getLogger(__name__)

db = SQLAlchemy()


def init_db(app):
    """Cria as tabelas que ainda não existem. Seguro para rodar a cada startup."""
    from salesforce_connector.services.credential_store import credential_store

    with app.app_context():
        credential_store.initialize_schema()
        logger.info('Database initialized successfully')
