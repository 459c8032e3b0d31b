"""
Servidor de desenvolvimento.

Para executar:
    python -m salesforce_connector.server

Em produção use um servidor WSGI apontando para
``salesforce_connector.server:app``.
"""
import logging
import sys

from salesforce_connector import create_app

# Configurar logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = create_app()


def main():
    port = app.config['PORT']
    logger.info(f"Server running on port {port}")
    logger.info(f"Environment: {app.config['FLASK_ENV']}")
    try:
        app.run(host='0.0.0.0', port=port, debug=app.config['DEBUG'])
    except Exception as e:
        logger.exception(f"Failed to start server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
