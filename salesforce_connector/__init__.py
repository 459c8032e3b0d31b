from flask import Flask
from flask_cors import CORS
from salesforce_connector.config import Config
from salesforce_connector.database import db, init_db
from salesforce_connector.utils.verifier_store import InMemoryVerifierStore

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    # CORS apenas para os endpoints JSON; o dashboard é servido pelo próprio backend
    allowed_origins = [
        origin.strip() for origin in app.config.get('CORS_ORIGINS', '').split(',')
        if origin.strip()
    ]
    if allowed_origins:
        CORS(app,
             resources={r"/(test|leads|schema|health)": {"origins": allowed_origins}},
             supports_credentials=False,
             allow_headers=["Content-Type", "Authorization"],
             methods=["GET", "POST", "OPTIONS"])

    # Inicializar banco de dados
    db.init_app(app)
    init_db(app)

    # Verifiers PKCE em memória (state -> code_verifier)
    app.extensions['verifier_store'] = InMemoryVerifierStore(
        ttl_seconds=app.config['PKCE_VERIFIER_TTL']
    )

    from salesforce_connector.routes import dashboard
    app.register_blueprint(dashboard.dashboard_bp)

    from salesforce_connector.routes import oauth_routes
    app.register_blueprint(oauth_routes.oauth_bp)

    from salesforce_connector.routes import salesforce_routes
    app.register_blueprint(salesforce_routes.salesforce_bp)

    # Health check endpoint
    from salesforce_connector.routes import health
    app.register_blueprint(health.bp)

    return app
