"""
Endpoint de health check
"""
from flask import Blueprint, jsonify
from datetime import datetime, timezone
from sqlalchemy import text
from salesforce_connector.database import db

bp = Blueprint('health', __name__)


@bp.route('/health', methods=['GET'])
def health_check():
    """Healthcheck: API online e banco de dados acessível"""
    try:
        db.session.execute(text('SELECT 1'))

        return jsonify({
            'status': 'healthy',
            'timestamp': datetime.now(timezone.utc).isoformat()
        }), 200

    except Exception as e:
        db.session.rollback()
        return jsonify({
            'status': 'unhealthy',
            'message': 'API is online but database connection failed',
            'error': str(e),
            'timestamp': datetime.now(timezone.utc).isoformat()
        }), 503
