from flask import Blueprint, jsonify, render_template
import logging

from salesforce_connector.services.credential_store import credential_store

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint('dashboard', __name__)


@dashboard_bp.route('/', methods=['GET'])
def index():
    """Dashboard com o status da conexão"""
    try:
        connected = credential_store.exists()
        return render_template('dashboard.html', connected=connected)
    except Exception as e:
        logger.exception(f'Error checking connection status: {e}')
        return jsonify({'error': 'Failed to check connection status'}), 500
