"""
Rotas de OAuth do Salesforce.
Gerencia autorização (PKCE), callback e desconexão.
"""

from flask import Blueprint, request, jsonify, redirect, render_template, url_for
import logging

from salesforce_connector.services.credential_store import credential_store
from salesforce_connector.services.exceptions import InvalidStateError
from salesforce_connector.utils.helpers import get_oauth_flow, get_redirect_uri

logger = logging.getLogger(__name__)

oauth_bp = Blueprint('salesforce_oauth', __name__)


@oauth_bp.route('/auth', methods=['GET'])
def authorize():
    """
    Inicia o fluxo de autorização OAuth do Salesforce.
    Redireciona o usuário para a tela de login/consentimento.
    """
    try:
        flow = get_oauth_flow()
        auth_request = flow.start_authorization(get_redirect_uri())
        return redirect(auth_request.authorization_url)
    except Exception as e:
        logger.exception(f'Error initiating auth: {e}')
        return jsonify({'error': 'Failed to initiate OAuth flow'}), 500


@oauth_bp.route('/callback', methods=['GET'])
def oauth_callback():
    """
    Callback OAuth do Salesforce.
    Troca o código por tokens e armazena.
    """
    code = request.args.get('code')
    state = request.args.get('state')
    error = request.args.get('error')
    error_description = request.args.get('error_description')

    if error:
        logger.error(f'OAuth error: {error} {error_description or ""}')
        return jsonify({
            'error': 'OAuth authorization failed',
            'details': error_description or error
        }), 400

    if not code or not state:
        return jsonify({'error': 'Missing code or state parameter'}), 400

    try:
        flow = get_oauth_flow()
        flow.complete_authorization(code, state, get_redirect_uri())
        return render_template('success.html')
    except InvalidStateError as e:
        logger.warning(f'Callback with unknown state: {state}')
        return jsonify({'error': e.message}), 400
    except Exception as e:
        logger.exception(f'Callback error: {e}')
        return jsonify({
            'error': 'Failed to complete OAuth flow',
            'details': str(e)
        }), 500


@oauth_bp.route('/disconnect', methods=['POST'])
def disconnect():
    """Remove os tokens armazenados e volta ao dashboard"""
    try:
        credential_store.clear()
        logger.info('Disconnected from Salesforce')
        return redirect(url_for('dashboard.index'))
    except Exception as e:
        logger.exception(f'Disconnect error: {e}')
        return jsonify({
            'error': 'Failed to disconnect',
            'details': str(e)
        }), 500
