"""
Rotas que consultam a org Salesforce conectada.
"""

from flask import Blueprint, jsonify
import logging

from salesforce_connector.services.exceptions import NotConnectedError, RefreshRejectedError
from salesforce_connector.utils.helpers import get_salesforce_client

logger = logging.getLogger(__name__)

salesforce_bp = Blueprint('salesforce', __name__)

LEAD_OBJECT = 'Actabl_Lead__c'


def _error_response(error, message):
    """Traduz erros do Salesforce para respostas JSON"""
    if isinstance(error, NotConnectedError):
        return jsonify({'error': 'Not connected to Salesforce'}), 401
    if isinstance(error, RefreshRejectedError):
        # Refresh token revogado: só uma nova autorização resolve
        return jsonify({
            'error': 'Salesforce authorization expired, please reconnect',
            'details': str(error)
        }), 401
    logger.exception(f'{message}: {error}')
    return jsonify({'error': message, 'details': str(error)}), 500


@salesforce_bp.route('/test', methods=['GET'])
def test_connection():
    """Testa a conexão listando algumas Accounts"""
    try:
        logger.info('Testing Salesforce connection...')
        result = get_salesforce_client().query('SELECT Id, Name FROM Account LIMIT 5')

        return jsonify({
            'success': True,
            'message': 'Connection successful',
            'data': {
                'totalSize': result.get('totalSize'),
                'records': [
                    {'Id': record.get('Id'), 'Name': record.get('Name')}
                    for record in result.get('records', [])
                ]
            }
        })
    except Exception as e:
        return _error_response(e, 'Test connection failed')


@salesforce_bp.route('/leads', methods=['GET'])
def list_leads():
    """Últimos 10 registros do objeto customizado de leads"""
    try:
        logger.info(f'Querying {LEAD_OBJECT}...')
        result = get_salesforce_client().query(
            f'SELECT Id, Name, CreatedDate FROM {LEAD_OBJECT} ORDER BY CreatedDate DESC LIMIT 10'
        )

        return jsonify({
            'success': True,
            'data': {
                'totalSize': result.get('totalSize'),
                'records': result.get('records', [])
            }
        })
    except Exception as e:
        return _error_response(e, 'Failed to query Actabl Leads')


@salesforce_bp.route('/schema', methods=['GET'])
def lead_schema():
    """Schema (describe) do objeto de leads, resumido por campo"""
    try:
        logger.info(f'Fetching {LEAD_OBJECT} schema...')
        schema = get_salesforce_client().describe(LEAD_OBJECT)

        fields = [_summarize_field(field) for field in schema.get('fields', [])]

        return jsonify({
            'success': True,
            'data': {
                'name': schema.get('name'),
                'label': schema.get('label'),
                'labelPlural': schema.get('labelPlural'),
                'fieldCount': len(fields),
                'fields': fields
            }
        })
    except Exception as e:
        return _error_response(e, 'Failed to fetch schema')


def _summarize_field(field):
    return {
        'name': field.get('name'),
        'label': field.get('label'),
        'type': field.get('type'),
        'required': not field.get('nillable') and not field.get('defaultedOnCreate'),
        'length': field.get('length'),
        'picklistValues': [value.get('value') for value in field.get('picklistValues') or []]
    }
