from .salesforce_token import SalesforceToken

__all__ = [
    'SalesforceToken',
]
