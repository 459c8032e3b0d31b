from salesforce_connector.database import db


class SalesforceToken(db.Model):
    """Tokens OAuth da org Salesforce conectada (uma única linha ativa)"""
    __tablename__ = 'salesforce_tokens'

    id = db.Column(db.Integer, primary_key=True)
    access_token = db.Column(db.Text, nullable=False)
    refresh_token = db.Column(db.Text, nullable=False)
    instance_url = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now())

    def __repr__(self):
        return f'<SalesforceToken {self.id} {self.instance_url}>'
