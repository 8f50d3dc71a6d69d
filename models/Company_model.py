from extensions import db
from datetime import datetime

class Company(db.Model):
    __tablename__ = 'companies'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    industry = db.Column(db.String(150), nullable=True)
    address = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    users = db.relationship('User', backref='company', lazy=True, foreign_keys='User.company_id')
    workspaces = db.relationship('Workspace', backref='company', lazy=True)
    roles = db.relationship('CustomRole', backref='company', lazy=True)

    def to_dict(self):
        return {
            'id': self.id,
            'companyName': self.name,
            'industry': self.industry,
            'address': self.address,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }


class Workspace(db.Model):
    __tablename__ = 'workspaces'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    company_id = db.Column(db.Integer, db.ForeignKey('companies.id'), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
