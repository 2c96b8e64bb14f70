from flask_sqlalchemy import SQLAlchemy
from datetime import datetime, timezone
import json

from data_ingestion.table import Table

db = SQLAlchemy()

def _utcnow():
    return datetime.now(timezone.utc)

class StoredTable(db.Model):
    __tablename__ = 'stored_tables'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(100), unique=True, nullable=False)
    file_name = db.Column(db.String(255))
    headers = db.Column(db.Text, nullable=False) # JSON list
    rows = db.Column(db.Text, nullable=False) # JSON list of objects
    generated_headers = db.Column(db.Text, default='[]') # JSON list
    uploaded_at = db.Column(db.DateTime, default=_utcnow)

    def to_table(self):
        return Table(
            headers=json.loads(self.headers),
            rows=json.loads(self.rows),
            source_name=self.file_name,
            generated_headers=json.loads(self.generated_headers or '[]')
        )

    @classmethod
    def save_for_user(cls, user_id, table):
        """Replaces whatever table the user had before."""
        stored = cls.query.filter_by(user_id=user_id).first()
        if stored is None:
            stored = cls(user_id=user_id)
            db.session.add(stored)
        data = table.to_dict()
        stored.file_name = data["fileName"]
        stored.headers = json.dumps(data["headers"])
        stored.rows = json.dumps(data["rows"])
        stored.generated_headers = json.dumps(data["generatedHeaders"])
        stored.uploaded_at = _utcnow()
        db.session.commit()
        return stored

    @classmethod
    def load_for_user(cls, user_id):
        stored = cls.query.filter_by(user_id=user_id).first()
        return stored.to_table() if stored else None

    @classmethod
    def clear_for_user(cls, user_id):
        deleted = cls.query.filter_by(user_id=user_id).delete()
        db.session.commit()
        return deleted > 0

class Feedback(db.Model):
    __tablename__ = 'feedback'
    id = db.Column(db.String(36), primary_key=True) # UUID
    ts = db.Column(db.DateTime, default=_utcnow)
    feedback = db.Column(db.String(10), nullable=False) # like, dislike
    message_content = db.Column(db.Text, nullable=False)
    detailed_feedback = db.Column(db.Text)
    user_id = db.Column(db.String(100), default='anonymous')

def init_db(app):
    db.init_app(app)
    with app.app_context():
        db.create_all()
