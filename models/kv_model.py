from models import db


class StoredValue(db.Model):
    __tablename__ = "stored_value"

    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.Text, nullable=False)
