"""
Key-value entry model definition using SQLAlchemy ORM.
"""

from datetime import datetime, timezone

from bookreviews import db

class StoreEntry(db.Model):
    """One key of the durable key-value store."""

    __tablename__ = 'store_entries'

    key = db.Column(db.String(100), primary_key=True)
    # NULL once the key is removed; the row keeps its version
    value = db.Column(db.Text, nullable=True)
    version = db.Column(db.Integer, nullable=False, default=1)
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    def __repr__(self):
        """String representation of the entry."""
        return f"<StoreEntry(key='{self.key}', version={self.version})>"
