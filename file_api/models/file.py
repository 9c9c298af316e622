from __future__ import annotations

from datetime import datetime

from file_api.extensions import db


class File(db.Model):
    __tablename__ = "files"

    id = db.Column(db.Integer, primary_key=True)
    folder_id = db.Column(
        db.Integer, db.ForeignKey("folders.id", ondelete="CASCADE"), nullable=True, index=True
    )
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False)
    mime_type = db.Column(db.String(128), nullable=True)
    url = db.Column(db.String(2048), nullable=False)
    path = db.Column(db.String(1024), nullable=False, unique=True)
    size = db.Column(db.BigInteger, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    folder = db.relationship("Folder", back_populates="files")

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "mime_type": self.mime_type,
            "url": self.url,
            "path": self.path,
            "size": self.size,
            "folder_id": self.folder_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"<File {self.id}: {self.path}>"
