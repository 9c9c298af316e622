from __future__ import annotations

from datetime import datetime

from file_api.extensions import db


class Folder(db.Model):
    __tablename__ = "folders"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False, index=True)
    parent_id = db.Column(
        db.Integer, db.ForeignKey("folders.id", ondelete="CASCADE"), nullable=True, index=True
    )
    parent_folder = db.Column(db.String(1024), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    parent = db.relationship(
        "Folder",
        remote_side=[id],
        backref=db.backref("children", cascade="all, delete-orphan", lazy=True),
    )
    files = db.relationship(
        "File", back_populates="folder", cascade="all, delete-orphan", lazy=True
    )

    @property
    def directory(self) -> str:
        """Storage path of this folder's directory."""
        if self.parent_id and self.parent_folder:
            return f"{self.parent_folder}/{self.slug}"
        return self.slug

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "parent_id": self.parent_id,
            "parent_folder": self.parent_folder,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"<Folder {self.id}: {self.directory}>"
