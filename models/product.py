from models import db, BIGINT
from datetime import datetime


class Product(db.Model):
    __tablename__ = "product"

    id = db.Column(BIGINT, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.String(255), nullable=False)
    price = db.Column(db.Numeric(8, 2), nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # No cascade: deleting a referenced product is refused by the catalog
    line_items = db.relationship("LineItem", back_populates="product", lazy="dynamic")

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "image_url": self.image_url,
            "price": float(self.price),
        }

    def __repr__(self):
        return f"<Product id={self.id} title={self.title!r}>"
