from datetime import datetime
from yallatiers.extensions import db


def _iso(dt):
    return dt.isoformat() if dt else None


class User(db.Model):
    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password = db.Column(db.String(255), nullable=False)   # password hash
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {"id": self.id, "name": self.name, "email": self.email}

    def __repr__(self):
        return f"<User {self.email}>"


class SearchHistory(db.Model):
    __tablename__ = "search_history"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), index=True, nullable=False)
    vehicle_type = db.Column(db.String(40), nullable=False)
    year = db.Column(db.String(10), nullable=False)
    make = db.Column(db.String(120), nullable=False)
    model = db.Column(db.String(120), nullable=False)
    mileage = db.Column(db.String(40))
    part_search = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "vehicleType": self.vehicle_type,
            "year": self.year,
            "make": self.make,
            "model": self.model,
            "mileage": self.mileage,
            "partSearch": self.part_search,
            "createdAt": _iso(self.created_at),
        }


class Part(db.Model):
    __tablename__ = "parts"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    condition_rating = db.Column(db.Integer, nullable=False)
    estimated_price = db.Column(db.String(40), nullable=False)
    image_url = db.Column(db.String(500), nullable=False)
    vehicle_type = db.Column(db.String(40), nullable=False)
    year = db.Column(db.String(10), nullable=False)
    make = db.Column(db.String(120), nullable=False)
    model = db.Column(db.String(120), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    __table_args__ = (
        db.CheckConstraint("condition_rating BETWEEN 0 AND 100", name="ck_part_condition_rating"),
        db.Index("ix_parts_vehicle", "vehicle_type", "year", "make", "model"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "conditionRating": self.condition_rating,
            "estimatedPrice": self.estimated_price,
            "imageUrl": self.image_url,
            "vehicleType": self.vehicle_type,
            "year": self.year,
            "make": self.make,
            "model": self.model,
            "createdAt": _iso(self.created_at),
        }


class Favorite(db.Model):
    __tablename__ = "favorites"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), index=True, nullable=False)
    part_id = db.Column(db.Integer, db.ForeignKey("parts.id"), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "partId": self.part_id,
            "createdAt": _iso(self.created_at),
        }
