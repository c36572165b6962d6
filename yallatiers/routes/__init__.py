from .auth import bp as auth_bp
from .user import bp as user_bp
from .parts import bp as parts_bp
from .vehicle import bp as vehicle_bp
from .products import bp as products_bp

ALL_BLUEPRINTS = (auth_bp, user_bp, parts_bp, vehicle_bp, products_bp)
