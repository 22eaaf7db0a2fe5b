from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import BigInteger, Integer

# Use BigInteger in production but fall back to Integer for SQLite
BIGINT = BigInteger().with_variant(Integer, "sqlite")

db = SQLAlchemy()

# Re-export common models for convenience
from .user import User, OTP, Admin  # noqa: F401,E402
from .merchant import Merchant  # noqa: F401,E402
from .rider import DeliveryBoy  # noqa: F401,E402
from .settings import AppSettings  # noqa: F401,E402
