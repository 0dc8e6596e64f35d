from app.models.mod import Mod
from app.models.rating import Rating
from app.models.screenshot import Screenshot
from app.models.user import User

__all__ = ["User", "Mod", "Screenshot", "Rating"]
