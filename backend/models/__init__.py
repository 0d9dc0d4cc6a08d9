from models.base import Base
from models.room import Room

__all__ = [
	"Base",
	"Room",
]
