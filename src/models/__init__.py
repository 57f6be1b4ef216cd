from .base import Base
from .claim import Claim  # registers the total amount hook

__all__ = ['Base', 'Claim']
