"""데이터베이스"""
from .database import get_db, init_db
from .models import Preference
from .preferences import Theme, ThemeStore, theme_badge

__all__ = ['get_db', 'init_db', 'Preference', 'Theme', 'ThemeStore', 'theme_badge']
