"""
Configuration modules for realm generation.
"""

from .config import settings, Settings
from .terrain_defaults import get_template, list_templates, TERRAIN_TEMPLATES

__all__ = ['get_template', 'list_templates', 'TERRAIN_TEMPLATES', 'settings', 'Settings']
