# -*- coding: utf-8 -*-
"""
Kos Admin Application Core Module
"""

from .config import Config, Vocabularies

__all__ = ["Config", "Vocabularies"]
