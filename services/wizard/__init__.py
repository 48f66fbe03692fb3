# -*- coding: utf-8 -*-
"""Wizard services: flow declarations and submission."""
