"""Database setup utilities.

Exposes the ``db`` object shared by the models. The application
factory binds it to the Flask app; import it from
``project_directory`` rather than from this module directly.
"""
from __future__ import annotations

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
