# wsgi.py (at repo root): gunicorn wsgi:app
from project_directory import create_app

app = create_app()
