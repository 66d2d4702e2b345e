"""WSGI entry point, e.g. ``gunicorn kitchen_prep.wsgi:app``."""

from kitchen_prep import create_app


app = create_app()
