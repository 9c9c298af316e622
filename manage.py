"""Command-line and WSGI entry point (``python manage.py folders check``, ``gunicorn manage:app``)."""

from file_api import create_app

app = create_app()


if __name__ == "__main__":
    app.cli.main()
