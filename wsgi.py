"""WSGI entrypoint for Gunicorn.

The draw cache is per process, so prefer threads over extra workers:
  gunicorn -w 1 --threads 8 -b 0.0.0.0:8000 wsgi:app
"""

from lotto_mirror import create_app

app = create_app()
