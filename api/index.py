# Serverless entrypoint: the hosting platform's Python runtime serves the
# ASGI `app` object exported here.

from sociomap.api.main import app  # noqa: F401
