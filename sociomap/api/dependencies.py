from __future__ import annotations

from fastapi import Request

from sociomap.services.generator import TextGenerator


def get_text_generator(request: Request) -> TextGenerator:
    """Return the provider configured for this app instance."""
    return request.app.state.text_generator
