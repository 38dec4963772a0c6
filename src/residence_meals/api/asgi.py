"""ASGI entrypoint for the residence meals API."""

from residence_meals.api.app import create_app
from residence_meals.containers import build_container

app = create_app(build_container())
