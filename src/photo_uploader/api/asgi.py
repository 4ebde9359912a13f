"""ASGI entrypoint for the photo uploader API."""

from photo_uploader.api.app import create_app
from photo_uploader.containers import build_container

app = create_app(build_container())
