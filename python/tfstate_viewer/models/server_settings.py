# tfstate_viewer/models/server_settings.py

from pydantic_settings import BaseSettings


class ServerSettings(BaseSettings):
    """
    Pydantic settings for the upload service.
    Fields map to environment variables prefixed with `TFVIEW_`,
    e.g. `TFVIEW_PORT`, `TFVIEW_MAX_UPLOAD_BYTES`.
    """

    host: str = "0.0.0.0"
    port: int = 8080
    max_upload_bytes: int = 10 << 20  # 10 MiB
    allow_origin: str = "*"

    class Config:
        env_prefix = "TFVIEW_"
