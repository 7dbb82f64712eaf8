import os
from dotenv import load_dotenv

load_dotenv()

VERSION = "1.0.0"
USER_AGENT = f"check_rabbitmq_aliveness/{VERSION}"
PLUGIN_LABEL = "RABBITMQ_ALIVENESS"


class Settings:
    RABBITMQ_HOST: str = os.getenv("RABBITMQ_HOST") or None
    RABBITMQ_PORT: str = os.getenv("RABBITMQ_PORT", "15672")
    RABBITMQ_USER: str = os.getenv("RABBITMQ_USER", "guest")
    RABBITMQ_PASSWORD: str = os.getenv("RABBITMQ_PASSWORD", "guest")
    RABBITMQ_VHOST: str = os.getenv("RABBITMQ_VHOST", "/")
    RABBITMQ_TIMEOUT: str = os.getenv("RABBITMQ_TIMEOUT", "15")


settings = Settings()
