from .models import (
    InfoConfigModel,
    LoggingConfigModel,
    ServiceConfigModel,
    TracingConfigModel,
)
from .service_config import CONFIG_FILENAME, find_config_file, load_service_config

__all__ = [
    "CONFIG_FILENAME",
    "InfoConfigModel",
    "LoggingConfigModel",
    "ServiceConfigModel",
    "TracingConfigModel",
    "find_config_file",
    "load_service_config",
]
