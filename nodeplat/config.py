"""Global configuration — loaded from environment variables."""

from pydantic_settings import BaseSettings


class NodeplatSettings(BaseSettings):
    platform: str = ""  # darwin|linux, empty means detect from sys.platform
    default_shell: str = "/bin/bash"
    command_timeout_s: int = 30
    log_level: str = "INFO"

    # Process tree discovery
    ps_command: str = "ps -ax -o pid,ppid"

    model_config = {"env_prefix": "NODEPLAT_"}


settings = NodeplatSettings()
