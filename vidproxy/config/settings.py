import json
import logging
import os
from typing import Optional

from pydantic import BaseModel, Field, validator

logger = logging.getLogger(__name__)

PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.getenv("CONFIG_PATH", "config.json")


class ServerConfig(BaseModel):
    host: str = Field(default="0.0.0.0", description="Listening interface")
    port: int = Field(default=8000, ge=1, le=65535, description="Listening port")


class ApiConfig(BaseModel):
    title: str = Field(default="YouTube Downloader API", description="API title")
    version: str = Field(default="1.0.0", description="API version")
    debug: bool = Field(default=False, description="Enable debug mode")


class CorsConfig(BaseModel):
    allow_origin: str = Field(default="*", description="Access-Control-Allow-Origin")
    allow_methods: str = Field(default="GET, POST, OPTIONS", description="Access-Control-Allow-Methods")
    allow_headers: str = Field(default="Content-Type", description="Access-Control-Allow-Headers")


class StaticConfig(BaseModel):
    directory: str = Field(
        default=os.path.join(PACKAGE_DIR, "static"),
        description="Directory holding index.html and style.css"
    )


class YtDlpConfig(BaseModel):
    binary: str = Field(default="yt-dlp", description="yt-dlp executable")
    watch_url: str = Field(
        default="https://www.youtube.com/watch?v={video_id}",
        description="URL template handed to yt-dlp"
    )
    info_timeout: float = Field(default=30.0, gt=0, description="Timeout for metadata extraction in seconds")
    socket_timeout: int = Field(default=10, ge=1, description="Socket timeout for yt-dlp")
    retries: int = Field(default=3, ge=0, description="Network retries performed by yt-dlp itself")
    js_runtime: Optional[str] = Field(default=None, description="JS runtime path (e.g., deno:/usr/local/bin/deno)")
    auto_detect_runtime: bool = Field(default=True, description="Auto-detect JS runtime if not specified")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    format: str = Field(default="request_id=%(request_id)s %(message)s", description="Log format")
    enable_rich: bool = Field(default=True, description="Enable rich console logging")

    @validator('level')
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class I18nConfig(BaseModel):
    default_locale: str = Field(default="en", description="Default locale")


class Config(BaseModel):
    """Main configuration model"""
    server: ServerConfig = Field(default_factory=ServerConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    cors: CorsConfig = Field(default_factory=CorsConfig)
    static: StaticConfig = Field(default_factory=StaticConfig)
    ytdlp: YtDlpConfig = Field(default_factory=YtDlpConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    i18n: I18nConfig = Field(default_factory=I18nConfig)

    @classmethod
    def load_from_file(cls, config_path: str = "config.json") -> "Config":
        """Load configuration from JSON file"""
        if os.path.exists(config_path):
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    config_data = json.load(f)
                logger.info(f"Configuration loaded from {config_path}")
                return cls(**config_data)
            except Exception as e:
                logger.error(f"Failed to load config from {config_path}: {str(e)}")
                logger.info("Using default configuration")
        else:
            logger.warning(f"Config file {config_path} not found, using defaults")

        return cls()

    @classmethod
    def load_from_env(cls) -> "Config":
        """Load configuration from environment variables (fallback)"""
        config_data = {}

        server = {}
        if os.getenv("HOST"):
            server["host"] = os.getenv("HOST")
        if os.getenv("PORT"):
            server["port"] = int(os.getenv("PORT"))
        if server:
            config_data["server"] = server

        if os.getenv("STATIC_DIR"):
            config_data["static"] = {"directory": os.getenv("STATIC_DIR")}

        ytdlp = {}
        if os.getenv("YT_DLP_BINARY"):
            ytdlp["binary"] = os.getenv("YT_DLP_BINARY")
        if os.getenv("YT_DLP_JS_RUNTIME"):
            ytdlp["js_runtime"] = os.getenv("YT_DLP_JS_RUNTIME")
        if os.getenv("YT_DLP_TIMEOUT"):
            ytdlp["info_timeout"] = float(os.getenv("YT_DLP_TIMEOUT"))
        if ytdlp:
            config_data["ytdlp"] = ytdlp

        logging_config = {}
        if os.getenv("LOG_LEVEL"):
            logging_config["level"] = os.getenv("LOG_LEVEL")
        if os.getenv("LOG_RICH"):
            logging_config["enable_rich"] = os.getenv("LOG_RICH").lower() == "true"
        if logging_config:
            config_data["logging"] = logging_config

        if os.getenv("DEFAULT_LOCALE"):
            config_data["i18n"] = {"default_locale": os.getenv("DEFAULT_LOCALE")}

        return cls(**config_data) if config_data else cls()

    def save_to_file(self, config_path: str = "config.json"):
        """Save configuration to JSON file"""
        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                json.dump(self.model_dump(exclude_none=True), f, indent=2, ensure_ascii=False)
            logger.info(f"Configuration saved to {config_path}")
        except Exception as e:
            logger.error(f"Failed to save config to {config_path}: {str(e)}")


def load_config() -> Config:
    """Load configuration with priority: config.json > env vars > defaults"""
    config_path = os.getenv("CONFIG_PATH", "config.json")

    if os.path.exists(config_path):
        return Config.load_from_file(config_path)
    else:
        logger.info(f"Config file not found at {config_path}, checking environment variables")
        return Config.load_from_env()


config = load_config()
