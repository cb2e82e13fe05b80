"""Configuration management for the screensense detector."""

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables
load_dotenv()

VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Config(BaseSettings):
    """Configuration class for the screensense detector."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SCREENSENSE_",
        case_sensitive=False,
        extra="ignore",  # Ignore unexpected env vars rather than raising errors
    )

    # Detector Configuration
    vision_enabled: bool = Field(default=True, description="Hard gate for every detection entry point")
    window_width: int = Field(default=20, description="Sampling window width in pixels")
    window_height: int = Field(default=20, description="Sampling window height in pixels")
    scan_step: int = Field(default=20, description="Grid step between window origins")
    parallel_passes: bool = Field(default=False, description="Run the four detector passes on a thread pool")

    # Report Configuration
    report_filename: str = Field(default="visual_elements_report.txt")
    save_vision_debug: bool = Field(default=False)
    vision_debug_dir: str = Field(default="vision_debug")

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_dir: Optional[str] = Field(default=None, description="Directory for rotating log files (None disables)")

    def validate_config(self) -> bool:
        """Validate configuration values."""
        if self.window_width <= 0 or self.window_height <= 0:
            raise ValueError("Window dimensions must be positive")

        if self.scan_step <= 0:
            raise ValueError("Scan step must be positive")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")

        return True


# Global configuration instance
try:
    config = Config()
except Exception as e:
    print(f"Warning: Could not load configuration: {e}")
    config = Config.model_construct()
