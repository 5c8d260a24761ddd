"""
Configuration - Settings read from the environment and an optional .env file
"""
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from logstream.stream.connection import build_stream_url

TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    host: str = "localhost:3000"
    secure: bool = False
    export_dir: Path = field(default_factory=Path.cwd)
    log_dir: Path = Path("app_log")

    @property
    def stream_url(self) -> str:
        return build_stream_url(self.host, self.secure)

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from LOGSTREAM_* environment variables

        A .env file in the working directory is loaded first; variables
        already set in the environment win.
        """
        load_dotenv()

        defaults = cls()
        return cls(
            host=os.getenv("LOGSTREAM_HOST", defaults.host),
            secure=os.getenv("LOGSTREAM_SECURE", "").strip().lower() in TRUTHY,
            export_dir=Path(os.getenv("LOGSTREAM_EXPORT_DIR", str(defaults.export_dir))),
            log_dir=Path(os.getenv("LOGSTREAM_LOG_DIR", str(defaults.log_dir))),
        )
