"""
Configuration for the Study Content Viewer.

Immutable settings with validation on construction. Values can be
overridden through ``STUDY_VIEWER_*`` environment variables.
"""

import functools
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


PROJECT_ROOT = Path(__file__).resolve().parent
DEFAULT_SAMPLE_PATH = PROJECT_ROOT / "data" / "sample-questions.tsv"

ENV_PREFIX = "STUDY_VIEWER_"


@dataclass(frozen=True)
class ViewerConfig:
    """
    Viewer configuration (immutable).

    Attributes:
        sample_data_path: TSV file served by "Load Sample Data"
        sniff_sample_lines: Number of records inspected for delimiter detection
        default_scroll_interval: Initial auto-scroll interval in seconds
        scroll_interval_choices: Intervals offered in the auto-scroll selector
        auto_scroll_page_size: Questions shown at once while auto-scrolling
        slow_operation_threshold: Seconds after which an operation is logged as slow
        export_dir: Directory for exported files
        log_level: Root logging level name
        server_name: Host the Gradio server binds to
        server_port: Port the Gradio server listens on
    """

    sample_data_path: Path = DEFAULT_SAMPLE_PATH
    sniff_sample_lines: int = 10
    default_scroll_interval: int = 5
    scroll_interval_choices: Tuple[int, ...] = (2, 3, 5, 7, 10, 15)
    auto_scroll_page_size: int = 3
    slow_operation_threshold: float = 1.0
    export_dir: Path = Path(".")
    log_level: str = "INFO"
    server_name: str = "127.0.0.1"
    server_port: int = 7860

    def __post_init__(self):
        """Validate configuration values."""
        if self.sniff_sample_lines < 1:
            raise ValueError("sniff_sample_lines must be at least 1")

        if not self.scroll_interval_choices:
            raise ValueError("scroll_interval_choices cannot be empty")

        if self.default_scroll_interval not in self.scroll_interval_choices:
            raise ValueError(
                f"default_scroll_interval {self.default_scroll_interval} must be one of "
                f"{list(self.scroll_interval_choices)}"
            )

        if self.auto_scroll_page_size < 1:
            raise ValueError("auto_scroll_page_size must be at least 1")

        if self.slow_operation_threshold <= 0:
            raise ValueError("slow_operation_threshold must be positive")

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {self.log_level}")

        if not 0 < self.server_port < 65536:
            raise ValueError(f"Invalid server port: {self.server_port}")

    @classmethod
    def from_env(cls) -> "ViewerConfig":
        """
        Build a configuration from ``STUDY_VIEWER_*`` environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a variable cannot be converted or fails validation
        """
        env = os.environ
        overrides = {}

        if env.get(ENV_PREFIX + "SAMPLE_DATA"):
            overrides['sample_data_path'] = Path(env[ENV_PREFIX + "SAMPLE_DATA"])
        if env.get(ENV_PREFIX + "SNIFF_LINES"):
            overrides['sniff_sample_lines'] = int(env[ENV_PREFIX + "SNIFF_LINES"])
        if env.get(ENV_PREFIX + "SCROLL_INTERVAL"):
            overrides['default_scroll_interval'] = int(env[ENV_PREFIX + "SCROLL_INTERVAL"])
        if env.get(ENV_PREFIX + "PAGE_SIZE"):
            overrides['auto_scroll_page_size'] = int(env[ENV_PREFIX + "PAGE_SIZE"])
        if env.get(ENV_PREFIX + "SLOW_THRESHOLD"):
            overrides['slow_operation_threshold'] = float(env[ENV_PREFIX + "SLOW_THRESHOLD"])
        if env.get(ENV_PREFIX + "EXPORT_DIR"):
            overrides['export_dir'] = Path(env[ENV_PREFIX + "EXPORT_DIR"])
        if env.get(ENV_PREFIX + "LOG_LEVEL"):
            overrides['log_level'] = env[ENV_PREFIX + "LOG_LEVEL"].upper()
        if env.get(ENV_PREFIX + "HOST"):
            overrides['server_name'] = env[ENV_PREFIX + "HOST"]
        if env.get(ENV_PREFIX + "PORT"):
            overrides['server_port'] = int(env[ENV_PREFIX + "PORT"])

        return cls(**overrides)


@functools.lru_cache(maxsize=1)
def get_config() -> ViewerConfig:
    """Get the process-wide configuration, read once from the environment."""
    return ViewerConfig.from_env()
