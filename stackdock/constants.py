"""
Constants for the stackdock application.

Note: These constants serve as default fallback values.
Simulation and display settings can be overridden from config.json in the
data directory via ConfigManager.
"""
import json
from pathlib import Path
from typing import Any, Optional

# =============================================================================
# Default Fallback Values
# These are used if config.json doesn't exist or doesn't specify a value.
# =============================================================================

# Storage
DEFAULT_DATA_DIR = Path(".stackdock")
SNAPSHOT_FILE_NAME = "snapshot.json"
CONFIG_FILE_NAME = "config.json"

# Simulated gateway (seconds / probability)
DEFAULT_MIN_DELAY = 0.5
DEFAULT_MAX_DELAY = 2.5
DEFAULT_FAILURE_RATE = 0.1

# Cover generation
DEFAULT_GRADIENT_PROBABILITY = 0.7

# Display
DEFAULT_THEME = "dark"
VALID_THEMES = ["light", "dark"]
DEFAULT_TRUNCATE_LENGTH = 40

# Elegant gradient palettes, curated for a refined aesthetic
GRADIENT_PALETTES = [
    ("#667eea", "#764ba2"),  # Purple dream
    ("#f093fb", "#f5576c"),  # Pink sunset
    ("#4facfe", "#00f2fe"),  # Ocean breeze
    ("#43e97b", "#38f9d7"),  # Mint fresh
    ("#fa709a", "#fee140"),  # Warm glow
    ("#a8edea", "#fed6e3"),  # Soft pastel
    ("#d299c2", "#fef9d7"),  # Lavender cream
    ("#89f7fe", "#66a6ff"),  # Sky blue
    ("#cd9cf2", "#f6f3ff"),  # Lilac mist
    ("#ffecd2", "#fcb69f"),  # Peach dawn
    ("#a1c4fd", "#c2e9fb"),  # Morning sky
    ("#667db6", "#0082c8"),  # Deep ocean
    ("#ff9a9e", "#fecfef"),  # Rose petal
    ("#96fbc4", "#f9f586"),  # Lime fizz
    ("#30cfd0", "#330867"),  # Neon twilight
]

SOLID_COLORS = [
    "#6366f1",  # Indigo
    "#8b5cf6",  # Violet
    "#ec4899",  # Pink
    "#f43f5e",  # Rose
    "#f97316",  # Orange
    "#eab308",  # Yellow
    "#22c55e",  # Green
    "#14b8a6",  # Teal
    "#06b6d4",  # Cyan
    "#3b82f6",  # Blue
]

PLACEHOLDER_IMAGE_URL = "https://picsum.photos/seed/{seed}/400/300"

# Sync status constants (not configurable)
STATUS_IDLE = "idle"
STATUS_SYNCING = "syncing"
STATUS_ERROR = "error"

# Validation error messages (not configurable)
VALIDATION_NAME_REQUIRED = "Name must not be empty."
VALIDATION_INVALID_THEME = "Theme must be one of: light, dark."

# Fallback messages when a gateway failure carries no text
FALLBACK_ERROR_MESSAGES = {
    "create_stack": "Failed to create stack",
    "update_stack": "Failed to update stack",
    "delete_stack": "Failed to delete stack",
    "create_card": "Failed to create card",
    "update_card": "Failed to update card",
    "delete_card": "Failed to delete card",
    "move_card": "Failed to move card",
    "resync": "Failed to sync data",
}


# =============================================================================
# Config Loader
# Load values from <data_dir>/config.json at runtime.
# =============================================================================


class ConfigManager:
    """
    Manages loading configuration from a config.json file with fallback to defaults.

    This class is independent of StorageManager to avoid cyclic dependencies.
    StorageManager handles persistence; ConfigManager handles runtime access.

    Usage:
        config = ConfigManager(data_dir=Path(".stackdock"))
        failure_rate = config.get_float('failure_rate', DEFAULT_FAILURE_RATE)
    """

    def __init__(self, config_path: Optional[Path] = None, data_dir: Optional[Path] = None) -> None:
        """
        Initialize ConfigManager.

        Args:
            config_path: Direct path to config.json file. Takes precedence over data_dir.
            data_dir: Path to the data directory. Config path will be data_dir/config.json.
        """
        self._config: Optional[dict] = None

        if config_path is not None:
            self._config_path = config_path
        elif data_dir is not None:
            self._config_path = data_dir / CONFIG_FILE_NAME
        else:
            self._config_path = DEFAULT_DATA_DIR / CONFIG_FILE_NAME

    def _load_config(self) -> dict:
        """Load config from config.json file."""
        if self._config is not None:
            return self._config

        if self._config_path.exists():
            try:
                with open(self._config_path, "r", encoding="utf-8") as f:
                    loaded = json.load(f)
                self._config = loaded if isinstance(loaded, dict) else {}
            except (json.JSONDecodeError, UnicodeDecodeError, OSError):
                self._config = {}
        else:
            self._config = {}

        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a config value with fallback to default.

        Args:
            key: Configuration key name.
            default: Default value if key not found.

        Returns:
            Config value or default.
        """
        config = self._load_config()
        return config.get(key, default)

    def get_float(self, key: str, default: float) -> float:
        """Get a float config value with fallback."""
        value = self.get(key, default)
        try:
            return float(value) if value is not None else default
        except (TypeError, ValueError):
            return default

    def get_str(self, key: str, default: str) -> str:
        """Get a string config value with fallback."""
        value = self.get(key, default)
        return str(value) if value is not None else default

    @property
    def config_path(self) -> Path:
        """Get the config file path."""
        return self._config_path

    def min_delay(self) -> float:
        return self.get_float("min_delay", DEFAULT_MIN_DELAY)

    def max_delay(self) -> float:
        return self.get_float("max_delay", DEFAULT_MAX_DELAY)

    def failure_rate(self) -> float:
        return self.get_float("failure_rate", DEFAULT_FAILURE_RATE)

    def gradient_probability(self) -> float:
        return self.get_float("gradient_probability", DEFAULT_GRADIENT_PROBABILITY)

    def theme(self) -> str:
        theme = self.get_str("theme", DEFAULT_THEME)
        return theme if theme in VALID_THEMES else DEFAULT_THEME
