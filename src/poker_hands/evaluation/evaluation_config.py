"""Configuration loader for hand evaluation types."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from poker_hands.evaluation.constants import (
    HAND_SIZE,
    SHORT_POOL_DEGRADE,
    SHORT_POOL_POLICIES,
)

logger = logging.getLogger(__name__)

DEFAULT_EVALUATION_TYPE = "high"


@dataclass(frozen=True)
class EvaluationConfig:
    """
    Configuration for a hand evaluation type.

    Attributes:
        id: Evaluation type id (file stem of the JSON file)
        name: Display name
        description: Free text description
        hand_size: Cards in a finished hand
        short_pool: What to do with pools smaller than hand_size,
                    "degrade" (evaluate what exists) or "reject"
        max_pool_size: Largest accepted pool, None for no limit
        check_duplicates: Reject pools holding the same card twice
    """

    id: str
    name: str
    description: str = ""
    hand_size: int = HAND_SIZE
    short_pool: str = SHORT_POOL_DEGRADE
    max_pool_size: int | None = None
    check_duplicates: bool = True

    def __post_init__(self):
        if self.short_pool not in SHORT_POOL_POLICIES:
            raise ValueError(
                f"Invalid short_pool policy '{self.short_pool}' for {self.id}, "
                f"expected one of {SHORT_POOL_POLICIES}"
            )
        if self.hand_size != HAND_SIZE:
            raise ValueError(f"Unsupported hand_size {self.hand_size} for {self.id}, only {HAND_SIZE} is scored")
        if self.max_pool_size is not None and self.max_pool_size < self.hand_size:
            raise ValueError(f"max_pool_size {self.max_pool_size} for {self.id} is smaller than hand_size")


class EvaluationConfigLoader:
    """Loads and manages hand evaluation configurations."""

    def __init__(self, config_dir: Path | None = None):
        """
        Initialize the loader.

        Args:
            config_dir: Directory containing evaluation JSON files.
                       Defaults to the data directory shipped with this package.
        """
        if config_dir is None:
            config_dir = Path(__file__).parent / "data"

        self.config_dir = config_dir
        self._configs: dict[str, EvaluationConfig] = {}
        self._loaded = False

    def load_all_configs(self) -> None:
        """Load all evaluation configuration files from the directory."""
        if self._loaded:
            return

        logger.info(f"Loading evaluation configurations from {self.config_dir}")

        if not self.config_dir.exists():
            logger.error(f"Configuration directory not found: {self.config_dir}")
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

        json_files = sorted(self.config_dir.glob("*.json"))

        if not json_files:
            logger.warning(f"No JSON configuration files found in {self.config_dir}")

        for json_file in json_files:
            try:
                config = self._load_config_file(json_file)
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Skipping invalid configuration {json_file}: {e}")
                continue
            self._configs[config.id] = config
            logger.debug(f"Loaded configuration for {config.id}")

        logger.info(f"Loaded {len(self._configs)} evaluation configurations")
        self._loaded = True

    def _load_config_file(self, filepath: Path) -> EvaluationConfig:
        """Load a single evaluation configuration file."""
        with open(filepath) as f:
            data = json.load(f)

        return EvaluationConfig(
            id=data.get("id", filepath.stem),
            name=data.get("name", filepath.stem),
            description=data.get("description", ""),
            hand_size=data.get("hand_size", HAND_SIZE),
            short_pool=data.get("short_pool", SHORT_POOL_DEGRADE),
            max_pool_size=data.get("max_pool_size"),
            check_duplicates=data.get("check_duplicates", True),
        )

    def get_config(self, eval_type: str) -> EvaluationConfig | None:
        """
        Get configuration for a specific evaluation type.

        Args:
            eval_type: The evaluation type (e.g., 'high')

        Returns:
            EvaluationConfig if found, None otherwise
        """
        if not self._loaded:
            self.load_all_configs()

        return self._configs.get(eval_type)

    def get_all_configs(self) -> dict[str, EvaluationConfig]:
        """Get all loaded configurations."""
        if not self._loaded:
            self.load_all_configs()

        return self._configs.copy()


# Global instance
evaluation_config_loader = EvaluationConfigLoader()


def get_evaluation_config(eval_type: str = DEFAULT_EVALUATION_TYPE) -> EvaluationConfig:
    """
    Convenience function to get an evaluation configuration.

    Falls back to the built-in defaults when no file defines the type.
    """
    config = evaluation_config_loader.get_config(eval_type)
    if config is None:
        logger.warning(f"No configuration found for {eval_type}, using defaults")
        return EvaluationConfig(id=eval_type, name=eval_type)
    return config
