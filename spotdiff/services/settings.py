"""
Application settings management.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from enum import Enum, auto
from pathlib import Path
from typing import Any, Optional

from spotdiff.core.diff.text_diff import TextCompareOptions


logger = logging.getLogger(__name__)


class DiffStyle(Enum):
    """Diff display style."""
    UNIFIED = auto()
    SIDE_BY_SIDE = auto()


@dataclass
class ComparisonSettings:
    """Settings for text comparison."""
    ignore_whitespace: bool = False
    ignore_case: bool = False
    context_lines: int = 3
    diff_style: DiffStyle = DiffStyle.UNIFIED
    side_by_side_width: int = 120
    tab_size: int = 4

    def to_options(self) -> TextCompareOptions:
        """Build the options passed to each engine call."""
        return TextCompareOptions(
            ignore_whitespace=self.ignore_whitespace,
            ignore_case=self.ignore_case,
            context_lines=self.context_lines
        )


@dataclass
class ApplicationSettings:
    """Main application settings container."""
    comparison: ComparisonSettings = field(default_factory=ComparisonSettings)
    last_export_path: str = ""
    recent_comparisons: list[tuple[str, str]] = field(default_factory=list)
    recent_limit: int = 10


class SettingsManager:
    """Manager for loading/saving application settings."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = Path(settings_path) if settings_path else self._get_default_path()
        self._settings: Optional[ApplicationSettings] = None

    @staticmethod
    def _get_default_path() -> Path:
        """Get the default settings file path."""
        if os.name == 'nt':
            # Windows
            app_data = os.environ.get('APPDATA', os.path.expanduser('~'))
            return Path(app_data) / 'SpotDiff' / 'settings.json'
        else:
            # Linux/Mac
            config_home = os.environ.get('XDG_CONFIG_HOME',
                                         os.path.expanduser('~/.config'))
            return Path(config_home) / 'spotdiff' / 'settings.json'

    @property
    def settings(self) -> ApplicationSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ApplicationSettings:
        """Load settings from disk, falling back to defaults."""
        if not self.settings_path.exists():
            return ApplicationSettings()

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return self._from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.settings_path, e)
            return ApplicationSettings()

    def save(self, settings: Optional[ApplicationSettings] = None) -> bool:
        """Save settings to disk."""
        settings = settings or self._settings
        if settings is None:
            return False

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(self._to_dict(settings), f, indent=2)
        except OSError as e:
            logger.error("Failed to save settings to %s: %s", self.settings_path, e)
            return False

        self._settings = settings
        return True

    def add_recent_comparison(self, left: str, right: str) -> None:
        """Record a compared pair, most recent first."""
        settings = self.settings
        pair = (left, right)

        recent = [p for p in settings.recent_comparisons if tuple(p) != pair]
        recent.insert(0, pair)
        settings.recent_comparisons = recent[:settings.recent_limit]

        self.save()

    def _to_dict(self, settings: ApplicationSettings) -> dict:
        """Convert settings to dictionary for JSON serialization."""
        def convert(obj: Any) -> Any:
            if isinstance(obj, Enum):
                return obj.name
            elif isinstance(obj, dict):
                return {k: convert(v) for k, v in obj.items()}
            elif isinstance(obj, (list, tuple)):
                return [convert(item) for item in obj]
            else:
                return obj

        return convert(asdict(settings))

    def _from_dict(self, data: dict) -> ApplicationSettings:
        """Convert dictionary back to settings objects."""
        def get_enum(enum_class: type, value: Any) -> Enum:
            if isinstance(value, str):
                try:
                    return enum_class[value]
                except KeyError:
                    return list(enum_class)[0]
            return value

        defaults = ComparisonSettings()
        comparison_data = data.get('comparison', {})

        def get_count(key: str, minimum: int) -> int:
            default = getattr(defaults, key)
            value = int(comparison_data.get(key, default))
            if value < minimum:
                logger.warning(
                    "Ignoring %s=%d in %s (minimum is %d), using %d",
                    key, value, self.settings_path, minimum, default
                )
                return default
            return value

        comparison = ComparisonSettings(
            ignore_whitespace=bool(comparison_data.get('ignore_whitespace', defaults.ignore_whitespace)),
            ignore_case=bool(comparison_data.get('ignore_case', defaults.ignore_case)),
            context_lines=get_count('context_lines', 0),
            diff_style=get_enum(DiffStyle, comparison_data.get('diff_style', defaults.diff_style.name)),
            side_by_side_width=get_count('side_by_side_width', 1),
            tab_size=get_count('tab_size', 0),
        )

        return ApplicationSettings(
            comparison=comparison,
            last_export_path=data.get('last_export_path', ''),
            recent_comparisons=[tuple(p) for p in data.get('recent_comparisons', [])],
            recent_limit=int(data.get('recent_limit', 10)),
        )
