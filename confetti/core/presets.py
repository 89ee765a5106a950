"""
Motion Presets - Named, YAML-backed confetto motion settings

A preset bundles the velocity, acceleration, cap, rotation, TTL and fade
settings of a confetto so a whole burst can be configured by name.
User presets live as YAML files and override built-ins with the same name.
"""

import logging
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field, asdict

from .confetto import Confetto
from .easing import get_easing

logger = logging.getLogger(__name__)


# ============================================================================
# Preset Data Structure
# ============================================================================

@dataclass
class MotionPreset:
    """A single confetto motion configuration (px, ms, degrees)"""

    name: str
    description: str = ""

    # Translation
    velocity_x: float = 0.0
    velocity_y: float = 0.0
    acceleration_x: float = 0.0
    acceleration_y: float = 0.0
    target_velocity_x: Optional[float] = None
    target_velocity_y: Optional[float] = None

    # Rotation
    rotation: float = 0.0
    rotational_velocity: float = 0.0
    rotational_acceleration: float = 0.0
    target_rotational_velocity: Optional[float] = None

    # Timing
    ttl: Optional[float] = None
    initial_delay: float = 0.0
    fade_out: Optional[str] = None

    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization, dropping unset fields"""
        return {k: v for k, v in asdict(self).items() if v is not None and v != []}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MotionPreset':
        """Create from dictionary, ignoring unknown keys"""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)

    def apply(self, confetto: Confetto, x: float = 0.0, y: float = 0.0) -> Confetto:
        """
        Configure a confetto from this preset.

        Args:
            confetto: Confetto to configure (not prepared yet)
            x, y: Starting position

        Raises:
            ValueError: If fade_out names an unknown easing
        """
        fade = get_easing(self.fade_out) if self.fade_out else None
        return confetto.configure(
            initial_x=x,
            initial_y=y,
            initial_velocity_x=self.velocity_x,
            initial_velocity_y=self.velocity_y,
            acceleration_x=self.acceleration_x,
            acceleration_y=self.acceleration_y,
            target_velocity_x=self.target_velocity_x,
            target_velocity_y=self.target_velocity_y,
            initial_rotation=self.rotation,
            initial_rotational_velocity=self.rotational_velocity,
            rotational_acceleration=self.rotational_acceleration,
            target_rotational_velocity=self.target_rotational_velocity,
            ttl=self.ttl,
            initial_delay=self.initial_delay,
            fade_out=fade,
        )


# ============================================================================
# Built-in Presets
# ============================================================================

BUILTIN_PRESETS: Dict[str, Dict[str, Any]] = {
    "falling": {
        "name": "falling",
        "description": "Gravity pull capped at a gentle terminal velocity",
        "velocity_y": 0.05,
        "acceleration_y": 0.0005,
        "target_velocity_y": 0.3,
        "rotational_velocity": 0.1,
        "fade_out": "fade_late",
        "tags": ["gravity", "ambient"],
    },

    "streamer": {
        "name": "streamer",
        "description": "Slow sideways drift with a long, lazy spin",
        "velocity_x": 0.08,
        "velocity_y": 0.12,
        "acceleration_y": 0.0002,
        "target_velocity_y": 0.2,
        "rotational_velocity": 0.05,
        "rotational_acceleration": 0.0001,
        "target_rotational_velocity": 0.3,
        "fade_out": "fade_linear",
        "tags": ["gravity", "spin", "slow"],
    },

    "explosion": {
        "name": "explosion",
        "description": "Fast upward burst pulled back down by gravity",
        "velocity_y": -1.2,
        "acceleration_y": 0.003,
        "target_velocity_y": 0.6,
        "rotational_velocity": 0.6,
        "ttl": 3000,
        "fade_out": "fade_quick",
        "tags": ["burst", "gravity", "fast"],
    },

    "drift": {
        "name": "drift",
        "description": "Constant velocity, no acceleration, short TTL",
        "velocity_x": 0.1,
        "velocity_y": 0.1,
        "ttl": 1500,
        "fade_out": "fade_linear",
        "tags": ["ambient", "slow"],
    },

    "shower": {
        "name": "shower",
        "description": "Straight down at terminal velocity from the first frame",
        "velocity_y": 0.5,
        "target_velocity_y": 0.5,
        "rotational_velocity": 0.2,
        "tags": ["gravity", "fast"],
    },
}


# ============================================================================
# Preset Manager
# ============================================================================

class PresetManager:
    """
    Manages loading and saving motion presets.
    """

    def __init__(self, user_presets_dir: Optional[Path] = None):
        """
        Args:
            user_presets_dir: Directory for user presets (default: ~/.confetti/presets)
        """
        self.user_presets_dir = Path(user_presets_dir or Path.home() / '.confetti' / 'presets')
        self.user_presets_dir.mkdir(parents=True, exist_ok=True)

        self._builtin: Dict[str, MotionPreset] = {
            name: MotionPreset.from_dict(data) for name, data in BUILTIN_PRESETS.items()
        }
        self._user: Dict[str, MotionPreset] = {}
        self._sources: Dict[str, Path] = {}
        self._load_user_presets()

    def _load_user_presets(self) -> None:
        """Load user-defined presets from YAML files"""
        for yaml_file in sorted(self.user_presets_dir.glob('*.yaml')):
            try:
                with open(yaml_file, 'r') as f:
                    data = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Could not load preset file %s: %s", yaml_file, e)
                continue

            if not isinstance(data, dict):
                logger.warning("Ignoring preset file %s: expected a mapping", yaml_file)
                continue

            if 'presets' in data:
                # Multiple presets in one file
                entries = data['presets']
                if not isinstance(entries, dict):
                    logger.warning("Ignoring preset file %s: 'presets' must be a mapping", yaml_file)
                    continue
            else:
                entries = {yaml_file.stem: data}

            for name, preset_data in entries.items():
                if not isinstance(preset_data, dict):
                    logger.warning("Ignoring preset '%s' in %s: expected a mapping", name, yaml_file)
                    continue
                preset_data['name'] = str(name)
                self._user[str(name)] = MotionPreset.from_dict(preset_data)
                self._sources[str(name)] = yaml_file

        logger.debug("Loaded %d user presets from %s", len(self._user), self.user_presets_dir)

    def get(self, name: str) -> Optional[MotionPreset]:
        """
        Get a preset by name.
        User presets override built-in presets with same name.
        """
        return self._user.get(name) or self._builtin.get(name)

    def require(self, name: str) -> MotionPreset:
        """
        Get a preset by name.

        Raises:
            ValueError: If no preset has that name
        """
        preset = self.get(name)
        if preset is None:
            available = ', '.join(self.list_all())
            raise ValueError(f"Unknown preset '{name}'. Available: {available}")
        return preset

    def exists(self, name: str) -> bool:
        return name in self._user or name in self._builtin

    def is_builtin(self, name: str) -> bool:
        return name in self._builtin and name not in self._user

    def list_all(self) -> List[str]:
        return sorted(set(self._builtin) | set(self._user))

    def list_by_tag(self, tag: str) -> List[str]:
        """List presets with a specific tag"""
        matches = []
        for name, preset in {**self._builtin, **self._user}.items():
            if tag.lower() in [t.lower() for t in preset.tags]:
                matches.append(name)
        return sorted(matches)

    def save_preset(self, preset: MotionPreset) -> Path:
        """
        Save a user preset to <name>.yaml, so it reloads under the same name.

        Returns:
            Path to saved file
        """
        filepath = self.user_presets_dir / f"{preset.name}.yaml"
        with open(filepath, 'w') as f:
            yaml.safe_dump(preset.to_dict(), f, default_flow_style=False, sort_keys=False)

        self._user[preset.name] = preset
        self._sources[preset.name] = filepath
        logger.debug("Saved preset %s to %s", preset.name, filepath)
        return filepath

    def delete_preset(self, name: str) -> bool:
        """
        Delete a user preset from memory and from the file it came from.
        Other presets sharing a multi-preset file are kept.

        Returns:
            True if deleted, False if not found or built-in
        """
        if name not in self._user:
            return False

        path = self._sources.pop(name, None)
        del self._user[name]

        if path is not None and path.exists():
            remaining = {n: p for n, p in self._user.items() if self._sources.get(n) == path}
            if remaining:
                data = {'presets': {}}
                for other, preset in remaining.items():
                    entry = preset.to_dict()
                    entry.pop('name', None)
                    data['presets'][other] = entry
                with open(path, 'w') as f:
                    yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
            else:
                path.unlink()

        return True

    def search(self, query: str) -> List[str]:
        """Search presets by name, description, or tags"""
        query = query.lower()
        matches = []

        for name, preset in {**self._builtin, **self._user}.items():
            if (query in name.lower() or
                    query in preset.description.lower() or
                    any(query in tag.lower() for tag in preset.tags)):
                matches.append(name)

        return sorted(matches)


# ============================================================================
# Global Instance & Convenience Functions
# ============================================================================

_manager: Optional[PresetManager] = None


def get_preset_manager() -> PresetManager:
    """Get or create global preset manager"""
    global _manager
    if _manager is None:
        _manager = PresetManager()
    return _manager


def get_preset(name: str) -> Optional[MotionPreset]:
    return get_preset_manager().get(name)


def list_presets(tag: Optional[str] = None) -> List[str]:
    """List available presets, optionally filtered by tag"""
    manager = get_preset_manager()
    if tag:
        return manager.list_by_tag(tag)
    return manager.list_all()


def apply_preset(confetto: Confetto, name: str, x: float = 0.0, y: float = 0.0) -> Confetto:
    """Configure a confetto from a named preset"""
    return get_preset_manager().require(name).apply(confetto, x=x, y=y)
