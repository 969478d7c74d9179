"""
Traversal Profile Configuration Loader

Loads and parses a profiles YAML file describing named crawl configurations
(depth bound + reference filter map) and named reference paths, and turns
them into CrawlOptions / FollowOptions.

Predicates are code, not configuration: they are supplied when an options
record is built from a profile.
"""

import logging
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass

from modelcrawl.utils import Config
from .options import ConfigurationError, CrawlOptions, FollowOptions, Predicate

logger = logging.getLogger(__name__)


class ProfileError(ValueError):
    pass


@dataclass
class CrawlProfile:
    """A named crawl configuration"""
    name: str
    depth: int
    follow_if: Optional[Dict[str, Tuple[str, ...]]]
    description: str


@dataclass
class FollowProfile:
    """A named reference path"""
    name: str
    path: Tuple[str, ...]
    target_only: bool
    description: str


class TraversalProfiles:
    """
    Loads and provides access to traversal profile configuration.

    Two top-level sections are recognized, both optional:
    `crawl_profiles` and `follow_profiles`.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize profiles from config file.

        Args:
            config_path: Path to the profiles YAML file. If None, uses Config.PROFILES_PATH.
        """
        if config_path is None:
            config_path = Config.PROFILES_PATH

        self.config_path = Path(config_path)
        self.config = self._load_config()

        self.crawl_profiles: Dict[str, CrawlProfile] = self._parse_crawl_profiles()
        self.follow_profiles: Dict[str, FollowProfile] = self._parse_follow_profiles()

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "TraversalProfiles":
        """Build profiles from an already-parsed configuration mapping"""
        profiles = cls.__new__(cls)
        profiles.config_path = None
        profiles.config = cls._check_root(config)
        profiles.crawl_profiles = profiles._parse_crawl_profiles()
        profiles.follow_profiles = profiles._parse_follow_profiles()
        return profiles

    def _load_config(self) -> dict:
        """Load YAML configuration file"""
        logger.info("Loading traversal profiles from %s", self.config_path)
        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f)
        except FileNotFoundError:
            raise ProfileError(f"Profiles file not found: {self.config_path}") from None
        except yaml.YAMLError as e:
            raise ProfileError(f"Invalid YAML in {self.config_path}: {e}") from e
        return self._check_root(config)

    @staticmethod
    def _check_root(config: Any) -> dict:
        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ProfileError("Profiles configuration must be a mapping at the top level")
        return config

    def _section(self, key: str) -> Dict[str, Any]:
        section = self.config.get(key) or {}
        if not isinstance(section, dict):
            raise ProfileError(f"'{key}' must be a mapping of profile name to definition")
        return section

    def _parse_crawl_profiles(self) -> Dict[str, CrawlProfile]:
        """Parse crawl profile definitions"""
        profiles = {}
        for name, profile_def in self._section('crawl_profiles').items():
            profile_def = profile_def or {}
            if not isinstance(profile_def, dict):
                raise ProfileError(f"crawl_profiles.{name} must be a mapping")

            depth = profile_def.get('depth', Config.DEFAULT_DEPTH)
            follow_if = profile_def.get('follow_if')

            # Validate through the options record so bad values fail at load time
            try:
                checked = CrawlOptions(predicate=bool, depth=depth, follow_if=follow_if)
            except ConfigurationError as e:
                raise ProfileError(f"crawl_profiles.{name}: {e}") from e

            profiles[name] = CrawlProfile(
                name=name,
                depth=checked.depth,
                follow_if=checked.follow_if,
                description=profile_def.get('description', '')
            )
        return profiles

    def _parse_follow_profiles(self) -> Dict[str, FollowProfile]:
        """Parse follow profile definitions"""
        profiles = {}
        for name, profile_def in self._section('follow_profiles').items():
            if not isinstance(profile_def, dict) or 'path' not in profile_def:
                raise ProfileError(f"follow_profiles.{name} must be a mapping with a 'path'")

            try:
                checked = FollowOptions(
                    path=profile_def['path'] or [],
                    target_only=profile_def.get('target_only', True)
                )
            except ConfigurationError as e:
                raise ProfileError(f"follow_profiles.{name}: {e}") from e

            profiles[name] = FollowProfile(
                name=name,
                path=checked.steps,
                target_only=checked.target_only,
                description=profile_def.get('description', '')
            )
        return profiles

    def crawl_profile_names(self) -> List[str]:
        return list(self.crawl_profiles.keys())

    def follow_profile_names(self) -> List[str]:
        return list(self.follow_profiles.keys())

    def crawl_options(self, name: str, predicate: Predicate) -> CrawlOptions:
        """
        Build crawl options from a named profile.

        Args:
            name: Profile name under crawl_profiles
            predicate: Selection test for the crawl

        Returns:
            CrawlOptions carrying the profile's depth and reference filter map
        """
        profile = self.crawl_profiles.get(name)
        if profile is None:
            raise ProfileError(f"Unknown crawl profile {name!r} (known: {self.crawl_profile_names()})")
        follow_if = None
        if profile.follow_if is not None:
            follow_if = {type_name: list(refs) for type_name, refs in profile.follow_if.items()}
        return CrawlOptions(predicate=predicate, depth=profile.depth, follow_if=follow_if)

    def follow_options(self, name: str, predicate: Optional[Predicate] = None) -> FollowOptions:
        """Build follow options from a named profile, with an optional post-filter"""
        profile = self.follow_profiles.get(name)
        if profile is None:
            raise ProfileError(f"Unknown follow profile {name!r} (known: {self.follow_profile_names()})")
        return FollowOptions(
            path=list(profile.path),
            target_only=profile.target_only,
            predicate=predicate
        )
