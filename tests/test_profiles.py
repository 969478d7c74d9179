"""
Tests for YAML traversal profiles.
"""

import pytest
import yaml

from modelcrawl.traversal.engine import crawl, follow
from modelcrawl.traversal.options import CrawlOptions, FollowOptions
from modelcrawl.traversal.profiles import ProfileError, TraversalProfiles
from conftest import always, names


def write_profiles(tmp_path, config):
    path = tmp_path / "profiles.yaml"
    path.write_text(yaml.safe_dump(config))
    return path


class TestBundledProfiles:
    """config/profiles.yaml shipped with the project"""

    def test_load(self, profiles_path):
        profiles = TraversalProfiles(profiles_path)

        assert profiles.crawl_profile_names() == ["full", "forward_transitions", "neighbourhood"]
        assert profiles.follow_profile_names() == ["next_states", "two_step_trace"]

    def test_forward_transitions(self, profiles_path, fsm):
        profiles = TraversalProfiles(profiles_path)

        options = profiles.crawl_options("forward_transitions", always)

        assert isinstance(options, CrawlOptions)
        assert names(crawl(options, fsm.s1)) == ["s1", "t12", "s2", "t23", "s3", "t20", "s0", "t01"]

    def test_neighbourhood(self, profiles_path, fsm):
        options = TraversalProfiles(profiles_path).crawl_options("neighbourhood", always)

        assert names(crawl(options, fsm.s1)) == ["s1", "t12", "s2"]

    def test_two_step_trace(self, profiles_path, fsm):
        options = TraversalProfiles(profiles_path).follow_options("two_step_trace")

        assert isinstance(options, FollowOptions)
        assert names(follow(options, fsm.s1)) == ["s1", "t12", "s2", "t23", "t20"]


class TestProfileParsing:
    """Loading rules and errors"""

    def test_defaults(self, tmp_path):
        path = write_profiles(tmp_path, {
            "crawl_profiles": {"plain": None},
            "follow_profiles": {"identity": {"path": []}},
        })

        profiles = TraversalProfiles(path)

        assert profiles.crawl_profiles["plain"].depth == -1
        assert profiles.crawl_profiles["plain"].follow_if is None
        assert profiles.follow_profiles["identity"].target_only is True
        assert profiles.follow_profiles["identity"].path == ()

    def test_follow_if_single_name(self, tmp_path, fsm):
        path = write_profiles(tmp_path, {
            "crawl_profiles": {"only_next": {"follow_if": {"State": "transition", "Transition": None}}},
        })

        options = TraversalProfiles(path).crawl_options("only_next", always)

        assert names(crawl(options, fsm.s1)) == ["s1", "t12"]

    def test_follow_options_predicate(self, tmp_path, fsm):
        path = write_profiles(tmp_path, {"follow_profiles": {"hop": {"path": ["transition", "next"]}}})

        options = TraversalProfiles(path).follow_options("hop", predicate=lambda x: x.name == "s0")

        assert follow(options, fsm.s2) == [fsm.s0]

    def test_from_dict(self, fsm):
        profiles = TraversalProfiles.from_dict({"crawl_profiles": {"start": {"depth": 0}}})

        assert crawl(profiles.crawl_options("start", always), fsm.s2) == [fsm.s2]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        profiles = TraversalProfiles(path)

        assert profiles.crawl_profile_names() == []
        assert profiles.follow_profile_names() == []

    def test_unknown_profile(self, profiles_path):
        profiles = TraversalProfiles(profiles_path)

        with pytest.raises(ProfileError):
            profiles.crawl_options("missing", always)
        with pytest.raises(ProfileError):
            profiles.follow_options("missing")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProfileError):
            TraversalProfiles(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("crawl_profiles: [unclosed")

        with pytest.raises(ProfileError):
            TraversalProfiles(path)

    @pytest.mark.parametrize("config", [
        ["not", "a", "mapping"],
        {"crawl_profiles": ["full"]},
        {"crawl_profiles": {"bad": {"depth": -5}}},
        {"crawl_profiles": {"bad": {"follow_if": ["State"]}}},
        {"follow_profiles": {"bad": {"target_only": False}}},
        {"follow_profiles": {"bad": {"path": "transition"}}},
        {"follow_profiles": {"bad": {"path": ["transition"], "target_only": "false"}}},
        {"follow_profiles": {"bad": {"path": ["transition"], "target_only": 0}}},
    ])
    def test_malformed(self, tmp_path, config):
        path = write_profiles(tmp_path, config)

        with pytest.raises(ProfileError):
            TraversalProfiles(path)

    def test_profile_error_is_value_error(self):
        assert issubclass(ProfileError, ValueError)

    def test_target_only_false_is_kept(self, tmp_path, fsm):
        path = write_profiles(tmp_path, {
            "follow_profiles": {"trace": {"path": ["transition"], "target_only": False}},
        })

        options = TraversalProfiles(path).follow_options("trace")

        assert options.target_only is False
        assert names(follow(options, fsm.s1)) == ["s1", "t12"]
