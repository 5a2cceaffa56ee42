"""Tests for environment predicates."""

import pytest

from reqcheck.environment import StaticEnvironment
from reqcheck.errors import EvaluationError
from reqcheck.predicates import EnvironmentPredicates


def make_predicates(extensions=None, ini=None):
    return EnvironmentPredicates(StaticEnvironment(extensions=extensions, ini=ini))


class TestCheckExtensionVersion:
    def setup_method(self):
        self.predicates = make_predicates(
            extensions={
                "pdo": "8.1.2",
                "apcu": "PECL-5.1.21",
                "tagged": "v2.0",
                "empty": "",
                "garbage": "not-a-version",
            }
        )

    def test_missing_extension(self):
        assert self.predicates.check_extension_version("some_non_existing_extension", "0.1") is False

    def test_default_is_greater_or_equal(self):
        assert self.predicates.check_extension_version("pdo", "1.0") is True
        assert self.predicates.check_extension_version("pdo", "8.1.2") is True
        assert self.predicates.check_extension_version("pdo", "9.0") is False

    def test_comparators(self):
        assert self.predicates.check_extension_version("pdo", "9.0", "<") is True
        assert self.predicates.check_extension_version("pdo", "8.1.2", "==") is True
        assert self.predicates.check_extension_version("pdo", "8.1.2", "ne") is False
        assert self.predicates.check_extension_version("pdo", "8.1", "gt") is True

    def test_packaging_prefix_is_stripped(self):
        assert self.predicates.check_extension_version("apcu", "5.1", ">=") is True
        assert self.predicates.check_extension_version("tagged", "2.0.0", "==") is True

    def test_empty_version(self):
        assert self.predicates.check_extension_version("empty", "0.1") is False

    def test_unparseable_version(self):
        assert self.predicates.check_extension_version("garbage", "1.0") is False

    def test_unknown_comparator_raises(self):
        with pytest.raises(EvaluationError):
            self.predicates.check_extension_version("pdo", "1.0", "approx")


class TestIniOptions:
    def setup_method(self):
        self.predicates = make_predicates(
            ini={"one": "1", "on": "On", "off": "OFF", "zero": "0", "empty": "", "other": "yes"}
        )

    def test_ini_on(self):
        assert self.predicates.check_ini_on("one") is True
        assert self.predicates.check_ini_on("on") is True
        assert self.predicates.check_ini_on("off") is False
        assert self.predicates.check_ini_on("other") is False

    def test_ini_on_missing_or_empty(self):
        assert self.predicates.check_ini_on("missing") is False
        assert self.predicates.check_ini_on("empty") is False

    def test_ini_off(self):
        assert self.predicates.check_ini_off("off") is True
        assert self.predicates.check_ini_off("on") is False
        assert self.predicates.check_ini_off("one") is False

    def test_ini_off_missing_or_empty(self):
        assert self.predicates.check_ini_off("missing") is True
        assert self.predicates.check_ini_off("empty") is True

    def test_zero_is_neither_on_nor_off(self):
        assert self.predicates.check_ini_on("zero") is False
        assert self.predicates.check_ini_off("zero") is False


class TestUploadMaxFileSize:
    def test_within_range(self):
        predicates = make_predicates(ini={"post_max_size": "8M", "upload_max_filesize": "2M"})
        assert predicates.check_upload_max_file_size("1M") is True
        assert predicates.check_upload_max_file_size("1M", "8M") is True
        assert predicates.check_upload_max_file_size(max="16M") is True

    def test_both_limits_must_meet_minimum(self):
        predicates = make_predicates(ini={"post_max_size": "8M", "upload_max_filesize": "2M"})
        assert predicates.check_upload_max_file_size("5M") is False

    def test_both_limits_must_meet_maximum(self):
        predicates = make_predicates(ini={"post_max_size": "8M", "upload_max_filesize": "2M"})
        assert predicates.check_upload_max_file_size(max="4M") is False

    def test_no_bounds_always_passes(self):
        assert make_predicates().check_upload_max_file_size() is True

    def test_unset_limits_fail_minimum(self):
        assert make_predicates().check_upload_max_file_size("1K") is False


class TestByteSizeHelpers:
    def test_delegates(self):
        predicates = make_predicates()
        assert predicates.get_byte_size("5K") == 5120
        assert predicates.compare_byte_size("2M", "2K", ">") is True


class TestServerInfo:
    def test_server_info_and_date(self):
        predicates = EnvironmentPredicates(StaticEnvironment(server_info="nginx/1.25"))
        assert predicates.get_server_info() == "nginx/1.25"
        assert len(predicates.get_now_date()) == len("2026-01-01 00:00:00")
