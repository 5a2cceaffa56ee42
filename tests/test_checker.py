"""Tests for the requirements checker."""

from collections import deque

import pytest

from reqcheck.checker import CheckedRequirement, RequirementsChecker
from reqcheck.environment import StaticEnvironment
from reqcheck.errors import EvaluationError, UsageError


def make_checker():
    return RequirementsChecker(StaticEnvironment(
        extensions={"pdo": "8.1.2"},
        ini={"post_max_size": "8M", "upload_max_filesize": "2M"},
    ))


class TestCheck:
    def setup_method(self):
        self.checker = make_checker()
        self.requirements = {
            "requirementPass": {
                "name": "Requirement 1",
                "mandatory": True,
                "condition": True,
                "by": "Requirement 1",
                "memo": "Requirement 1",
            },
            "requirementError": {
                "name": "Requirement 2",
                "mandatory": True,
                "condition": False,
                "by": "Requirement 2",
                "memo": "Requirement 2",
            },
            "requirementWarning": {
                "name": "Requirement 3",
                "mandatory": False,
                "condition": False,
                "by": "Requirement 3",
                "memo": "Requirement 3",
            },
        }

    def test_summary(self):
        result = self.checker.check(self.requirements).get_result()
        assert result.summary.total == len(self.requirements)
        assert result.summary.errors == 1
        # the mandatory failure carries a warning flag too
        assert result.summary.warnings == 2
        assert result.summary.warnings == sum(r.warning for r in result.requirements)

    def test_classification(self):
        passed, error, warning = self.checker.check(self.requirements).get_result().requirements

        assert passed.error is False
        assert passed.warning is False
        assert passed.status == "ok"

        assert error.error is True
        assert error.warning is True
        assert error.status == "error"

        assert warning.error is False
        assert warning.warning is True
        assert warning.status == "warning"

    def test_result_is_none_before_check(self):
        assert self.checker.get_result() is None

    def test_empty_check_creates_result(self):
        result = self.checker.check([]).get_result()
        assert result is not None
        assert result.summary.total == 0

    def test_checked_requirements_are_immutable(self):
        requirement = self.checker.check(self.requirements).get_result().requirements[0]
        assert isinstance(requirement, CheckedRequirement)
        with pytest.raises(AttributeError):
            requirement.error = True


class TestCheckEval:
    def test_eval_conditions(self):
        checker = make_checker()
        requirements = {
            "requirementPass": {"name": "Requirement 1", "mandatory": True, "condition": "eval:2>1"},
            "requirementError": {"name": "Requirement 2", "mandatory": True, "condition": "eval:2<1"},
        }
        passed, error = checker.check(requirements).get_result().requirements

        assert passed.error is False
        assert passed.warning is False
        assert error.error is True

    def test_eval_predicate_conditions(self):
        checker = make_checker()
        result = checker.check([
            {"condition": "eval:check_upload_max_file_size('1M')"},
            {"condition": "eval:check_upload_max_file_size('5M')", "mandatory": True},
            {"condition": "eval:check_extension_version('pdo', '9.0')"},
        ]).get_result()

        assert [r.condition for r in result.requirements] == [True, False, False]
        assert result.summary.errors == 1
        assert result.summary.warnings == 2

    def test_callable_condition(self):
        checker = make_checker()
        result = checker.check([
            {"condition": lambda: checker.predicates.check_extension_version("pdo", "8.0")},
        ]).get_result()
        assert result.requirements[0].condition is True


class TestCheckChained:
    def test_results_accumulate(self):
        checker = make_checker()
        requirements1 = [{"name": "Requirement 1", "mandatory": True, "condition": True}]
        requirements2 = [
            {"name": "Requirement 2", "mandatory": True, "condition": False},
            {"name": "Requirement 3", "condition": False},
        ]

        result = checker.check(requirements1).check(requirements2).get_result()

        merged = requirements1 + requirements2
        assert result.summary.total == len(merged)
        assert [r.name for r in result.requirements] == [r["name"] for r in merged]
        assert result.summary.errors == 1
        assert result.summary.warnings == 2

    def test_same_result_object(self):
        checker = make_checker()
        first = checker.check([{"condition": True}]).get_result()
        second = checker.check([{"condition": True}]).get_result()
        assert first is second
        assert second.summary.total == 2


class TestNormalizeRequirement:
    def setup_method(self):
        self.checker = make_checker()

    def test_defaults_for_list(self):
        result = self.checker.check([{"condition": True}, {"condition": False}]).get_result()
        first, second = result.requirements
        assert first.name == "Requirement #0"
        assert second.name == "Requirement #1"
        assert first.mandatory is False
        assert first.by == "Unknown"
        assert first.memo == ""

    def test_name_from_mapping_key(self):
        result = self.checker.check({"db": {"condition": True}, "42": {"condition": True}}).get_result()
        assert [r.name for r in result.requirements] == ["db", "Requirement #42"]

    def test_legacy_required_field(self):
        result = self.checker.check([{"condition": False, "required": True}]).get_result()
        assert result.requirements[0].mandatory is True
        assert result.requirements[0].error is True

    def test_mandatory_wins_over_required(self):
        normalized = self.checker.normalize_requirement({"condition": True, "mandatory": False, "required": True})
        assert normalized["mandatory"] is False

    def test_extra_fields_are_kept(self):
        result = self.checker.check([{"condition": True, "group": "database"}]).get_result()
        requirement = result.requirements[0]
        assert requirement.extra == {"group": "database"}
        assert requirement.to_dict()["group"] == "database"

    def test_missing_condition(self):
        with pytest.raises(UsageError, match="has no condition"):
            self.checker.normalize_requirement({"name": "No condition"}, "nocond")


class TestUsageErrors:
    def setup_method(self):
        self.checker = make_checker()

    @pytest.mark.parametrize("requirements", ["requirements.yaml", 42, None, {1, 2}])
    def test_requirements_must_be_collection(self, requirements):
        with pytest.raises(UsageError):
            self.checker.check(requirements)

    def test_other_ordered_collections(self):
        self.checker.check(deque([{"name": "A", "condition": True}]))
        self.checker.check(({"condition": value} for value in (True, False)))
        result = self.checker.get_result()
        assert [r.name for r in result.requirements] == ["A", "Requirement #0", "Requirement #1"]
        assert result.summary.warnings == 1

    def test_requirement_must_be_mapping(self):
        with pytest.raises(UsageError, match="must be a mapping"):
            self.checker.check([True])

    def test_missing_condition_aborts_whole_batch(self):
        with pytest.raises(UsageError):
            self.checker.check([{"condition": True}, {"name": "broken"}])
        assert self.checker.get_result() is None

    def test_failed_batch_leaves_previous_results(self):
        self.checker.check([{"condition": True}])
        with pytest.raises(EvaluationError):
            self.checker.check([{"condition": False}, {"condition": "eval:2 >"}])
        result = self.checker.get_result()
        assert result.summary.total == 1
        assert len(result.requirements) == 1

    def test_render_before_check(self):
        with pytest.raises(UsageError, match="Nothing to render"):
            self.checker.render()


class TestRender:
    def test_render_formats(self):
        checker = make_checker().check([{"name": "Pass", "condition": True}])
        assert "Pass: OK" in checker.render("console")
        assert "<table" in checker.render("web")
        assert '"total": 1' in checker.render("json")

    def test_unknown_renderer(self):
        checker = make_checker().check([{"condition": True}])
        with pytest.raises(UsageError):
            checker.render("pdf")
