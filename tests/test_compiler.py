"""Tests for phase 1: compiling example methods."""

import pytest

from scenario_core import (
    CompilationContext,
    Scenario,
    ScenarioCompiler,
    WrappingViolationError,
    classify,
    skip,
    todo,
)


class stack_behavior(Scenario):
    def when_pushing_an_item(self):
        self.establish = lambda: None
        self.because = lambda: None
        self.cleanup = lambda: None
        self.it["has one item"] = lambda: None
        self.it["is not empty"] = todo

    def when_popping_from_empty(self):
        self.verify = lambda: None

    def when_peeking_without_wrapping(self):
        # observation outside a deferred block
        assert self.items[0] == 1

    def when_declaring_both(self):
        self.verify = lambda: None
        self.it["also named"] = lambda: None

    def when_declaring_nothing(self):
        pass


@skip
class skipped_stack(Scenario):
    def when_anything(self):
        raise AssertionError("must not run during compilation")


def method(scenario_type, name):
    return next(m for m in classify(scenario_type).examples if m.name == name)


@pytest.fixture
def scenario():
    return stack_behavior()


class TestCompilationContext:
    """Tests for CompilationContext."""

    def test_starts_empty(self):
        """A fresh context has no slots and no conditions."""
        assert CompilationContext().is_empty() is True

    def test_clear(self):
        """clear() drops slots and registered conditions."""
        context = CompilationContext()
        context.establish = lambda: None
        context.registry.new()["x"] = lambda: None
        context.clear()
        assert context.is_empty() is True


class TestScenarioCompiler:
    """Tests for ScenarioCompiler.compile."""

    def test_named_conditions_and_slots(self, scenario):
        """Slots become pre/post actions; named conditions keep their order."""
        example = ScenarioCompiler(scenario).compile(method(stack_behavior, "when_pushing_an_item"))

        assert example.name == "when_pushing_an_item"
        assert example.display_name == "when pushing an item"
        assert len(example.pre_actions) == 2
        assert len(example.post_actions) == 1
        assert example.verify_condition is None
        assert [c.name for c in example.conditions] == ["has one item", "is not empty"]
        assert example.conditions[1].is_pending is True

    def test_verify_becomes_headline_condition(self, scenario):
        """verify is synthesized into one condition named after the example."""
        example = ScenarioCompiler(scenario).compile(method(stack_behavior, "when_popping_from_empty"))

        assert example.verify_condition is not None
        assert str(example.verify_condition) == "when popping from empty"
        assert example.conditions == []
        assert example.pre_actions == []

    def test_wrapping_violation(self, scenario):
        """An exception raised by the example body is a structural error."""
        compiler = ScenarioCompiler(scenario)
        with pytest.raises(WrappingViolationError, match="when peeking without wrapping") as excinfo:
            compiler.compile(method(stack_behavior, "when_peeking_without_wrapping"))

        assert isinstance(excinfo.value.__cause__, AttributeError)
        assert excinfo.value.example == "when peeking without wrapping"

    def test_both_styles_are_kept_for_the_executor(self, scenario):
        """verify plus named conditions compiles; execution rejects it."""
        example = ScenarioCompiler(scenario).compile(method(stack_behavior, "when_declaring_both"))
        assert example.is_ambiguous is True

    def test_empty_example(self, scenario):
        """An example that declares nothing has no actions or conditions."""
        example = ScenarioCompiler(scenario).compile(method(stack_behavior, "when_declaring_nothing"))
        assert example.all_conditions() == []
        assert example.is_ambiguous is False

    def test_slots_do_not_bleed_between_examples(self, scenario):
        """Each compilation starts from empty slots and leaves them empty."""
        compiler = ScenarioCompiler(scenario)
        compiler.compile(method(stack_behavior, "when_pushing_an_item"))

        assert scenario.establish is None
        assert scenario.because is None
        assert scenario.cleanup is None

        example = compiler.compile(method(stack_behavior, "when_popping_from_empty"))
        assert example.pre_actions == []
        assert example.post_actions == []
        assert example.conditions == []

    def test_slots_cleared_after_violation(self, scenario):
        """A failed compilation does not leave partial slots behind."""
        compiler = ScenarioCompiler(scenario)
        with pytest.raises(WrappingViolationError):
            compiler.compile(method(stack_behavior, "when_peeking_without_wrapping"))
        assert scenario.verify is None

    def test_skipped_example_is_not_invoked(self):
        """Skipped examples are compiled by name only."""
        scenario = skipped_stack()
        example = ScenarioCompiler(scenario).compile(method(skipped_stack, "when_anything"))

        assert example.skipped is True
        assert str(example.verify_condition) == "when anything"
        assert example.pre_actions == []
