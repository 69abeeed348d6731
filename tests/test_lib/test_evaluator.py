"""Tests for AST evaluation: path resolution, fallback, filters and params."""

import copy
import pytest
from subst.lib.errors import EvaluationError
from subst.lib.evaluator import (
    MISSING,
    Evaluator,
    attribute_get,
    evaluate,
    index_parse,
    path_resolve,
)
from subst.lib.parser import parse
from subst.lib.tokenizer import tokenize
from subst.models.dataModel import ContextRef, FilterCall, ParamLiteral


class Person:
    gender = "M"
    first_name = "Bob"
    last_name = "Johnson"

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def missing(self) -> str:
        raise AttributeError("not set")

    @property
    def broken(self) -> str:
        raise ValueError("getter exploded")


def run(template: str, context=None, filters=None) -> str:
    return evaluate(parse(tokenize(template)), context or {}, filters or {})


def test_attribute_get_reads_mappings_sequences_and_objects():
    assert attribute_get({"a": 1}, "a") == 1
    assert attribute_get({"a": 1}, "b") is MISSING
    assert attribute_get(["x", "y"], "1") == "y"
    assert attribute_get(["x", "y"], "-1") == "y"
    assert attribute_get(["x", "y"], "2") is MISSING
    assert attribute_get("text", "0") is MISSING
    assert attribute_get(Person(), "name") == "Bob Johnson"
    assert attribute_get(Person(), "missing") is MISSING
    assert attribute_get(None, "anything") is MISSING


def test_attribute_get_wraps_failing_getters():
    with pytest.raises(EvaluationError, match="getter exploded") as error:
        attribute_get(Person(), "broken")
    assert isinstance(error.value.__cause__, ValueError)


def test_attribute_get_ignores_malformed_indexes():
    items = ["x", "y"]
    assert index_parse("-1") == -1
    assert index_parse("--1") is None
    assert index_parse("²") is None
    assert attribute_get(items, "--1") is MISSING
    assert attribute_get(items, "²") is MISSING
    assert run("{items.--1}", {"items": items}) == "{items.--1}"
    assert run("{items.²}", {"items": items}) == "{items.²}"


def test_attribute_get_hides_private_attributes():
    def greet() -> str:
        return "hi"

    assert attribute_get(greet, "__globals__") is MISSING
    assert attribute_get(Person(), "__class__") is MISSING
    assert attribute_get({"_id": 7}, "_id") == 7
    assert run("{f.__globals__}", {"f": greet}) == "{f.__globals__}"
    assert run("{p._secret}", {"p": Person()}) == "{p._secret}"


def test_path_resolve():
    context = {"team": {"members": [Person()]}, "none": None}
    assert path_resolve(context, ("team", "members", "0", "name")) == "Bob Johnson"
    assert path_resolve(context, ("team", "leader")) is MISSING
    assert path_resolve(context, ("none",)) is MISSING
    assert path_resolve(context, ("none", "deeper")) is MISSING


def test_falsy_values_resolve():
    assert run("{zero}/{no}/{empty}.", {"zero": 0, "no": False, "empty": ""}) == (
        "0/false/."
    )


def test_unresolved_variable_renders_its_source():
    assert run("I am so {mood}.") == "I am so {mood}."
    assert run("{ person.age |upper}", {"person": Person()}) == "{ person.age }"


def test_unresolved_variable_skips_its_filters():
    assert run("{mood|nope}") == "{mood}"


def test_objects_and_getters():
    assert run("His name is {person.name}.", {"person": Person()}) == (
        "His name is Bob Johnson."
    )


def test_filters_apply_left_to_right():
    filters = {
        "mod": lambda value: (value - 10) // 2,
        "enough": lambda mod: "enough" if mod >= 0 else "not enough",
    }
    assert run("{STR|mod|enough}", {"STR": 10}, filters) == "enough"
    assert run("{STR|mod|enough}", {"STR": 7}, filters) == "not enough"


def test_filter_receives_the_object_itself():
    filters = {"prp": lambda person: "he" if person.gender == "M" else "she"}
    assert run("{person|prp}", {"person": Person()}, filters) == "he"


def test_group_filters_receive_rendered_text():
    seen = []

    def spy(text):
        seen.append(text)
        return text

    assert run("[a {b} c|spy]", {"b": 1}, {"spy": spy}) == "a 1 c"
    assert seen == ["a 1 c"]


def test_group_filter_returning_none_renders_empty():
    assert run("[gone|drop]", filters={"drop": lambda text: None}) == ""


def test_param_resolution():
    evaluator = Evaluator({"#": 10, "flag": None}, {})
    assert evaluator.param_resolve(ContextRef("#")) == 10
    assert evaluator.param_resolve(ContextRef("flag")) is None
    assert evaluator.param_resolve(ContextRef("absent")) == "absent"
    assert evaluator.param_resolve(ParamLiteral(False)) is False


def test_filter_without_param_gets_one_argument():
    calls = []

    def record(*args):
        calls.append(args)
        return "ok"

    run("{a|record}{a|record=1}", {"a": "x"}, {"record": record})
    assert calls == [("x",), ("x", 1)]


def test_unknown_filter():
    with pytest.raises(EvaluationError, match="Unknown filter: shout") as error:
        run("{a|shout}", {"a": "x"})
    assert error.value.filter_name == "shout"


def test_failing_filter_is_wrapped():
    with pytest.raises(EvaluationError, match="Filter 'div' failed") as error:
        run("{a|div}", {"a": 1}, {"div": lambda value: value / 0})
    assert isinstance(error.value.__cause__, ZeroDivisionError)


def test_filters_apply_with_no_calls_returns_value():
    assert Evaluator({}, {}).filters_apply(42, ()) == 42
    assert Evaluator({}, {"f": str}).filters_apply(42, (FilterCall("f"),)) == "42"


def test_context_and_filters_are_not_mutated():
    context = {"person": {"name": "Bobby"}, "#": 2}
    filters = {"s": lambda text, count: text if count == 1 else text + "s"}
    before = (copy.deepcopy(context), dict(filters))
    assert run("{person.name} has {#} [cat|s=#]", context, filters) == (
        "Bobby has 2 cats"
    )
    assert (context, filters) == before
