from __future__ import annotations

import pytest

from stubwork.actions import Compute, Return
from stubwork.exceptions import IncompleteStubError, StubworkError
from stubwork.matchers import Exact, anything, instance_of
from stubwork.stub import Stub, describe


@pytest.mark.parametrize(
    "args", [(), ("a",), ("a", "b", "c"), (None, 1)]
)
def test_stub_without_matchers_accepts_any_call(args) -> None:
    assert Stub("fn").and_return(1).matches_call(args)


@pytest.mark.parametrize("args", [(), ("a",), ("a", "b", "c")])
def test_stub_with_two_matchers_rejects_other_arities(args) -> None:
    stub = Stub("fn").with_args(anything(), anything())
    assert not stub.matches_call(args)


def test_with_args_appends_across_calls() -> None:
    stub = Stub("fn").with_args("a").with_args(instance_of(int))
    assert stub.matchers[0] == Exact("a")
    assert stub.matches_call(["a", 2])
    assert not stub.matches_call(["a", "2"])


def test_return_action_ignores_arguments() -> None:
    stub = Stub("fn").and_return("value")
    assert stub.execute(["anything", 1]) == "value"
    assert isinstance(stub.action, Return)


def test_compute_action_receives_argument_list() -> None:
    received = []

    def closure(args):
        received.append(args)
        return sum(args)

    stub = Stub("add").and_do(closure)
    assert stub.execute((2, 3)) == 5
    assert received == [[2, 3]]
    assert isinstance(stub.action, Compute)


def test_last_action_wins() -> None:
    stub = Stub("fn").and_return("first")
    stub.and_do(lambda args: "second")
    assert stub.execute([]) == "second"
    stub.set_action(Return("third"))
    assert stub.execute([]) == "third"


def test_incomplete_stub_raises_configuration_error() -> None:
    stub = Stub("checkout").with_args(1)
    assert not stub.is_complete
    with pytest.raises(IncompleteStubError, match="checkout") as info:
        stub.execute([1])
    assert not isinstance(info.value, StubworkError)


def test_describe_lists_function_arguments_and_action() -> None:
    stub = Stub("greet").with_args("Alice", anything()).and_return("Hi")
    assert describe(stub) == (
        "Stub(function: <greet>, args: <<'Alice'>, <<any>>>, "
        "returnValue: <and_return('Hi')>)"
    )
    assert "returnValue: <nil>" in str(Stub("greet"))
