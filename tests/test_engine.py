"""
Tests for the query interpreter

Uses plain-value subroutines so the recursion can be checked without a
document evaluator.
"""

import logging

import pytest

from surgeon import (
    INVALID_VALUE,
    Instruction,
    InvalidDataError,
    InvalidValueSentinel,
    SurgeonError,
    create_query,
    query_document,
    query_document_async,
)


def add(evaluator, subject, parameters):
    return subject + int(parameters[0])


def double(evaluator, subject, parameters):
    return subject * 2


def spread(evaluator, subject, parameters):
    return list(subject)


def nothing(evaluator, subject, parameters):
    return INVALID_VALUE


def empty(evaluator, subject, parameters):
    return []


REGISTRY = {
    "add": add,
    "double": double,
    "spread": spread,
    "nothing": nothing,
    "empty": empty,
}


def run(instructions, root):
    return query_document(REGISTRY, None, create_query(instructions), root)


class TestLinearEvaluation:
    """Instructions compose left to right"""

    def test_empty_query_returns_root(self):
        root = object()
        assert query_document(REGISTRY, None, (), root) is root

    def test_left_to_right_composition(self):
        assert run("add 3 | double", 1) == 8
        assert run("double | add 3", 1) == 5

    def test_subroutine_receives_evaluator_and_parameters(self):
        seen = {}

        def spy(evaluator, subject, parameters):
            seen.update(evaluator=evaluator, subject=subject, parameters=parameters)
            return subject

        evaluator = object()
        query_document({"spy": spy}, evaluator, create_query("spy a b"), "root")
        assert seen == {"evaluator": evaluator, "subject": "root", "parameters": ("a", "b")}

    def test_deterministic(self):
        query = create_query(["spread", "add 1", "double"])
        first = query_document(REGISTRY, None, query, (1, 2, 3))
        second = query_document(REGISTRY, None, query, (1, 2, 3))
        assert first == second == [4, 6, 8]


class TestFanOut:
    """A list result fans the remaining instructions out per element"""

    def test_remaining_instructions_run_per_element(self):
        assert run(["spread", "add 10", "double"], (1, 2)) == [22, 24]

    def test_order_preserved(self):
        assert run(["spread", "double"], (3, 1, 2)) == [6, 2, 4]

    def test_fan_out_without_remaining_instructions(self):
        assert run("spread", (1, 2)) == [1, 2]

    def test_empty_list_yields_empty_list(self):
        assert run(["empty", "nothing"], 1) == []

    def test_nested_lists_fan_out_one_level_per_event(self):
        assert run(["spread", "spread", "double"], ((1, 2), (3,))) == [[2, 4], [6]]

    def test_list_of_lists_is_not_flattened(self):
        assert run("spread", ([1, 2], [3])) == [[1, 2], [3]]

    def test_sentinel_in_one_element_fails_whole_query(self):
        def odd_only(evaluator, subject, parameters):
            return subject if subject % 2 else INVALID_VALUE

        registry = dict(REGISTRY, odd=odd_only)
        with pytest.raises(InvalidDataError) as exc_info:
            query_document(registry, None, create_query("spread | odd"), (1, 2, 3))
        assert exc_info.value.input_value == 2


class TestAdopt:
    """adopt branches into named child queries"""

    def test_adopt_maps_names_to_child_results(self):
        result = run(["add 1", {"x": "double", "y": "add 5"}], 1)
        assert result == {"x": 4, "y": 7}

    def test_adopt_preserves_key_order(self):
        result = run({"b": "double", "a": "add 1", "c": []}, 2)
        assert list(result.keys()) == ["b", "a", "c"]
        assert result["c"] == 2

    def test_adopt_with_no_keys(self):
        assert run({}, 1) == {}

    def test_branches_are_independent(self):
        result = run({"first": "add 1 | double", "second": "double"}, 3)
        assert result == {"first": 8, "second": 6}

    def test_nested_adopt(self):
        result = run({"outer": ["add 1", {"inner": "double", "same": []}]}, 1)
        assert result == {"outer": {"inner": 4, "same": 2}}

    def test_adopt_inside_fan_out(self):
        result = run(["spread", {"value": [], "twice": "double"}], (1, 2))
        assert result == [{"value": 1, "twice": 2}, {"value": 2, "twice": 4}]

    def test_instructions_after_adopt_are_ignored(self, caplog):
        query = create_query([{"x": "double"}, "nothing"])
        with caplog.at_level(logging.WARNING, logger="surgeon.engine"):
            logging.getLogger("surgeon.engine").propagate = True
            try:
                result = query_document(REGISTRY, None, query, 2)
            finally:
                logging.getLogger("surgeon.engine").propagate = False
        assert result == {"x": 4}
        assert "Ignoring 1 instruction(s) after adopt" in caplog.text

    def test_failing_branch_fails_whole_query(self):
        calls = []

        def record(evaluator, subject, parameters):
            calls.append(subject)
            return subject

        registry = dict(REGISTRY, record=record)
        query = create_query({"ok": "double", "bad": "nothing", "after": "record"})
        with pytest.raises(InvalidDataError) as exc_info:
            query_document(registry, None, query, 1)
        assert exc_info.value.input_value == 1
        assert calls == []

    def test_adopt_requires_exactly_one_parameter(self):
        with pytest.raises(SurgeonError, match="Unexpected parameter length"):
            query_document(REGISTRY, None, (Instruction("adopt", ()),), 1)
        with pytest.raises(SurgeonError, match="Unexpected parameter length"):
            query_document(REGISTRY, None, (Instruction("adopt", ({}, {})),), 1)

    def test_adopt_requires_mapping(self):
        with pytest.raises(SurgeonError, match="mapping"):
            query_document(REGISTRY, None, (Instruction("adopt", ("double",)),), 1)

    def test_adopt_errors_are_not_data_errors(self):
        with pytest.raises(SurgeonError) as exc_info:
            query_document(REGISTRY, None, (Instruction("adopt", ()),), 1)
        assert not isinstance(exc_info.value, InvalidDataError)


class TestErrors:
    """Structural errors and the sentinel protocol"""

    def test_unknown_subroutine(self):
        with pytest.raises(SurgeonError, match="Subroutine does not exist"):
            run("missing", 1)

    def test_unknown_subroutine_stops_evaluation(self):
        calls = []

        def record(evaluator, subject, parameters):
            calls.append(subject)
            return subject

        registry = {"record": record}
        with pytest.raises(SurgeonError):
            query_document(registry, None, create_query("record | missing | record"), 1)
        assert calls == [1]

    def test_sentinel_raises_invalid_data_error_with_input(self):
        with pytest.raises(InvalidDataError) as exc_info:
            run("add 1 | nothing | double", 1)
        assert exc_info.value.input_value == 2
        assert exc_info.value.sentinel is INVALID_VALUE

    def test_new_sentinel_instance_is_the_same_marker(self):
        registry = {"fresh": lambda evaluator, subject, parameters: InvalidValueSentinel()}
        with pytest.raises(InvalidDataError):
            query_document(registry, None, create_query("fresh"), 1)

    def test_invalid_data_error_is_a_surgeon_error(self):
        assert issubclass(InvalidDataError, SurgeonError)

    def test_unclassified_errors_propagate_unchanged(self):
        def broken(evaluator, subject, parameters):
            raise KeyError("boom")

        with pytest.raises(KeyError):
            query_document({"broken": broken}, None, create_query("broken"), 1)

    def test_sync_engine_rejects_awaitables(self):
        async def later(evaluator, subject, parameters):
            return subject

        with pytest.raises(SurgeonError, match="awaitable"):
            query_document({"later": later}, None, create_query("later"), 1)


class TestAsyncEngine:
    """query_document_async mirrors the sync engine"""

    @pytest.mark.asyncio
    async def test_awaits_async_subroutines(self):
        async def add_async(evaluator, subject, parameters):
            return subject + int(parameters[0])

        registry = dict(REGISTRY, add_async=add_async)
        result = await query_document_async(registry, None, create_query("add_async 2 | double"), 1)
        assert result == 6

    @pytest.mark.asyncio
    async def test_fan_out_and_adopt(self):
        query = create_query(["spread", {"v": [], "d": "double"}])
        result = await query_document_async(REGISTRY, None, query, (1, 2))
        assert result == [{"v": 1, "d": 2}, {"v": 2, "d": 4}]

    @pytest.mark.asyncio
    async def test_async_sentinel(self):
        async def nothing_async(evaluator, subject, parameters):
            return INVALID_VALUE

        with pytest.raises(InvalidDataError) as exc_info:
            await query_document_async({"n": nothing_async}, None, create_query("n"), "root")
        assert exc_info.value.input_value == "root"

    @pytest.mark.asyncio
    async def test_async_unknown_subroutine(self):
        with pytest.raises(SurgeonError, match="Subroutine does not exist"):
            await query_document_async(REGISTRY, None, create_query("missing"), 1)

    @pytest.mark.asyncio
    async def test_async_empty_query(self):
        assert await query_document_async(REGISTRY, None, (), "root") == "root"

    @pytest.mark.asyncio
    async def test_async_failing_branch_fails_whole_query(self):
        calls = []

        async def record(evaluator, subject, parameters):
            calls.append(subject)
            return subject

        registry = dict(REGISTRY, record=record)
        query = create_query({"ok": "double", "bad": "nothing", "after": "record"})
        with pytest.raises(InvalidDataError) as exc_info:
            await query_document_async(registry, None, query, 1)
        assert exc_info.value.input_value == 1
        assert calls == []
