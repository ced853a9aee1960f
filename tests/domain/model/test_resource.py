from __future__ import annotations

import pytest

from tests.helpers.resources import Widget
from zappy.domain.errors import InvalidActionError
from zappy.domain.model import ResourceCollection, RunContext


def test_resource_defaults_action_and_rejects_unknown_actions() -> None:
    assert Widget(name="a").action == "create"

    with pytest.raises(InvalidActionError, match="does not allow action 'explode'"):
        Widget(name="a", action="explode")


def test_resource_string_form_uses_resource_name() -> None:
    assert str(Widget(name="a")) == "widget[a]"


def test_run_action_nothing_is_a_no_op(context: RunContext) -> None:
    Widget(name="a", action="nothing").run_action(context)

    assert Widget.journal == []
    assert not context.report.updated


def test_run_action_overrides_declared_action(context: RunContext) -> None:
    Widget(name="a").run_action(context, "delete")

    assert Widget.journal == [("a", "delete")]
    assert [record.description for record in context.report.records] == ["delete widget a"]


def test_converge_by_skips_block_in_why_run() -> None:
    context = RunContext(why_run=True)
    widget = Widget(name="a")

    widget.run_action(context)

    assert Widget.journal == []
    (record,) = context.report.records_for(widget)
    assert record.why_run


def test_collection_iterates_snapshot_and_finds_by_type() -> None:
    collection = ResourceCollection([Widget(name="a")])
    seen = []
    for resource in collection:
        seen.append(resource.name)
        if len(collection) == 1:
            collection.append(Widget(name="b"))

    assert seen == ["a"]
    assert len(collection) == 2
    assert collection.find(Widget, "b") is collection[1]
    assert collection.find(Widget, "missing") is None
    assert [resource.name for resource in collection[1:]] == ["b"]
