"""Tests for block routing into scopes."""

from macrodoc.collector import Collector


def test_scope_block_opens_scope():
    collector = Collector()
    collector.add_block(["@scope", "@name Geom", "@brief Geometry"])

    assert list(collector.scopes) == ["Geom"]
    assert collector.current_scope is collector.scopes["Geom"]
    assert collector.current_scope.brief == "Geometry"


def test_items_attach_to_current_scope():
    collector = Collector().collect([
        ["@scope", "@name A", "@brief a"],
        ["@name one", "@brief 1"],
        ["@scope", "@name B", "@brief b"],
        ["@name two", "@brief 2"],
    ])

    assert list(collector.scopes["A"].items) == ["one"]
    assert list(collector.scopes["B"].items) == ["two"]
    assert collector.total_items == 2


def test_blocks_before_first_scope_are_dropped():
    collector = Collector().collect([
        ["@name early", "@brief too early"],
        ["@scope", "@name A", "@brief a"],
    ])

    assert collector.scopes["A"].items == {}
    assert collector.orphan_blocks == 1


def test_duplicate_item_last_one_wins():
    collector = Collector().collect([
        ["@scope", "@name A", "@brief a"],
        ["@name x", "@brief first"],
        ["@name x", "@brief second"],
    ])

    assert collector.scopes["A"].items["x"].brief == "second"


def test_duplicate_scope_last_one_wins():
    collector = Collector().collect([
        ["@scope", "@name A", "@brief first"],
        ["@name x", "@brief X"],
        ["@scope", "@name A", "@brief second"],
    ])

    assert collector.scopes["A"].brief == "second"
    assert collector.scopes["A"].items == {}


def test_sorted_scopes():
    collector = Collector().collect([
        ["@scope", "@name Zed", "@brief z"],
        ["@scope", "@name Alpha", "@brief a"],
    ])

    assert [name for name, _ in collector.sorted_scopes()] == ["Alpha", "Zed"]
